# schedule_finder.py
# Enumerates every maximal conflict-free course combination using Bron-Kerbosch
# with pivoting on the compatibility (complement) graph, then ranks them.

from typing import Dict, FrozenSet, Iterable, List, Sequence, Set, Tuple

from config import KEY_DELIMITER, MAX_COURSES
from errors import EmptyCourseListError, MalformedGraphError
from logger import logger
from time_model import Course, sessions_overlap

__all__ = [
    "ConflictGraph", "IndependentSet",
    "courses_conflict", "build_conflict_graph", "check_conflict_graph",
    "compatibility_sets", "maximal_independent_sets",
    "canonical_key", "rank_results", "compute_timetables",
    "conflict_pairs", "excluded_conflicts",
]

ConflictGraph = Tuple[FrozenSet[int], ...]
IndependentSet = FrozenSet[int]


def courses_conflict(a: Course, b: Course) -> bool:
    # Two courses clash if any pair of their sessions overlaps.
    return any(sessions_overlap(sa, sb) for sa in a.sessions for sb in b.sessions)


def build_conflict_graph(courses: Sequence[Course]) -> ConflictGraph:
    # Vertex i is the course at position i; an edge is a time conflict.
    n = len(courses)
    conflict: List[Set[int]] = [set() for _ in range(n)]

    for i in range(n):
        for j in range(i + 1, n):
            if courses_conflict(courses[i], courses[j]):
                conflict[i].add(j)
                conflict[j].add(i)

    return tuple(frozenset(c) for c in conflict)


def check_conflict_graph(conflict: Sequence[Iterable[int]]) -> None:
    """Reject a graph the enumerator cannot trust.

    Raises MalformedGraphError on a self loop, an out-of-range vertex, an
    asymmetric edge, or more vertices than the course limit allows.
    """
    n = len(conflict)
    if n > MAX_COURSES:
        raise MalformedGraphError(f"Conflict graph has {n} vertices, limit is {MAX_COURSES}")

    for i, neighbours in enumerate(conflict):
        for j in neighbours:
            if j == i:
                raise MalformedGraphError(f"Vertex {i} conflicts with itself")
            if not 0 <= j < n:
                raise MalformedGraphError(f"Vertex {i} references unknown vertex {j}")
            if i not in conflict[j]:
                raise MalformedGraphError(f"Edge {i}-{j} is not symmetric")


def compatibility_sets(conflict: Sequence[Iterable[int]]) -> Tuple[FrozenSet[int], ...]:
    # Complement graph: i is compatible with every other vertex it does not clash with.
    n = len(conflict)
    return tuple(
        frozenset(j for j in range(n) if j != i and j not in conflict[i])
        for i in range(n)
    )


def maximal_independent_sets(conflict: Sequence[Iterable[int]]) -> List[IndependentSet]:
    # Return every maximal independent set of the conflict graph, i.e. every
    # maximal clique of its compatibility graph.
    check_conflict_graph(conflict)
    compat = compatibility_sets(conflict)
    results: List[IndependentSet] = []

    def bron(r: FrozenSet[int], p: FrozenSet[int], x: FrozenSet[int]) -> None:
        if not p and not x:
            # Base case: nothing can extend R and nothing explored dominates it.
            results.append(r)
            return

        # Pivot: vertex of P|X compatible with the most candidates, lowest index on ties.
        pivot, best = None, -1
        for u in sorted(p | x):
            score = len(p & compat[u])
            if score > best:
                pivot, best = u, score

        # Vertices compatible with the pivot are reached through the pivot's branch.
        candidates = sorted(p - compat[pivot])

        # P and X are rebound locally; callees receive their own frozen copies.
        for v in candidates:
            bron(r | {v}, p & compat[v], x & compat[v])
            p = p - {v}
            x = x | {v}

    bron(frozenset(), frozenset(range(len(conflict))), frozenset())
    return results


def canonical_key(s: Iterable[int]) -> str:
    return KEY_DELIMITER.join(str(i) for i in sorted(s))


def rank_results(sets: Iterable[IndependentSet]) -> Tuple[IndependentSet, ...]:
    # Largest first; equal sizes ordered by their canonical index string.
    return tuple(sorted(sets, key=lambda s: (-len(s), canonical_key(s))))


def compute_timetables(courses: Sequence[Course]) -> Tuple[ConflictGraph, Tuple[IndependentSet, ...]]:
    # Full recomputation: conflict graph plus the ranked maximal combinations.
    if not courses:
        raise EmptyCourseListError("Add at least one course")

    conflict = build_conflict_graph(courses)
    ranked = rank_results(maximal_independent_sets(conflict))

    logger.info(
        "Computed %d timetable(s) for %d course(s), %d conflict(s), best size %d",
        len(ranked), len(courses), len(conflict_pairs(conflict)), len(ranked[0]),
    )
    return conflict, ranked


def conflict_pairs(conflict: Sequence[Iterable[int]]) -> List[Tuple[int, int]]:
    # Each conflict edge once, as (i, j) with i < j.
    return [(i, j) for i, neighbours in enumerate(conflict) for j in sorted(neighbours) if i < j]


def excluded_conflicts(conflict: Sequence[Iterable[int]], included: Iterable[int]) -> Dict[int, List[int]]:
    # For every course left out, the included courses that pushed it out.
    chosen = set(included)
    return {
        i: sorted(j for j in conflict[i] if j in chosen)
        for i in range(len(conflict))
        if i not in chosen
    }
