# graph_feed.py
# Read-only feed for the conflict-graph view: node colours and circle layout,
# plus how each edge relates to the timetable being viewed.

import math
from typing import Any, Dict, FrozenSet, Iterable, List, Tuple

from config import CANVAS_SIZE, NODE_PADDING, NODE_RADIUS, PALETTE
from schedule_finder import canonical_key, conflict_pairs, excluded_conflicts

__all__ = ["color_for_index", "node_positions", "classify_edge", "build_graph_feed"]


def color_for_index(i: int) -> Dict[str, str]:
    chip, background = PALETTE[i % len(PALETTE)]
    return {"background": background, "color": chip, "chip": chip}


def node_positions(n: int, canvas_size: int = CANVAS_SIZE) -> List[Tuple[float, float]]:
    # Evenly spaced on a circle, first node at the top, clockwise.
    radius = canvas_size / 2 - NODE_RADIUS - NODE_PADDING
    centre = canvas_size / 2
    positions = []
    for i in range(n):
        angle = (i / n) * 2 * math.pi - math.pi / 2
        positions.append((centre + radius * math.cos(angle), centre + radius * math.sin(angle)))
    return positions


def classify_edge(i: int, j: int, included: Iterable[int]) -> str:
    chosen = set(included)
    a, b = i in chosen, j in chosen
    if a and b:
        return "included"  # never happens for a valid timetable
    if a or b:
        return "critical"  # an included course pushed the other out
    return "minor"


def build_graph_feed(snapshot) -> Dict[str, Any]:
    """JSON-ready description of the conflict graph for one PlannerSnapshot."""
    courses = snapshot.courses
    chosen: FrozenSet[int] = snapshot.selected_set or frozenset()
    positions = node_positions(len(courses))

    nodes = []
    for i, course in enumerate(courses):
        x, y = positions[i]
        nodes.append({
            "index": i,
            "id": course.id,
            "name": course.name,
            "faculty": course.faculty,
            "sessions": [s.label() for s in course.sessions],
            "x": round(x, 2),
            "y": round(y, 2),
            "included": i in chosen,
            **color_for_index(i),
        })

    edges = [
        {"source": i, "target": j, "kind": classify_edge(i, j, chosen)}
        for i, j in conflict_pairs(snapshot.conflict)
    ]

    return {
        "computed": bool(snapshot.results),
        "nodes": nodes,
        "edges": edges,
        "selectedIndex": snapshot.selected_index,
        "selected": sorted(chosen),
        "selectedKey": canonical_key(chosen),
        "excluded": (
            {str(i): js for i, js in excluded_conflicts(snapshot.conflict, chosen).items()}
            if snapshot.results else {}
        ),
    }

