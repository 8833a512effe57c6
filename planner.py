# planner.py
# Explicit application state: pending course draft, course list, computed
# timetables and the active selection. Every transition runs under one lock,
# and any change to the course list drops the graph, results and selection
# in the same step.

import threading
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from config import MAX_COURSES
from csv_export import timetable_csv
from errors import (
    CourseLimitExceededError,
    CourseNotFoundError,
    DuplicateIdError,
    EmptyCourseListError,
    InvalidSelectionError,
    MissingFieldError,
)
from logger import logger
from schedule_finder import ConflictGraph, IndependentSet, compute_timetables
from time_model import Course, Session, make_course, make_session

__all__ = ["Planner", "PlannerSnapshot"]


@dataclass(frozen=True)
class PlannerSnapshot:
    """Read-only view handed to the graph view and exporters."""

    courses: Tuple[Course, ...]
    conflict: ConflictGraph
    results: Tuple[IndependentSet, ...]
    selected_index: Optional[int]

    @property
    def selected_set(self) -> Optional[IndependentSet]:
        if self.selected_index is None:
            return None
        return self.results[self.selected_index]


class Planner:

    def __init__(self, max_courses: int = MAX_COURSES):
        self.max_courses = max_courses
        self._lock = threading.RLock()
        self._courses: Tuple[Course, ...] = ()
        self._draft: Tuple[Session, ...] = ()
        self._conflict: ConflictGraph = ()
        self._results: Tuple[IndependentSet, ...] = ()
        self._selected: Optional[int] = None

    # ----- read access ------------------------------------------------------

    @property
    def courses(self) -> Tuple[Course, ...]:
        return self._courses

    @property
    def draft(self) -> Tuple[Session, ...]:
        return self._draft

    @property
    def conflict(self) -> ConflictGraph:
        return self._conflict

    @property
    def results(self) -> Tuple[IndependentSet, ...]:
        return self._results

    @property
    def selected_index(self) -> Optional[int]:
        return self._selected

    @property
    def selected_set(self) -> Optional[IndependentSet]:
        return self.snapshot().selected_set

    def snapshot(self) -> PlannerSnapshot:
        with self._lock:
            return PlannerSnapshot(self._courses, self._conflict, self._results, self._selected)

    def filter_courses(self, query: str = "") -> List[Tuple[int, Course]]:
        # Case-insensitive match on ID, name or faculty; indices stay the real ones.
        indexed = list(enumerate(self._courses))
        q = (query or "").strip().lower()
        if not q:
            return indexed
        return [
            (i, c) for i, c in indexed
            if q in c.id.lower() or q in c.name.lower() or q in c.faculty.lower()
        ]

    # ----- transitions ------------------------------------------------------

    def _set_courses(self, courses: Tuple[Course, ...]) -> None:
        # The only way the course list changes: results can never outlive it.
        self._courses = courses
        self._conflict = ()
        self._results = ()
        self._selected = None

    def add_session(self, day, start_text: str, end_text: str) -> Session:
        session = make_session(day, start_text, end_text)
        with self._lock:
            self._draft = self._draft + (session,)
        return session

    def remove_session(self, index: int) -> Session:
        with self._lock:
            if not 0 <= index < len(self._draft):
                raise InvalidSelectionError(f"No pending session at position {index}")
            removed = self._draft[index]
            self._draft = self._draft[:index] + self._draft[index + 1:]
        return removed

    def reset_draft(self) -> None:
        with self._lock:
            self._draft = ()

    def add_course(
        self,
        course_id: str,
        name: str,
        faculty: Optional[str] = None,
        sessions: Optional[Iterable[Session]] = None,
    ) -> Tuple[int, Course]:
        """Add a course and return its index together with the stored record.

        Uses the pending draft sessions when ``sessions`` is None. A rejected
        course leaves the course list, draft and results untouched.
        """
        with self._lock:
            if not (course_id or "").strip() or not (name or "").strip():
                raise MissingFieldError("Course ID and name required")
            if len(self._courses) >= self.max_courses:
                logger.warning("Rejected course %r: limit of %d reached", course_id, self.max_courses)
                raise CourseLimitExceededError(f"Maximum {self.max_courses} courses")

            use_draft = sessions is None
            course = make_course(course_id, name, faculty, self._draft if use_draft else sessions)

            if any(c.id == course.id for c in self._courses):
                logger.warning("Rejected course %r: duplicate ID", course.id)
                raise DuplicateIdError(f"Duplicate Course ID: {course.id}")

            self._set_courses(self._courses + (course,))
            if use_draft:
                self._draft = ()
            index = len(self._courses) - 1

        logger.info("Added course %s (%s) at index %d", course.id, course.name, index)
        return index, course

    def remove_course(self, index: int) -> Course:
        # Removing compacts the list, so every later course moves down one index.
        with self._lock:
            if not 0 <= index < len(self._courses):
                raise CourseNotFoundError(f"No course at index {index}")
            removed = self._courses[index]
            self._set_courses(self._courses[:index] + self._courses[index + 1:])

        logger.info("Removed course %s; %d course(s) remain", removed.id, len(self._courses))
        return removed

    def clear(self) -> None:
        with self._lock:
            self._set_courses(())
            self._draft = ()
        logger.info("Cleared all courses and results")

    def compute(self) -> Tuple[IndependentSet, ...]:
        with self._lock:
            try:
                conflict, ranked = compute_timetables(self._courses)
            except EmptyCourseListError:
                # nothing to compute from; drop whatever was shown before
                self._set_courses(self._courses)
                raise
            self._conflict = conflict
            self._results = ranked
            self._selected = 0
            return ranked

    def select(self, index: int) -> IndependentSet:
        with self._lock:
            if not self._results:
                raise InvalidSelectionError("No timetables computed")
            if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._results):
                raise InvalidSelectionError(
                    f"Timetable index {index!r} out of range 0..{len(self._results) - 1}"
                )
            self._selected = index
            return self._results[index]

    # ----- export -----------------------------------------------------------

    def export_csv(self, rank: int) -> str:
        """CSV text for the timetable shown to users as number ``rank`` (1-based)."""
        snap = self.snapshot()
        if not 1 <= rank <= len(snap.results):
            raise InvalidSelectionError(f"No timetable number {rank}")
        return timetable_csv(snap.courses, snap.conflict, snap.results[rank - 1])
