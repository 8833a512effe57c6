# csv_export.py
# Renders one timetable as CSV text: the sessions of included courses, then
# each excluded course with the included courses it clashes with.

import csv
import io
from typing import Iterable, Sequence

from config import CSV_HEADER, EXCLUDED_HEADER
from time_model import Course, format_time

__all__ = ["timetable_csv", "csv_filename", "course_label"]


def course_label(course: Course) -> str:
    return f"{course.id} - {course.name}"


def csv_filename(rank: int) -> str:
    return f"timetable_{rank}.csv"


def timetable_csv(
    courses: Sequence[Course],
    conflict: Sequence[Iterable[int]],
    included: Iterable[int],
) -> str:
    """Build the CSV export for one timetable.

    Fields holding a comma, quote or newline are quoted with inner quotes
    doubled; every row ends with ``\\n``. Conflicts are looked up in
    ``conflict``, so it must have been computed from ``courses``.
    """
    chosen = sorted(set(included))
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")

    writer.writerow(CSV_HEADER)
    for i in chosen:
        c = courses[i]
        for s in c.sessions:
            writer.writerow([c.id, c.name, c.faculty, str(s.day), format_time(s.start), format_time(s.end)])

    buf.write("\n")
    writer.writerow(EXCLUDED_HEADER)
    for i, course in enumerate(courses):
        if i in chosen:
            continue
        clashes = [course_label(courses[j]) for j in sorted(conflict[i]) if j in chosen]
        writer.writerow([course_label(course), "; ".join(clashes)])

    return buf.getvalue()
