import os
import tempfile

# Keep test runs from writing a log file into the project directory.
os.environ.setdefault("TIMETABLE_LOG_PATH", os.path.join(tempfile.gettempdir(), "timetable_test.log"))

import pytest

from planner import Planner
from time_model import make_course, make_session


def course(course_id, *slots, name=None, faculty=""):
    # slots are (day, start, end) text triples
    return make_course(course_id, name or f"Course {course_id}", faculty, [make_session(*s) for s in slots])


@pytest.fixture
def abc_courses():
    return [
        course("A", ("Mon", "09:00", "10:00")),
        course("B", ("Mon", "09:30", "10:30")),
        course("C", ("Tue", "09:00", "10:00")),
    ]


@pytest.fixture
def planner():
    return Planner()


@pytest.fixture
def abc_planner(planner, abc_courses):
    for c in abc_courses:
        planner.add_course(c.id, c.name, c.faculty, c.sessions)
    return planner
