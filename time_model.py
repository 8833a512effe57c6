# time_model.py
# Immutable session/course records and the HH:MM <-> minute-of-day conversions.

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Tuple

from config import MINUTES_PER_DAY
from errors import (
    EndNotAfterStartError,
    InvalidDayError,
    InvalidSessionError,
    InvalidTimeError,
    MissingFieldError,
    NoSessionsError,
)

__all__ = [
    "Day", "Session", "Course",
    "parse_time", "format_time", "sessions_overlap",
    "make_session", "make_course",
]

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$", re.ASCII)


class Day(str, Enum):
    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"
    SUN = "Sun"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Session:
    """One weekly meeting: a day and a half-open [start, end) minute interval."""

    day: Day
    start: int
    end: int

    def __post_init__(self):
        object.__setattr__(self, "day", parse_day(self.day))
        for minutes in (self.start, self.end):
            if isinstance(minutes, bool) or not isinstance(minutes, int) or not 0 <= minutes < MINUTES_PER_DAY:
                raise InvalidTimeError(f"Minute of day must be an int in [0, {MINUTES_PER_DAY}), got {minutes!r}")
        if self.end <= self.start:
            raise EndNotAfterStartError("End time must be after start")

    def label(self) -> str:
        return f"{self.day} {format_time(self.start)}-{format_time(self.end)}"


@dataclass(frozen=True)
class Course:
    """A candidate course. Build through make_course so fields are validated."""

    id: str
    name: str
    faculty: str = ""
    sessions: Tuple[Session, ...] = field(default_factory=tuple)


def parse_time(text: str) -> int:
    # Converts "HH:MM" into minutes since midnight.
    m = _TIME_RE.match(str(text).strip()) if text is not None else None
    if not m:
        raise InvalidTimeError(f"Invalid time: {text!r}")
    hh, mm = int(m.group(1)), int(m.group(2))
    if not (0 <= hh <= 23 and 0 <= mm <= 59):
        raise InvalidTimeError(f"Invalid time: {text!r}")
    return hh * 60 + mm


def format_time(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def sessions_overlap(a: Session, b: Session) -> bool:
    # Half-open intervals: sessions that only touch at an endpoint do not clash.
    return a.day == b.day and a.start < b.end and b.start < a.end


def parse_day(day) -> Day:
    try:
        return Day(str(day).strip())
    except ValueError:
        raise InvalidDayError(f"Invalid day: {day!r} (expected one of Mon..Sun)") from None


def make_session(day, start_text: str, end_text: str) -> Session:
    """Validate raw form input and build a Session.

    Raises InvalidDayError, InvalidTimeError or EndNotAfterStartError.
    """
    d = parse_day(day)
    start = parse_time(start_text)
    end = parse_time(end_text)
    if end <= start:
        raise EndNotAfterStartError("End time must be after start")
    return Session(d, start, end)


def make_course(
    course_id: str,
    name: str,
    faculty: Optional[str] = None,
    sessions: Iterable[Session] = (),
) -> Course:
    """Validate raw fields and build a Course with trimmed text."""
    cid = (course_id or "").strip()
    cname = (name or "").strip()
    if not cid or not cname:
        raise MissingFieldError("Course ID and name required")

    sessions = tuple(sessions)
    if not sessions:
        raise NoSessionsError("Add at least one session")
    for s in sessions:
        if not isinstance(s, Session):
            raise InvalidSessionError(f"Not a session: {s!r}")

    return Course(cid, cname, (faculty or "").strip(), sessions)
