# errors.py
# Exception taxonomy for the planner, plus the HTTP status each one maps to.


class PlannerError(Exception):
    """Base class for every error raised by the planner."""

    pass


class PlannerInputError(PlannerError):
    """Recoverable input validation error; state is left unchanged."""

    pass


class InvalidTimeError(PlannerInputError):
    """Raised when a time is not a valid HH:MM between 00:00 and 23:59."""

    pass


class InvalidDayError(PlannerInputError):
    """Raised when a session day is not one of Mon..Sun."""

    pass


class InvalidSessionError(PlannerInputError):
    """Raised when a course is given something other than a Session record."""

    pass


class EndNotAfterStartError(PlannerInputError):
    """Raised when a session ends at or before its start."""

    pass


class MissingFieldError(PlannerInputError):
    """Raised when a course is missing its ID or name."""

    pass


class NoSessionsError(PlannerInputError):
    """Raised when a course is added without any session."""

    pass


class DuplicateIdError(PlannerInputError):
    """Raised when a course ID is already in the course list."""

    pass


class CourseLimitExceededError(PlannerInputError):
    """Raised when adding a course would exceed the course limit."""

    pass


class EmptyCourseListError(PlannerInputError):
    """Raised when timetables are computed with no courses."""

    pass


class CourseNotFoundError(PlannerInputError):
    """Raised when a course index does not exist."""

    pass


class InvalidSelectionError(PlannerInputError):
    """Raised when a timetable or draft session index is out of range."""

    pass


class MalformedGraphError(PlannerError):
    """Raised when a conflict graph is asymmetric, self-looping or too large.

    This is an internal invariant failure, never a user mistake.
    """

    pass


# Mapping of custom exceptions to HTTP status codes
CUSTOM_ERRORS = {
    InvalidTimeError: 400,
    InvalidDayError: 400,
    EndNotAfterStartError: 400,
    InvalidSessionError: 400,
    MissingFieldError: 400,
    NoSessionsError: 400,
    DuplicateIdError: 400,
    CourseLimitExceededError: 409,
    EmptyCourseListError: 400,
    CourseNotFoundError: 404,
    InvalidSelectionError: 404,
    MalformedGraphError: 500,
}


def status_for(error: PlannerError) -> int:
    """Return the HTTP status for an error, walking up its class hierarchy."""
    for cls in type(error).__mro__:
        if cls in CUSTOM_ERRORS:
            return CUSTOM_ERRORS[cls]
    return 400 if isinstance(error, PlannerInputError) else 500
