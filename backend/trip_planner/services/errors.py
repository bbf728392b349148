"""
Error taxonomy for schedule and attendee operations.

Services raise these; routes turn them into HTTPException using
``status_code`` and ``str(error)`` ("<CODE>: <message>").
"""

from enum import Enum


class ErrorCode(str, Enum):
    MEMBER_NOT_FOUND = "MEMBER_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    SCHEDULE_NOT_FOUND = "SCHEDULE_NOT_FOUND"
    PLACE_NOT_FOUND = "PLACE_NOT_FOUND"
    AUTHOR_NOT_FOUND = "AUTHOR_NOT_FOUND"

    FORBIDDEN_ACCESS_SCHEDULE = "FORBIDDEN_ACCESS_SCHEDULE"
    FORBIDDEN_EDIT_SCHEDULE = "FORBIDDEN_EDIT_SCHEDULE"
    FORBIDDEN_DELETE_SCHEDULE = "FORBIDDEN_DELETE_SCHEDULE"
    FORBIDDEN_SHARE_ATTENDEE = "FORBIDDEN_SHARE_ATTENDEE"
    FORBIDDEN_REMOVE_ATTENDEE = "FORBIDDEN_REMOVE_ATTENDEE"

    ALREADY_ATTENDEE = "ALREADY_ATTENDEE"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    ErrorCode.MEMBER_NOT_FOUND: "Member not found",
    ErrorCode.USER_NOT_FOUND: "User not found",
    ErrorCode.SCHEDULE_NOT_FOUND: "Schedule not found",
    ErrorCode.PLACE_NOT_FOUND: "Place not found",
    ErrorCode.AUTHOR_NOT_FOUND: "Schedule author not found",
    ErrorCode.FORBIDDEN_ACCESS_SCHEDULE: "No access to this schedule",
    ErrorCode.FORBIDDEN_EDIT_SCHEDULE: "No permission to edit this schedule",
    ErrorCode.FORBIDDEN_DELETE_SCHEDULE: "Only the author can delete this schedule",
    ErrorCode.FORBIDDEN_SHARE_ATTENDEE: "Only the author can share this schedule",
    ErrorCode.FORBIDDEN_REMOVE_ATTENDEE: "The author cannot leave the schedule",
    ErrorCode.ALREADY_ATTENDEE: "User already attends this schedule",
}


class TripPlannerError(Exception):
    """Base exception for schedule/attendee rule violations"""

    status_code = 400

    def __init__(self, code: ErrorCode):
        self.code = code
        super().__init__(f"{code.value}: {code.message}")


class DataNotFoundError(TripPlannerError):
    """Referenced member, schedule, place or author does not exist"""

    status_code = 404


class ForbiddenScheduleError(TripPlannerError):
    """Caller lacks the role or permission for the action"""

    status_code = 403


class AlreadyAttendeeError(TripPlannerError):
    """Member already attends the schedule"""

    status_code = 409

    def __init__(self, code: ErrorCode = ErrorCode.ALREADY_ATTENDEE):
        super().__init__(code)
