from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status of one attendance record (one staff member, one day)."""

    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half_day"
    ON_LEAVE = "on_leave"
    HOLIDAY = "holiday"


class HalfDayType(str, Enum):
    FIRST_HALF = "first_half"
    SECOND_HALF = "second_half"


class RegularizationStatus(str, Enum):
    """Regularization workflow: PENDING -> APPROVED | REJECTED (both terminal)."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# Statuses a staff member may ask for through a regularization request.
REGULARIZABLE_STATUSES = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.HALF_DAY})


class TodayState(str, Enum):
    NOT_MARKED = "not_marked"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
