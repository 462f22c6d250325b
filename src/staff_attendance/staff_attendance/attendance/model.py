from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, HalfDayType, TodayState


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one staff member's attendance for one calendar day."""

    attendance_id: int
    tenant_id: int
    staff_id: int
    attendance_date: date
    status: AttendanceStatus
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    is_late: bool = False
    late_minutes: int = 0
    half_day_type: Optional[HalfDayType] = None
    remarks: str = ""
    marked_by: Optional[int] = None
    marked_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    # Filled in by listings that join the staff directory.
    staff_name: Optional[str] = None
    employee_id: Optional[str] = None


@dataclass(frozen=True)
class AttendanceFilter:
    tenant_id: int
    staff_id: Optional[int] = None
    branch_id: Optional[int] = None
    department_id: Optional[int] = None
    status: Optional[AttendanceStatus] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    cursor: Optional[str] = None
    limit: Optional[int] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None


@dataclass(frozen=True)
class TodayAttendance:
    """Self-service view of today's record and which action is allowed next."""

    state: TodayState
    record: Optional[AttendanceRecord] = None

    @property
    def can_check_in(self) -> bool:
        return self.record is None or self.record.check_in_time is None

    @property
    def can_check_out(self) -> bool:
        return (
            self.record is not None
            and self.record.check_in_time is not None
            and self.record.check_out_time is None
        )

    @classmethod
    def of(cls, record: Optional[AttendanceRecord]) -> "TodayAttendance":
        if record is None or record.check_in_time is None:
            return cls(state=TodayState.NOT_MARKED, record=record)
        if record.check_out_time is None:
            return cls(state=TodayState.CHECKED_IN, record=record)
        return cls(state=TodayState.CHECKED_OUT, record=record)
