from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..common.pagination import Page
from ..core.enums import AttendanceStatus, HalfDayType
from .model import AttendanceFilter, AttendanceRecord

# Columns a listing may be sorted by; anything else falls back to the default order.
SORTABLE_COLUMNS = frozenset({"attendance_date", "created_at", "updated_at", "marked_at", "status", "late_minutes"})


class AttendanceRepository(Protocol):
    """Attendance ledger storage.

    Self-service writes (check-in/check-out) only fill in blanks; `overwrite`
    is the HR path and replaces everything. Records are never deleted.
    """

    def get_by_id(self, *, tenant_id: int, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_staff_and_date(
        self, *, tenant_id: int, staff_id: int, attendance_date: date
    ) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        tenant_id: int,
        staff_id: int,
        attendance_date: date,
        status: AttendanceStatus,
        check_in_time: Optional[datetime] = None,
        check_out_time: Optional[datetime] = None,
        is_late: bool = False,
        late_minutes: int = 0,
        half_day_type: Optional[HalfDayType] = None,
        remarks: str = "",
        marked_by: Optional[int] = None,
        marked_at: Optional[datetime] = None,
    ) -> int:
        """Insert a new record; raises DuplicateAttendanceError if one already exists."""

        raise NotImplementedError

    def record_check_in(
        self,
        *,
        tenant_id: int,
        attendance_id: int,
        check_in_time: datetime,
        status: AttendanceStatus,
        half_day_type: Optional[HalfDayType],
        is_late: bool,
        late_minutes: int,
        remarks: str,
        marked_by: Optional[int],
        marked_at: datetime,
    ) -> bool:
        """Fill in the check-in of a record that has none; False if it already has one."""

        raise NotImplementedError

    def record_check_out(
        self, *, tenant_id: int, attendance_id: int, check_out_time: datetime, remarks: str
    ) -> bool:
        """Fill in the check-out of a record that has none; False if it already has one."""

        raise NotImplementedError

    def overwrite(
        self,
        *,
        tenant_id: int,
        attendance_id: int,
        status: AttendanceStatus,
        check_in_time: Optional[datetime],
        check_out_time: Optional[datetime],
        is_late: bool,
        late_minutes: int,
        half_day_type: Optional[HalfDayType],
        remarks: str,
        marked_by: Optional[int],
        marked_at: datetime,
    ) -> bool:
        raise NotImplementedError

    def apply_regularization(
        self, *, tenant_id: int, attendance_id: int, status: AttendanceStatus, remarks: str
    ) -> bool:
        """Replace only status and remarks; every other field is left as is."""

        raise NotImplementedError

    def list_records(self, query: AttendanceFilter) -> Page[AttendanceRecord]:
        raise NotImplementedError

    def list_for_period(
        self, *, tenant_id: int, staff_id: int, date_from: date, date_to: date
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
