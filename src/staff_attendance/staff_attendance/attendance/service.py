from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.pagination import Page
from ..common.validators import require_id
from ..core.constants import REMARKS_SEPARATOR
from ..core.enums import AttendanceStatus, HalfDayType
from ..core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    AttendanceNotFoundError,
    DateRequiredError,
    DuplicateAttendanceError,
    FutureDateError,
    InvalidHalfDayTypeError,
    InvalidStatusError,
    NotCheckedInError,
    StaffIDRequiredError,
    StaffNotFoundError,
    TenantIDRequiredError,
)
from ..settings.resolver import SettingsResolver
from ..staff.model import Staff
from ..staff.repository import StaffDirectory
from .factory import LatenessStrategyFactory
from .model import AttendanceFilter, AttendanceRecord, TodayAttendance
from .repository import AttendanceRepository
from .strategies.base import LatenessDecision

logger = logging.getLogger(__name__)


def parse_status(value) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(str(value or "").strip().lower())
    except ValueError:
        raise InvalidStatusError()


def parse_half_day_type(value) -> Optional[HalfDayType]:
    """Empty means "not a half day"; anything else must be a known half."""
    if value is None or isinstance(value, HalfDayType):
        return value
    text = str(value).strip().lower()
    if not text:
        return None
    try:
        return HalfDayType(text)
    except ValueError:
        raise InvalidHalfDayTypeError()


def append_remarks(existing: str, extra: str) -> str:
    extra = (extra or "").strip()
    if not extra:
        return existing or ""
    if not existing:
        return extra
    return f"{existing}{REMARKS_SEPARATOR}{extra}"


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        staff: StaffDirectory,
        settings_resolver: SettingsResolver,
        *,
        strategy_factory: LatenessStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._staff = staff
        self._settings_resolver = settings_resolver
        self._factory = strategy_factory or LatenessStrategyFactory()

    def _require_staff(self, *, tenant_id: int, staff_id: int) -> Staff:
        staff = self._staff.get_by_id(tenant_id=tenant_id, staff_id=staff_id)
        if not staff:
            raise StaffNotFoundError()
        return staff

    def _lateness_for(self, staff: Staff, check_in_time: datetime) -> LatenessDecision:
        settings = self._settings_resolver.resolve(tenant_id=staff.tenant_id, branch_id=staff.branch_id)
        strategy = self._factory.for_settings(settings)
        return strategy.decide(check_in_time=check_in_time)

    def _reload(self, *, tenant_id: int, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(tenant_id=tenant_id, attendance_id=attendance_id)
        if not record:
            raise AttendanceNotFoundError()
        return record

    def check_in(
        self,
        *,
        tenant_id: int,
        staff_id: int,
        half_day_type: HalfDayType | str | None = None,
        remarks: str = "",
        marked_by: int | None = None,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        tenant_id = require_id(tenant_id, TenantIDRequiredError)
        staff_id = require_id(staff_id, StaffIDRequiredError)
        half_day = parse_half_day_type(half_day_type)

        now = now or now_local()
        today = now.date()

        staff = self._require_staff(tenant_id=tenant_id, staff_id=staff_id)

        existing = self._attendance.get_for_staff_and_date(tenant_id=tenant_id, staff_id=staff_id, attendance_date=today)
        if existing and existing.check_in_time is not None:
            raise AlreadyCheckedInError()

        decision = self._lateness_for(staff, now)
        status = AttendanceStatus.HALF_DAY if half_day else AttendanceStatus.PRESENT

        if existing:
            # Pre-created by HR without a check-in: fill it in.
            updated = self._attendance.record_check_in(
                tenant_id=tenant_id,
                attendance_id=existing.attendance_id,
                check_in_time=now,
                status=status,
                half_day_type=half_day,
                is_late=decision.is_late,
                late_minutes=decision.late_minutes,
                # No remarks on check-in: keep whatever HR wrote on the pre-created row.
                remarks=remarks or existing.remarks,
                marked_by=marked_by,
                marked_at=now,
            )
            if not updated:
                raise AlreadyCheckedInError()
            attendance_id = existing.attendance_id
        else:
            try:
                attendance_id = self._attendance.create(
                    tenant_id=tenant_id,
                    staff_id=staff_id,
                    attendance_date=today,
                    status=status,
                    check_in_time=now,
                    is_late=decision.is_late,
                    late_minutes=decision.late_minutes,
                    half_day_type=half_day,
                    remarks=remarks or "",
                    marked_by=marked_by,
                    marked_at=now,
                )
            except DuplicateAttendanceError as e:
                raise AlreadyCheckedInError() from e

        logger.info(
            "Check-in tenant=%s staff=%s attendance=%s late=%s minutes=%s",
            tenant_id,
            staff_id,
            attendance_id,
            decision.is_late,
            decision.late_minutes,
        )
        return self._reload(tenant_id=tenant_id, attendance_id=attendance_id)

    def check_out(
        self,
        *,
        tenant_id: int,
        staff_id: int,
        remarks: str = "",
        now: datetime | None = None,
    ) -> AttendanceRecord:
        tenant_id = require_id(tenant_id, TenantIDRequiredError)
        staff_id = require_id(staff_id, StaffIDRequiredError)

        now = now or now_local()
        today = now.date()

        record = self._attendance.get_for_staff_and_date(tenant_id=tenant_id, staff_id=staff_id, attendance_date=today)
        if not record or record.check_in_time is None:
            raise NotCheckedInError()
        if record.check_out_time is not None:
            raise AlreadyCheckedOutError()

        updated = self._attendance.record_check_out(
            tenant_id=tenant_id,
            attendance_id=record.attendance_id,
            check_out_time=now,
            remarks=append_remarks(record.remarks, remarks),
        )
        if not updated:
            raise AlreadyCheckedOutError()

        logger.info("Check-out tenant=%s staff=%s attendance=%s", tenant_id, staff_id, record.attendance_id)
        return self._reload(tenant_id=tenant_id, attendance_id=record.attendance_id)

    def mark_attendance(
        self,
        *,
        tenant_id: int,
        staff_id: int,
        attendance_date: date | None,
        status: AttendanceStatus | str,
        check_in_time: datetime | None = None,
        check_out_time: datetime | None = None,
        half_day_type: HalfDayType | str | None = None,
        remarks: str = "",
        marked_by: int | None = None,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        """HR marking: creates the day's record or replaces it entirely."""

        tenant_id = require_id(tenant_id, TenantIDRequiredError)
        staff_id = require_id(staff_id, StaffIDRequiredError)
        if attendance_date is None:
            raise DateRequiredError()

        now = now or now_local()
        if attendance_date > now.date():
            raise FutureDateError()

        status = parse_status(status)
        half_day = parse_half_day_type(half_day_type) if status == AttendanceStatus.HALF_DAY else None

        staff = self._require_staff(tenant_id=tenant_id, staff_id=staff_id)

        decision = LatenessDecision()
        if status == AttendanceStatus.PRESENT and check_in_time is not None:
            decision = self._lateness_for(staff, check_in_time)

        existing = self._attendance.get_for_staff_and_date(
            tenant_id=tenant_id, staff_id=staff_id, attendance_date=attendance_date
        )
        if existing:
            self._attendance.overwrite(
                tenant_id=tenant_id,
                attendance_id=existing.attendance_id,
                status=status,
                check_in_time=check_in_time,
                check_out_time=check_out_time,
                is_late=decision.is_late,
                late_minutes=decision.late_minutes,
                half_day_type=half_day,
                remarks=remarks or "",
                marked_by=marked_by,
                marked_at=now,
            )
            attendance_id = existing.attendance_id
        else:
            attendance_id = self._attendance.create(
                tenant_id=tenant_id,
                staff_id=staff_id,
                attendance_date=attendance_date,
                status=status,
                check_in_time=check_in_time,
                check_out_time=check_out_time,
                is_late=decision.is_late,
                late_minutes=decision.late_minutes,
                half_day_type=half_day,
                remarks=remarks or "",
                marked_by=marked_by,
                marked_at=now,
            )

        logger.info(
            "Attendance marked tenant=%s staff=%s date=%s status=%s by=%s",
            tenant_id,
            staff_id,
            attendance_date.isoformat(),
            status.value,
            marked_by,
        )
        return self._reload(tenant_id=tenant_id, attendance_id=attendance_id)

    def get_today(self, *, tenant_id: int, staff_id: int, now: datetime | None = None) -> Optional[AttendanceRecord]:
        tenant_id = require_id(tenant_id, TenantIDRequiredError)
        staff_id = require_id(staff_id, StaffIDRequiredError)
        today = (now or now_local()).date()
        return self._attendance.get_for_staff_and_date(tenant_id=tenant_id, staff_id=staff_id, attendance_date=today)

    def get_today_status(self, *, tenant_id: int, staff_id: int, now: datetime | None = None) -> TodayAttendance:
        return TodayAttendance.of(self.get_today(tenant_id=tenant_id, staff_id=staff_id, now=now))

    def get_by_id(self, *, tenant_id: int, attendance_id: int) -> AttendanceRecord:
        tenant_id = require_id(tenant_id, TenantIDRequiredError)
        attendance_id = require_id(attendance_id, AttendanceNotFoundError)
        return self._reload(tenant_id=tenant_id, attendance_id=attendance_id)

    def list_attendance(self, query: AttendanceFilter) -> Page[AttendanceRecord]:
        require_id(query.tenant_id, TenantIDRequiredError)
        return self._attendance.list_records(query)
