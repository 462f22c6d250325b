from __future__ import annotations

from datetime import date, datetime

import pytest

from src.staff_attendance.staff_attendance.core.enums import AttendanceStatus, HalfDayType
from src.staff_attendance.staff_attendance.core.exceptions import (
    AlreadyCheckedInError,
    DateRequiredError,
    FutureDateError,
    InvalidHalfDayTypeError,
    InvalidStatusError,
    StaffNotFoundError,
)

NOW = datetime(2025, 3, 10, 12, 0)


@pytest.fixture
def service(container):
    return container.attendance_service


@pytest.mark.parametrize("status", [s.value for s in AttendanceStatus])
def test_future_date_is_rejected_for_every_status(service, status):
    with pytest.raises(FutureDateError):
        service.mark_attendance(tenant_id=1, staff_id=1, attendance_date=date(2025, 3, 11), status=status, now=NOW)


def test_today_is_not_a_future_date(service):
    record = service.mark_attendance(tenant_id=1, staff_id=1, attendance_date=date(2025, 3, 10), status="absent", now=NOW)

    assert record.status == AttendanceStatus.ABSENT


def test_date_is_required(service):
    with pytest.raises(DateRequiredError):
        service.mark_attendance(tenant_id=1, staff_id=1, attendance_date=None, status="present", now=NOW)


@pytest.mark.parametrize("status", ["", "late", "PRESENT!", None])
def test_unknown_status_is_rejected(service, status):
    with pytest.raises(InvalidStatusError):
        service.mark_attendance(tenant_id=1, staff_id=1, attendance_date=date(2025, 3, 7), status=status, now=NOW)


def test_status_is_case_insensitive(service):
    record = service.mark_attendance(tenant_id=1, staff_id=1, attendance_date=date(2025, 3, 7), status="On_Leave", now=NOW)

    assert record.status == AttendanceStatus.ON_LEAVE


def test_unknown_staff_is_rejected(service):
    with pytest.raises(StaffNotFoundError):
        service.mark_attendance(tenant_id=1, staff_id=77, attendance_date=date(2025, 3, 7), status="present", now=NOW)


def test_marking_creates_a_record_with_audit_fields(service):
    record = service.mark_attendance(
        tenant_id=1,
        staff_id=2,
        attendance_date=date(2025, 3, 7),
        status="holiday",
        remarks="founders day",
        marked_by=42,
        now=NOW,
    )

    assert record.attendance_date == date(2025, 3, 7)
    assert record.status == AttendanceStatus.HOLIDAY
    assert record.remarks == "founders day"
    assert record.marked_by == 42
    assert record.marked_at == NOW


def test_present_with_late_check_in_computes_lateness(service):
    record = service.mark_attendance(
        tenant_id=1,
        staff_id=1,
        attendance_date=date(2025, 3, 7),
        status="present",
        check_in_time=datetime(2025, 3, 7, 9, 40),
        check_out_time=datetime(2025, 3, 7, 17, 0),
        now=NOW,
    )

    assert record.is_late is True
    assert record.late_minutes == 40
    assert record.check_out_time == datetime(2025, 3, 7, 17, 0)


def test_lateness_is_only_computed_for_present(service):
    record = service.mark_attendance(
        tenant_id=1,
        staff_id=1,
        attendance_date=date(2025, 3, 7),
        status="half_day",
        half_day_type="first_half",
        check_in_time=datetime(2025, 3, 7, 13, 0),
        now=NOW,
    )

    assert record.is_late is False
    assert record.late_minutes == 0
    assert record.half_day_type == HalfDayType.FIRST_HALF


def test_half_day_type_is_dropped_for_other_statuses(service):
    record = service.mark_attendance(
        tenant_id=1,
        staff_id=1,
        attendance_date=date(2025, 3, 7),
        status="absent",
        half_day_type="first_half",
        now=NOW,
    )

    assert record.half_day_type is None


def test_invalid_half_day_type_on_half_day_is_rejected(service):
    with pytest.raises(InvalidHalfDayTypeError):
        service.mark_attendance(
            tenant_id=1,
            staff_id=1,
            attendance_date=date(2025, 3, 7),
            status="half_day",
            half_day_type="morning",
            now=NOW,
        )


def test_marking_again_replaces_the_whole_record(service, attendance_repo):
    first = service.mark_attendance(
        tenant_id=1,
        staff_id=1,
        attendance_date=date(2025, 3, 7),
        status="present",
        check_in_time=datetime(2025, 3, 7, 10, 0),
        remarks="late bus",
        marked_by=5,
        now=NOW,
    )
    assert first.is_late is True

    second = service.mark_attendance(
        tenant_id=1,
        staff_id=1,
        attendance_date=date(2025, 3, 7),
        status="on_leave",
        marked_by=6,
        now=datetime(2025, 3, 10, 15, 0),
    )

    assert second.attendance_id == first.attendance_id
    assert second.status == AttendanceStatus.ON_LEAVE
    assert second.check_in_time is None
    assert second.is_late is False
    assert second.late_minutes == 0
    assert second.remarks == ""
    assert second.marked_by == 6
    assert second.marked_at == datetime(2025, 3, 10, 15, 0)
    assert len(attendance_repo.rows) == 1


def test_marking_then_self_check_in_on_same_day_is_rejected(service):
    service.mark_attendance(
        tenant_id=1,
        staff_id=1,
        attendance_date=date(2025, 3, 10),
        status="present",
        check_in_time=datetime(2025, 3, 10, 8, 50),
        now=NOW,
    )

    with pytest.raises(AlreadyCheckedInError):
        service.check_in(tenant_id=1, staff_id=1, now=NOW)
