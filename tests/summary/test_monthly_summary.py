from __future__ import annotations

from datetime import date

import pytest

from src.staff_attendance.staff_attendance.core.enums import AttendanceStatus
from src.staff_attendance.staff_attendance.core.exceptions import StaffIDRequiredError, ValidationError


@pytest.fixture
def service(container):
    return container.summary_service


def _add(repo, day, status, *, staff_id=1, late_minutes=0):
    repo.create(
        tenant_id=1,
        staff_id=staff_id,
        attendance_date=day,
        status=status,
        is_late=late_minutes > 0,
        late_minutes=late_minutes,
    )


def test_counts_only_records_that_exist(service, attendance_repo):
    _add(attendance_repo, date(2025, 3, 3), AttendanceStatus.PRESENT, late_minutes=20)
    _add(attendance_repo, date(2025, 3, 4), AttendanceStatus.ABSENT)
    _add(attendance_repo, date(2025, 3, 5), AttendanceStatus.HALF_DAY)

    summary = service.monthly_summary(tenant_id=1, staff_id=1, year=2025, month=3)

    assert summary.total_days == 3
    assert summary.present_days == 1
    assert summary.absent_days == 1
    assert summary.half_days == 1
    assert summary.leave_days == 0
    assert summary.holiday_days == 0
    assert summary.late_days == 1
    assert summary.total_late_minutes == 20
    assert summary.month_name == "March"


def test_late_minutes_are_summed(service, attendance_repo):
    _add(attendance_repo, date(2025, 2, 3), AttendanceStatus.PRESENT, late_minutes=16)
    _add(attendance_repo, date(2025, 2, 4), AttendanceStatus.PRESENT, late_minutes=45)
    _add(attendance_repo, date(2025, 2, 5), AttendanceStatus.PRESENT)
    _add(attendance_repo, date(2025, 2, 6), AttendanceStatus.ON_LEAVE)
    _add(attendance_repo, date(2025, 2, 7), AttendanceStatus.HOLIDAY)

    summary = service.monthly_summary(tenant_id=1, staff_id=1, year=2025, month=2)

    assert summary.present_days == 3
    assert summary.leave_days == 1
    assert summary.holiday_days == 1
    assert summary.late_days == 2
    assert summary.total_late_minutes == 61


def test_month_boundaries_and_other_staff_are_excluded(service, attendance_repo):
    _add(attendance_repo, date(2025, 2, 28), AttendanceStatus.PRESENT)
    _add(attendance_repo, date(2025, 3, 1), AttendanceStatus.PRESENT)
    _add(attendance_repo, date(2025, 3, 31), AttendanceStatus.PRESENT)
    _add(attendance_repo, date(2025, 4, 1), AttendanceStatus.PRESENT)
    _add(attendance_repo, date(2025, 3, 15), AttendanceStatus.PRESENT, staff_id=2)

    summary = service.monthly_summary(tenant_id=1, staff_id=1, year=2025, month=3)

    assert summary.total_days == 2


def test_empty_month(service):
    summary = service.monthly_summary(tenant_id=1, staff_id=1, year=2024, month=12)

    assert summary.total_days == 0
    assert summary.total_late_minutes == 0
    assert summary.month_name == "December"
    assert summary.year == 2024


@pytest.mark.parametrize("month", [0, 13])
def test_month_out_of_range(service, month):
    with pytest.raises(ValidationError):
        service.monthly_summary(tenant_id=1, staff_id=1, year=2025, month=month)


def test_staff_is_required(service):
    with pytest.raises(StaffIDRequiredError):
        service.monthly_summary(tenant_id=1, staff_id=None, year=2025, month=3)
