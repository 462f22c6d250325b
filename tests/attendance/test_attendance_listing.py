from __future__ import annotations

from datetime import date, timedelta

import pytest

from src.staff_attendance.staff_attendance.attendance.model import AttendanceFilter
from src.staff_attendance.staff_attendance.core.enums import AttendanceStatus
from src.staff_attendance.staff_attendance.core.exceptions import AttendanceNotFoundError, TenantIDRequiredError

START = date(2025, 1, 1)


@pytest.fixture
def service(container):
    return container.attendance_service


@pytest.fixture
def month_of_records(attendance_repo):
    """25 days of records for staff 1; every fifth day absent."""
    for offset in range(25):
        attendance_repo.create(
            tenant_id=1,
            staff_id=1,
            attendance_date=START + timedelta(days=offset),
            status=AttendanceStatus.ABSENT if offset % 5 == 0 else AttendanceStatus.PRESENT,
            late_minutes=offset,
            is_late=offset > 0,
        )
    return attendance_repo


def test_first_page_uses_default_limit(service, month_of_records):
    page = service.list_attendance(AttendanceFilter(tenant_id=1))

    assert len(page.items) == 20
    assert page.has_more is True
    assert page.total == 25
    assert page.items[0].attendance_date == date(2025, 1, 25)
    assert page.next_cursor == str(page.items[-1].attendance_id)


def test_cursor_returns_the_rest(service, month_of_records):
    first = service.list_attendance(AttendanceFilter(tenant_id=1))
    second = service.list_attendance(AttendanceFilter(tenant_id=1, cursor=first.next_cursor))

    assert len(second.items) == 5
    assert second.has_more is False
    assert second.next_cursor is None
    assert second.total == 25
    seen = {r.attendance_id for r in first.items} | {r.attendance_id for r in second.items}
    assert len(seen) == 25
    assert second.items[-1].attendance_date == START


def test_invalid_cursor_is_ignored(service, month_of_records):
    page = service.list_attendance(AttendanceFilter(tenant_id=1, cursor="not-a-cursor", limit=5))

    assert page.items[0].attendance_date == date(2025, 1, 25)


@pytest.mark.parametrize("limit, expected", [(0, 1), (-3, 1), (500, 25), (7, 7)])
def test_limit_is_clamped(service, month_of_records, limit, expected):
    page = service.list_attendance(AttendanceFilter(tenant_id=1, limit=limit))

    assert len(page.items) == expected


def test_status_and_date_filters(service, month_of_records):
    page = service.list_attendance(
        AttendanceFilter(
            tenant_id=1,
            status=AttendanceStatus.ABSENT,
            date_from=date(2025, 1, 2),
            date_to=date(2025, 1, 20),
        )
    )

    assert [r.attendance_date for r in page.items] == [date(2025, 1, 16), date(2025, 1, 11), date(2025, 1, 6)]
    assert page.total == 3


def test_branch_and_department_filters(service, attendance_repo):
    for staff_id in (1, 3, 4):
        attendance_repo.create(tenant_id=1, staff_id=staff_id, attendance_date=START, status=AttendanceStatus.PRESENT)

    by_branch = service.list_attendance(AttendanceFilter(tenant_id=1, branch_id=2))
    by_department = service.list_attendance(AttendanceFilter(tenant_id=1, department_id=20))

    assert [r.staff_id for r in by_branch.items] == [4]
    assert sorted(r.staff_id for r in by_department.items) == [3, 4]


def test_listing_is_scoped_to_tenant(service, month_of_records):
    page = service.list_attendance(AttendanceFilter(tenant_id=2))

    assert page.items == []
    assert page.total == 0
    assert page.has_more is False


def test_listing_requires_tenant(service):
    with pytest.raises(TenantIDRequiredError):
        service.list_attendance(AttendanceFilter(tenant_id=None))


def test_sort_by_late_minutes_ascending(service, month_of_records):
    page = service.list_attendance(AttendanceFilter(tenant_id=1, sort_by="late_minutes", sort_order="asc", limit=3))

    assert [r.late_minutes for r in page.items] == [0, 1, 2]

    following = service.list_attendance(
        AttendanceFilter(tenant_id=1, sort_by="late_minutes", sort_order="asc", limit=3, cursor=page.next_cursor)
    )
    assert [r.late_minutes for r in following.items] == [3, 4, 5]


def test_unknown_sort_column_falls_back_to_default_order(service, month_of_records):
    page = service.list_attendance(AttendanceFilter(tenant_id=1, sort_by="staff_id; DROP TABLE", limit=1))

    assert page.items[0].attendance_date == date(2025, 1, 25)


def test_get_by_id(service, month_of_records):
    record = service.get_by_id(tenant_id=1, attendance_id=1)

    assert record.attendance_date == START


@pytest.mark.parametrize("attendance_id", [999, 0, "abc"])
def test_get_by_id_not_found(service, month_of_records, attendance_id):
    with pytest.raises(AttendanceNotFoundError):
        service.get_by_id(tenant_id=1, attendance_id=attendance_id)


def test_get_by_id_from_other_tenant_is_not_found(service, month_of_records):
    with pytest.raises(AttendanceNotFoundError):
        service.get_by_id(tenant_id=2, attendance_id=1)
