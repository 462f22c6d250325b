from __future__ import annotations

from datetime import datetime, time

import pytest

from src.staff_attendance.staff_attendance.container import wire
from src.staff_attendance.staff_attendance.settings.model import AttendanceSettings
from tests.fakes import (
    FakeStaffDirectory,
    InMemoryAttendanceRepository,
    InMemoryRegularizationRepository,
    InMemorySettingsRepository,
    InMemoryUnitOfWork,
    make_staff,
)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 10, 9, 0, 0)


@pytest.fixture
def branch_settings() -> AttendanceSettings:
    return AttendanceSettings(
        settings_id=1,
        tenant_id=1,
        branch_id=1,
        work_start_time=time(9, 0),
        work_end_time=time(17, 0),
        late_threshold_minutes=15,
        half_day_threshold_hours=4.0,
    )


@pytest.fixture
def staff_directory() -> FakeStaffDirectory:
    return FakeStaffDirectory(
        [
            make_staff(1),
            make_staff(2),
            make_staff(3, department_id=20),
            make_staff(4, branch_id=2, department_id=20),
            # No branch: lateness cannot be resolved.
            make_staff(5, branch_id=None),
        ]
    )


@pytest.fixture
def settings_repo(branch_settings) -> InMemorySettingsRepository:
    return InMemorySettingsRepository([branch_settings])


@pytest.fixture
def attendance_repo(staff_directory) -> InMemoryAttendanceRepository:
    return InMemoryAttendanceRepository(staff_directory)


@pytest.fixture
def regularizations_repo() -> InMemoryRegularizationRepository:
    return InMemoryRegularizationRepository()


@pytest.fixture
def uow(attendance_repo, regularizations_repo) -> InMemoryUnitOfWork:
    return InMemoryUnitOfWork(attendance_repo, regularizations_repo)


@pytest.fixture
def container(staff_directory, settings_repo, attendance_repo, regularizations_repo, uow):
    return wire(
        staff_directory=staff_directory,
        settings_repo=settings_repo,
        attendance_repo=attendance_repo,
        regularizations_repo=regularizations_repo,
        uow_factory=lambda: uow,
    )
