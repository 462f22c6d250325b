from __future__ import annotations

from datetime import datetime, time

import pytest

from src.staff_attendance.staff_attendance.core.exceptions import (
    BranchIDRequiredError,
    SettingsNotFoundError,
    ValidationError,
)
from src.staff_attendance.staff_attendance.settings.resolver import SettingsResolver
from src.staff_attendance.staff_attendance.settings.service import SettingsService
from tests.fakes import FailingSettingsRepository, InMemorySettingsRepository


@pytest.fixture
def service(container):
    return container.settings_service


def _update(service, *, branch_id=3, start=time(8, 30), threshold=10):
    return service.update_settings(
        tenant_id=1,
        branch_id=branch_id,
        work_start_time=start,
        work_end_time=time(16, 30),
        late_threshold_minutes=threshold,
        half_day_threshold_hours=3.5,
        allow_self_checkout=False,
        require_regularization_approval=True,
    )


def test_get_existing_settings(service, branch_settings):
    assert service.get_settings(tenant_id=1, branch_id=1) == branch_settings


def test_get_missing_settings_raises(service):
    with pytest.raises(SettingsNotFoundError):
        service.get_settings(tenant_id=1, branch_id=2)


def test_missing_settings_fall_back_to_defaults(service):
    settings = service.get_settings_or_default(tenant_id=1, branch_id=2)

    assert settings.is_default is True
    assert settings.branch_id == 2
    assert settings.work_start_time == time(9, 0)
    assert settings.work_end_time == time(17, 0)
    assert settings.late_threshold_minutes == 15
    assert settings.half_day_threshold_hours == 4.0


def test_branch_is_required(service):
    with pytest.raises(BranchIDRequiredError):
        service.get_settings_or_default(tenant_id=1, branch_id=None)


def test_update_creates_then_replaces(service):
    created = _update(service)

    assert created.is_default is False
    assert created.work_start_time == time(8, 30)
    assert created.allow_self_checkout is False

    replaced = _update(service, start=time(7, 45), threshold=5)

    assert replaced.settings_id == created.settings_id
    assert replaced.work_start_time == time(7, 45)
    assert replaced.late_threshold_minutes == 5


def test_updated_settings_drive_lateness(container):
    _update(container.settings_service, branch_id=2, start=time(8, 0), threshold=0)

    record = container.attendance_service.check_in(
        tenant_id=1, staff_id=4, now=datetime(2025, 3, 10, 8, 5)
    )

    assert record.is_late is True
    assert record.late_minutes == 5


def test_resolver_skips_lookup_without_branch():
    repo = InMemorySettingsRepository()

    assert SettingsResolver(repo).resolve(tenant_id=1, branch_id=None) is None


def test_resolver_swallows_store_failures():
    assert SettingsResolver(FailingSettingsRepository()).resolve(tenant_id=1, branch_id=1) is None


def test_resolver_returns_stored_settings(branch_settings):
    resolver = SettingsResolver(InMemorySettingsRepository([branch_settings]))

    assert resolver.resolve(tenant_id=1, branch_id=1) is branch_settings
    assert resolver.resolve(tenant_id=1, branch_id=9) is None


def test_service_propagates_store_failures():
    with pytest.raises(RuntimeError):
        SettingsService(FailingSettingsRepository()).get_settings(tenant_id=1, branch_id=1)


@pytest.mark.parametrize(
    "threshold, half_day",
    [(121, 4.0), (-1, 4.0), (500, 99.0), (15, 12.5), (15, -0.5)],
)
def test_update_rejects_out_of_range_values_before_saving(service, threshold, half_day):
    with pytest.raises(ValidationError):
        service.update_settings(
            tenant_id=1,
            branch_id=3,
            work_start_time=time(9, 0),
            work_end_time=time(17, 0),
            late_threshold_minutes=threshold,
            half_day_threshold_hours=half_day,
            allow_self_checkout=True,
            require_regularization_approval=True,
        )

    with pytest.raises(SettingsNotFoundError):
        service.get_settings(tenant_id=1, branch_id=3)


def test_update_accepts_range_edges(service):
    saved = service.update_settings(
        tenant_id=1,
        branch_id=3,
        work_start_time=time(9, 0),
        work_end_time=time(17, 0),
        late_threshold_minutes=120,
        half_day_threshold_hours=0,
        allow_self_checkout=True,
        require_regularization_approval=True,
    )

    assert saved.late_threshold_minutes == 120
    assert saved.half_day_threshold_hours == 0.0
