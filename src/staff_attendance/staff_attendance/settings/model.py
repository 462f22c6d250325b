from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional

from ..core.constants import (
    DEFAULT_HALF_DAY_THRESHOLD_HOURS,
    DEFAULT_LATE_THRESHOLD_MINUTES,
    DEFAULT_WORK_END_TIME,
    DEFAULT_WORK_START_TIME,
)


@dataclass(frozen=True)
class AttendanceSettings:
    """Per-branch working hours and lateness rules.

    One row per (tenant, branch), replaced on update; no history is kept.
    `settings_id` is None for the built-in default that is served when a branch
    has never been configured.
    """

    tenant_id: int
    branch_id: int
    work_start_time: time
    work_end_time: time
    late_threshold_minutes: int
    half_day_threshold_hours: float
    allow_self_checkout: bool = True
    require_regularization_approval: bool = True
    settings_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_default(self) -> bool:
        return self.settings_id is None


def default_settings(*, tenant_id: int, branch_id: int) -> AttendanceSettings:
    return AttendanceSettings(
        tenant_id=tenant_id,
        branch_id=branch_id,
        work_start_time=DEFAULT_WORK_START_TIME,
        work_end_time=DEFAULT_WORK_END_TIME,
        late_threshold_minutes=DEFAULT_LATE_THRESHOLD_MINUTES,
        half_day_threshold_hours=DEFAULT_HALF_DAY_THRESHOLD_HOURS,
        allow_self_checkout=True,
        require_regularization_approval=True,
    )
