from __future__ import annotations

from datetime import time
from typing import Optional, Protocol

from .model import AttendanceSettings


class SettingsRepository(Protocol):
    def get(self, *, tenant_id: int, branch_id: int) -> Optional[AttendanceSettings]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        tenant_id: int,
        branch_id: int,
        work_start_time: time,
        work_end_time: time,
        late_threshold_minutes: int,
        half_day_threshold_hours: float,
        allow_self_checkout: bool,
        require_regularization_approval: bool,
    ) -> None:
        """Insert the branch row or replace every field of the existing one."""

        raise NotImplementedError
