from __future__ import annotations

import logging
from datetime import time

from ..common.validators import require_id
from ..core.constants import MAX_HALF_DAY_THRESHOLD_HOURS, MAX_LATE_THRESHOLD_MINUTES
from ..core.exceptions import BranchIDRequiredError, SettingsNotFoundError, TenantIDRequiredError, ValidationError
from .model import AttendanceSettings, default_settings
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class SettingsService:
    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def get_settings(self, *, tenant_id: int, branch_id: int) -> AttendanceSettings:
        tenant_id = require_id(tenant_id, TenantIDRequiredError)
        branch_id = require_id(branch_id, BranchIDRequiredError)
        found = self._settings.get(tenant_id=tenant_id, branch_id=branch_id)
        if not found:
            raise SettingsNotFoundError()
        return found

    def get_settings_or_default(self, *, tenant_id: int, branch_id: int) -> AttendanceSettings:
        try:
            return self.get_settings(tenant_id=tenant_id, branch_id=branch_id)
        except SettingsNotFoundError:
            return default_settings(tenant_id=int(tenant_id), branch_id=int(branch_id))

    def update_settings(
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
    ) -> AttendanceSettings:
        tenant_id = require_id(tenant_id, TenantIDRequiredError)
        branch_id = require_id(branch_id, BranchIDRequiredError)
        if not 0 <= late_threshold_minutes <= MAX_LATE_THRESHOLD_MINUTES:
            raise ValidationError(f"late_threshold_minutes must be between 0 and {MAX_LATE_THRESHOLD_MINUTES}")
        if not 0 <= half_day_threshold_hours <= MAX_HALF_DAY_THRESHOLD_HOURS:
            raise ValidationError(f"half_day_threshold_hours must be between 0 and {MAX_HALF_DAY_THRESHOLD_HOURS:g}")

        self._settings.upsert(
            tenant_id=tenant_id,
            branch_id=branch_id,
            work_start_time=work_start_time,
            work_end_time=work_end_time,
            late_threshold_minutes=int(late_threshold_minutes),
            half_day_threshold_hours=float(half_day_threshold_hours),
            allow_self_checkout=bool(allow_self_checkout),
            require_regularization_approval=bool(require_regularization_approval),
        )
        logger.info(
            "Attendance settings saved tenant=%s branch=%s start=%s threshold=%s",
            tenant_id,
            branch_id,
            work_start_time.strftime("%H:%M"),
            late_threshold_minutes,
        )
        return self.get_settings(tenant_id=tenant_id, branch_id=branch_id)
