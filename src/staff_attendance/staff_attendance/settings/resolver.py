from __future__ import annotations

import logging
from typing import Optional

from .model import AttendanceSettings
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class SettingsResolver:
    """Resolves the lateness rules that apply to a staff member's branch.

    Returns None when the branch is unknown, unconfigured, or the lookup fails;
    callers treat None as "lateness tracking disabled" and carry on.
    """

    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def resolve(self, *, tenant_id: int, branch_id: Optional[int]) -> Optional[AttendanceSettings]:
        if branch_id is None:
            return None
        try:
            return self._settings.get(tenant_id=tenant_id, branch_id=branch_id)
        except Exception:
            logger.warning(
                "Settings lookup failed for tenant=%s branch=%s; lateness disabled",
                tenant_id,
                branch_id,
                exc_info=True,
            )
            return None
