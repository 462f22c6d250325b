from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..settings.model import AttendanceSettings
from .strategies.base import LatenessStrategy
from .strategies.disabled_strategy import DisabledLatenessStrategy
from .strategies.threshold_strategy import ThresholdLatenessStrategy


@dataclass
class LatenessStrategyFactory:
    """Factory Pattern: choose the lateness rule for a branch's settings."""

    def for_settings(self, settings: Optional[AttendanceSettings]) -> LatenessStrategy:
        if settings is None:
            return DisabledLatenessStrategy()
        return ThresholdLatenessStrategy(
            work_start_time=settings.work_start_time,
            late_threshold_minutes=settings.late_threshold_minutes,
        )
