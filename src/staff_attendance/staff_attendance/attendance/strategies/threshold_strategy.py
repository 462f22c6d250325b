from __future__ import annotations

from datetime import datetime, time, timedelta

from .base import LatenessDecision, LatenessStrategy


class ThresholdLatenessStrategy(LatenessStrategy):
    """Late once the check-in passes work start plus the grace threshold.

    Late minutes are counted from the nominal work start, not from the end of
    the grace period: with 09:00 and 15 minutes, 09:16 is 16 minutes late.
    """

    def __init__(self, *, work_start_time: time, late_threshold_minutes: int):
        self._work_start_time = work_start_time
        self._threshold = timedelta(minutes=int(late_threshold_minutes))

    def decide(self, *, check_in_time: datetime) -> LatenessDecision:
        work_start = check_in_time.replace(
            hour=self._work_start_time.hour,
            minute=self._work_start_time.minute,
            second=0,
            microsecond=0,
        )
        if check_in_time <= work_start + self._threshold:
            return LatenessDecision()

        late_minutes = int((check_in_time - work_start).total_seconds() // 60)
        return LatenessDecision(is_late=True, late_minutes=late_minutes)
