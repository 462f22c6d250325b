from __future__ import annotations

from datetime import datetime

from .base import LatenessDecision, LatenessStrategy


class DisabledLatenessStrategy(LatenessStrategy):
    """No branch settings: nobody is ever late."""

    def decide(self, *, check_in_time: datetime) -> LatenessDecision:
        return LatenessDecision()
