from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class LatenessDecision:
    is_late: bool = False
    late_minutes: int = 0


class LatenessStrategy(ABC):
    """Strategy Pattern: encapsulate how a check-in time is judged late or not."""

    @abstractmethod
    def decide(self, *, check_in_time: datetime) -> LatenessDecision:
        raise NotImplementedError
