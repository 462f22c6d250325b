from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MonthlySummary:
    """Per-status counts over the records of one staff member in one month.

    `total_days` is the number of records found, not the number of days in the
    month: unmarked days are simply absent from every count.
    """

    staff_id: int
    year: int
    month: int
    month_name: str
    total_days: int = 0
    present_days: int = 0
    absent_days: int = 0
    half_days: int = 0
    leave_days: int = 0
    holiday_days: int = 0
    late_days: int = 0
    total_late_minutes: int = 0
