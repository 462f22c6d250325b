from __future__ import annotations

import calendar
from collections import Counter
from typing import Iterable

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds
from ..common.validators import require_id
from ..core.enums import AttendanceStatus
from ..core.exceptions import StaffIDRequiredError, TenantIDRequiredError
from .model import MonthlySummary


def summarize(records: Iterable[AttendanceRecord], *, staff_id: int, year: int, month: int) -> MonthlySummary:
    records = list(records)
    by_status = Counter(r.status for r in records)
    late = [r for r in records if r.is_late]
    return MonthlySummary(
        staff_id=staff_id,
        year=year,
        month=month,
        month_name=calendar.month_name[month],
        total_days=len(records),
        present_days=by_status[AttendanceStatus.PRESENT],
        absent_days=by_status[AttendanceStatus.ABSENT],
        half_days=by_status[AttendanceStatus.HALF_DAY],
        leave_days=by_status[AttendanceStatus.ON_LEAVE],
        holiday_days=by_status[AttendanceStatus.HOLIDAY],
        late_days=len(late),
        total_late_minutes=sum(r.late_minutes for r in late),
    )


class SummaryService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def monthly_summary(self, *, tenant_id: int, staff_id: int, year: int, month: int) -> MonthlySummary:
        tenant_id = require_id(tenant_id, TenantIDRequiredError)
        staff_id = require_id(staff_id, StaffIDRequiredError)
        start, end = month_bounds(year, month)

        records = self._attendance.list_for_period(
            tenant_id=tenant_id, staff_id=staff_id, date_from=start, date_to=end
        )
        return summarize(records, staff_id=staff_id, year=int(year), month=int(month))
