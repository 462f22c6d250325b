from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, RegularizationStatus


@dataclass(frozen=True)
class RegularizationRequest:
    """Domain entity: a staff member's request to correct one day's attendance."""

    regularization_id: int
    tenant_id: int
    staff_id: int
    request_date: date
    requested_status: AttendanceStatus
    reason: str
    status: RegularizationStatus
    supporting_document_url: Optional[str] = None
    # Record that existed for the day when the request was submitted, if any.
    attendance_id: Optional[int] = None
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    staff_name: Optional[str] = None
    employee_id: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status == RegularizationStatus.PENDING


@dataclass(frozen=True)
class RegularizationFilter:
    tenant_id: int
    staff_id: Optional[int] = None
    status: Optional[RegularizationStatus] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    cursor: Optional[str] = None
    limit: Optional[int] = None
