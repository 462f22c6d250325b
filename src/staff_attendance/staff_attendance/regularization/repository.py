from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol

from ..common.pagination import Page
from ..core.enums import AttendanceStatus, RegularizationStatus
from .model import RegularizationFilter, RegularizationRequest


class RegularizationRepository(Protocol):
    def get_by_id(self, *, tenant_id: int, regularization_id: int) -> Optional[RegularizationRequest]:
        raise NotImplementedError

    def get_for_update(self, *, tenant_id: int, regularization_id: int) -> Optional[RegularizationRequest]:
        """Like get_by_id, but holds a row lock until the surrounding transaction ends."""

        raise NotImplementedError

    def has_pending(self, *, tenant_id: int, staff_id: int, request_date: date) -> bool:
        raise NotImplementedError

    def create(
        self,
        *,
        tenant_id: int,
        staff_id: int,
        request_date: date,
        requested_status: AttendanceStatus,
        reason: str,
        supporting_document_url: Optional[str] = None,
        attendance_id: Optional[int] = None,
    ) -> int:
        """Insert a pending request; raises CannotRegularizePendingRequestError on a second pending one."""

        raise NotImplementedError

    def mark_reviewed(
        self,
        *,
        tenant_id: int,
        regularization_id: int,
        status: RegularizationStatus,
        reviewed_by: Optional[int],
        reviewed_at: datetime,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        """Move a pending request to a terminal state; False if it is no longer pending."""

        raise NotImplementedError

    def list_requests(self, query: RegularizationFilter) -> Page[RegularizationRequest]:
        raise NotImplementedError
