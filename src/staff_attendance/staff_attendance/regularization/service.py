from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional

from ..attendance.repository import AttendanceRepository
from ..attendance.service import parse_status
from ..common.datetime_utils import now_local
from ..common.pagination import Page
from ..common.validators import require_id, require_max_length, require_non_empty
from ..core.constants import MAX_REASON_LENGTH, REGULARIZED_REMARKS_PREFIX
from ..core.enums import REGULARIZABLE_STATUSES, AttendanceStatus, RegularizationStatus
from ..core.exceptions import (
    CannotRegularizePendingRequestError,
    DateRequiredError,
    FutureDateError,
    InvalidStatusError,
    ReasonRequiredError,
    RegularizationAlreadyProcessedError,
    RegularizationNotFoundError,
    StaffIDRequiredError,
    StaffNotFoundError,
    TenantIDRequiredError,
)
from ..database.unit_of_work import UnitOfWork
from ..staff.repository import StaffDirectory
from .model import RegularizationFilter, RegularizationRequest
from .repository import RegularizationRepository

logger = logging.getLogger(__name__)


class RegularizationService:
    """Staff correction requests and their review.

    pending -> approved | rejected. Approval also writes the attendance ledger,
    inside one unit of work so the two never disagree.
    """

    def __init__(
        self,
        regularizations: RegularizationRepository,
        attendance: AttendanceRepository,
        staff: StaffDirectory,
        uow_factory: Callable[[], UnitOfWork],
    ):
        self._regularizations = regularizations
        self._attendance = attendance
        self._staff = staff
        self._uow_factory = uow_factory

    def _reload(self, *, tenant_id: int, regularization_id: int) -> RegularizationRequest:
        found = self._regularizations.get_by_id(tenant_id=tenant_id, regularization_id=regularization_id)
        if not found:
            raise RegularizationNotFoundError()
        return found

    def submit(
        self,
        *,
        tenant_id: int,
        staff_id: int,
        request_date: date | None,
        requested_status: AttendanceStatus | str,
        reason: str,
        supporting_document_url: Optional[str] = None,
        now: datetime | None = None,
    ) -> RegularizationRequest:
        tenant_id = require_id(tenant_id, TenantIDRequiredError)
        staff_id = require_id(staff_id, StaffIDRequiredError)
        if request_date is None:
            raise DateRequiredError()

        now = now or now_local()
        if request_date > now.date():
            raise FutureDateError()

        status = parse_status(requested_status)
        if status not in REGULARIZABLE_STATUSES:
            raise InvalidStatusError()
        reason = require_max_length(require_non_empty(reason, ReasonRequiredError), "reason", MAX_REASON_LENGTH)

        if not self._staff.get_by_id(tenant_id=tenant_id, staff_id=staff_id):
            raise StaffNotFoundError()

        if self._regularizations.has_pending(tenant_id=tenant_id, staff_id=staff_id, request_date=request_date):
            raise CannotRegularizePendingRequestError()

        existing = self._attendance.get_for_staff_and_date(
            tenant_id=tenant_id, staff_id=staff_id, attendance_date=request_date
        )
        regularization_id = self._regularizations.create(
            tenant_id=tenant_id,
            staff_id=staff_id,
            request_date=request_date,
            requested_status=status,
            reason=reason,
            supporting_document_url=(supporting_document_url or "").strip() or None,
            attendance_id=existing.attendance_id if existing else None,
        )

        logger.info(
            "Regularization submitted tenant=%s staff=%s date=%s id=%s",
            tenant_id,
            staff_id,
            request_date.isoformat(),
            regularization_id,
        )
        return self._reload(tenant_id=tenant_id, regularization_id=regularization_id)

    def approve(
        self,
        *,
        tenant_id: int,
        regularization_id: int,
        reviewed_by: int | None = None,
        now: datetime | None = None,
    ) -> RegularizationRequest:
        tenant_id = require_id(tenant_id, TenantIDRequiredError)
        regularization_id = require_id(regularization_id, RegularizationNotFoundError)
        now = now or now_local()

        with self._uow_factory() as uow:
            req = uow.regularizations.get_for_update(tenant_id=tenant_id, regularization_id=regularization_id)
            if not req:
                raise RegularizationNotFoundError()
            if not req.is_pending:
                raise RegularizationAlreadyProcessedError()

            if not uow.regularizations.mark_reviewed(
                tenant_id=tenant_id,
                regularization_id=regularization_id,
                status=RegularizationStatus.APPROVED,
                reviewed_by=reviewed_by,
                reviewed_at=now,
            ):
                raise RegularizationAlreadyProcessedError()

            remarks = f"{REGULARIZED_REMARKS_PREFIX}{req.reason}"
            existing = uow.attendance.get_for_staff_and_date(
                tenant_id=tenant_id, staff_id=req.staff_id, attendance_date=req.request_date
            )
            if existing:
                uow.attendance.apply_regularization(
                    tenant_id=tenant_id,
                    attendance_id=existing.attendance_id,
                    status=req.requested_status,
                    remarks=remarks,
                )
                attendance_id = existing.attendance_id
            else:
                attendance_id = uow.attendance.create(
                    tenant_id=tenant_id,
                    staff_id=req.staff_id,
                    attendance_date=req.request_date,
                    status=req.requested_status,
                    remarks=remarks,
                    marked_by=reviewed_by,
                    marked_at=now,
                )

        logger.info(
            "Regularization approved tenant=%s id=%s attendance=%s by=%s",
            tenant_id,
            regularization_id,
            attendance_id,
            reviewed_by,
        )
        return self._reload(tenant_id=tenant_id, regularization_id=regularization_id)

    def reject(
        self,
        *,
        tenant_id: int,
        regularization_id: int,
        rejection_reason: str,
        reviewed_by: int | None = None,
        now: datetime | None = None,
    ) -> RegularizationRequest:
        tenant_id = require_id(tenant_id, TenantIDRequiredError)
        regularization_id = require_id(regularization_id, RegularizationNotFoundError)
        rejection_reason = require_max_length(
            require_non_empty(rejection_reason, ReasonRequiredError), "rejection_reason", MAX_REASON_LENGTH
        )
        now = now or now_local()

        req = self._reload(tenant_id=tenant_id, regularization_id=regularization_id)
        if not req.is_pending:
            raise RegularizationAlreadyProcessedError()

        if not self._regularizations.mark_reviewed(
            tenant_id=tenant_id,
            regularization_id=regularization_id,
            status=RegularizationStatus.REJECTED,
            reviewed_by=reviewed_by,
            reviewed_at=now,
            rejection_reason=rejection_reason,
        ):
            raise RegularizationAlreadyProcessedError()

        logger.info("Regularization rejected tenant=%s id=%s by=%s", tenant_id, regularization_id, reviewed_by)
        return self._reload(tenant_id=tenant_id, regularization_id=regularization_id)

    def get_by_id(self, *, tenant_id: int, regularization_id: int) -> RegularizationRequest:
        tenant_id = require_id(tenant_id, TenantIDRequiredError)
        regularization_id = require_id(regularization_id, RegularizationNotFoundError)
        return self._reload(tenant_id=tenant_id, regularization_id=regularization_id)

    def list_regularizations(self, query: RegularizationFilter) -> Page[RegularizationRequest]:
        require_id(query.tenant_id, TenantIDRequiredError)
        return self._regularizations.list_requests(query)
