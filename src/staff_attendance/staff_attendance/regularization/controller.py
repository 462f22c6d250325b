from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import format_ts
from ..common.http import (
    current_tenant_id,
    current_user_id,
    json_body,
    ok,
    optional_date,
    page_payload,
    query_date,
    query_id,
    query_int,
)
from ..common.validators import require_id
from ..core.enums import RegularizationStatus
from ..core.exceptions import StaffIDRequiredError, ValidationError
from .model import RegularizationFilter, RegularizationRequest

API_PREFIX = "/api/v1/attendance/regularization"


def regularization_to_dict(r: RegularizationRequest) -> dict:
    return {
        "id": r.regularization_id,
        "staff_id": r.staff_id,
        "staff_name": r.staff_name,
        "employee_id": r.employee_id,
        "attendance_id": r.attendance_id,
        "request_date": r.request_date.isoformat(),
        "requested_status": r.requested_status.value,
        "reason": r.reason,
        "supporting_document_url": r.supporting_document_url,
        "status": r.status.value,
        "reviewed_by": r.reviewed_by,
        "reviewed_at": format_ts(r.reviewed_at),
        "rejection_reason": r.rejection_reason,
        "created_at": format_ts(r.created_at),
        "updated_at": format_ts(r.updated_at),
    }


def _status_param(value):
    if not value:
        return None
    try:
        return RegularizationStatus(value)
    except ValueError:
        raise ValidationError(f"Invalid regularization status {value!r}")


def register(app: Flask, container) -> None:
    service = container.regularization_service

    @app.route(API_PREFIX, methods=["POST"], endpoint="regularization_submit")
    def submit():
        data = json_body()
        req = service.submit(
            tenant_id=current_tenant_id(),
            staff_id=require_id(data.get("staff_id"), StaffIDRequiredError),
            request_date=optional_date(data.get("request_date")),
            requested_status=data.get("requested_status"),
            reason=str(data.get("reason") or ""),
            supporting_document_url=data.get("supporting_document_url"),
        )
        return ok(regularization_to_dict(req), 201)

    @app.route(API_PREFIX, methods=["GET"], endpoint="regularization_list")
    def list_regularizations():
        page = service.list_regularizations(
            RegularizationFilter(
                tenant_id=current_tenant_id(),
                staff_id=query_id("staff_id"),
                status=_status_param(request.args.get("status")),
                date_from=query_date("date_from"),
                date_to=query_date("date_to"),
                cursor=request.args.get("cursor") or None,
                limit=query_int("limit"),
            )
        )
        return ok(page_payload(page, "regularizations", regularization_to_dict))

    @app.route(f"{API_PREFIX}/<int:regularization_id>", methods=["GET"], endpoint="regularization_get")
    def get_regularization(regularization_id: int):
        req = service.get_by_id(tenant_id=current_tenant_id(), regularization_id=regularization_id)
        return ok(regularization_to_dict(req))

    @app.route(f"{API_PREFIX}/<int:regularization_id>/approve", methods=["POST"], endpoint="regularization_approve")
    def approve(regularization_id: int):
        req = service.approve(
            tenant_id=current_tenant_id(),
            regularization_id=regularization_id,
            reviewed_by=current_user_id(),
        )
        return ok(regularization_to_dict(req))

    @app.route(f"{API_PREFIX}/<int:regularization_id>/reject", methods=["POST"], endpoint="regularization_reject")
    def reject(regularization_id: int):
        data = json_body()
        req = service.reject(
            tenant_id=current_tenant_id(),
            regularization_id=regularization_id,
            rejection_reason=str(data.get("rejection_reason") or ""),
            reviewed_by=current_user_id(),
        )
        return ok(regularization_to_dict(req))
