from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import format_ts, parse_hhmm
from ..common.http import current_tenant_id, json_body, ok, query_id
from ..common.validators import require_id
from ..core.constants import (
    DEFAULT_HALF_DAY_THRESHOLD_HOURS,
    DEFAULT_LATE_THRESHOLD_MINUTES,
    MAX_HALF_DAY_THRESHOLD_HOURS,
    MAX_LATE_THRESHOLD_MINUTES,
)
from ..core.exceptions import BranchIDRequiredError, ValidationError
from .model import AttendanceSettings

API_PREFIX = "/api/v1/attendance/settings"


def settings_to_dict(s: AttendanceSettings) -> dict:
    return {
        "id": s.settings_id,
        "branch_id": s.branch_id,
        "work_start_time": s.work_start_time.strftime("%H:%M"),
        "work_end_time": s.work_end_time.strftime("%H:%M"),
        "late_threshold_minutes": s.late_threshold_minutes,
        "half_day_threshold_hours": s.half_day_threshold_hours,
        "allow_self_checkout": s.allow_self_checkout,
        "require_regularization_approval": s.require_regularization_approval,
        "is_default": s.is_default,
        "created_at": format_ts(s.created_at),
        "updated_at": format_ts(s.updated_at),
    }


def _required_time(data: dict, name: str):
    value = data.get(name)
    if value is None or not str(value).strip():
        raise ValidationError(f"{name} is required (HH:MM)")
    return parse_hhmm(str(value))


def _number_in_range(data: dict, name: str, default, low, high, cast):
    value = data.get(name, default)
    if cast is int and isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{name} must be a whole number")
    try:
        parsed = cast(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {name}")
    if isinstance(value, bool) or not low <= parsed <= high:
        raise ValidationError(f"{name} must be between {low} and {high}")
    return parsed


def _flag(data: dict, name: str) -> bool:
    value = data.get(name, True)
    if not isinstance(value, bool):
        raise ValidationError(f"{name} must be true or false")
    return value


def register(app: Flask, container) -> None:
    service = container.settings_service

    @app.route(API_PREFIX, methods=["GET"], endpoint="settings_get")
    def get_settings():
        tenant_id = current_tenant_id()
        branch_id = require_id(query_id("branch_id"), BranchIDRequiredError)
        return ok(settings_to_dict(service.get_settings_or_default(tenant_id=tenant_id, branch_id=branch_id)))

    @app.route(API_PREFIX, methods=["PUT"], endpoint="settings_update")
    def update_settings():
        data = json_body()
        tenant_id = current_tenant_id()
        branch_id = require_id(data.get("branch_id"), BranchIDRequiredError)
        work_start_time = _required_time(data, "work_start_time")
        work_end_time = _required_time(data, "work_end_time")

        settings = service.update_settings(
            tenant_id=tenant_id,
            branch_id=branch_id,
            work_start_time=work_start_time,
            work_end_time=work_end_time,
            late_threshold_minutes=_number_in_range(
                data, "late_threshold_minutes", DEFAULT_LATE_THRESHOLD_MINUTES, 0, MAX_LATE_THRESHOLD_MINUTES, int
            ),
            half_day_threshold_hours=_number_in_range(
                data, "half_day_threshold_hours", DEFAULT_HALF_DAY_THRESHOLD_HOURS, 0, MAX_HALF_DAY_THRESHOLD_HOURS, float
            ),
            allow_self_checkout=_flag(data, "allow_self_checkout"),
            require_regularization_approval=_flag(data, "require_regularization_approval"),
        )
        return ok(settings_to_dict(settings))
