from __future__ import annotations

from datetime import datetime

from flask import Flask, request

from ..common.datetime_utils import format_ts, now_local, parse_hhmm
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
from ..common.validators import require_id, require_max_length
from ..core.constants import MAX_REMARKS_LENGTH
from ..core.enums import AttendanceStatus
from ..core.exceptions import InvalidStatusError, StaffIDRequiredError, ValidationError
from .model import AttendanceFilter, AttendanceRecord

API_PREFIX = "/api/v1/attendance"


def attendance_to_dict(r: AttendanceRecord) -> dict:
    return {
        "id": r.attendance_id,
        "staff_id": r.staff_id,
        "staff_name": r.staff_name,
        "employee_id": r.employee_id,
        "attendance_date": r.attendance_date.isoformat(),
        "status": r.status.value,
        "check_in_time": format_ts(r.check_in_time),
        "check_out_time": format_ts(r.check_out_time),
        "is_late": r.is_late,
        "late_minutes": r.late_minutes,
        "half_day_type": r.half_day_type.value if r.half_day_type else None,
        "remarks": r.remarks,
        "marked_by": r.marked_by,
        "marked_at": format_ts(r.marked_at),
        "created_at": format_ts(r.created_at),
        "updated_at": format_ts(r.updated_at),
    }


def _remarks(data: dict) -> str:
    return require_max_length(str(data.get("remarks") or ""), "remarks", MAX_REMARKS_LENGTH)


def _status_param(value):
    if not value:
        return None
    try:
        return AttendanceStatus(value)
    except ValueError:
        raise InvalidStatusError()


def _time_on(day, value):
    """Combine an HH:MM body field with the attendance date."""
    if value is None or not str(value).strip():
        return None
    return datetime.combine(day, parse_hhmm(str(value)))


def _list_filter(tenant_id: int, **overrides) -> AttendanceFilter:
    fields = dict(
        tenant_id=tenant_id,
        staff_id=query_id("staff_id"),
        branch_id=query_id("branch_id"),
        department_id=query_id("department_id"),
        status=_status_param(request.args.get("status")),
        date_from=query_date("date_from"),
        date_to=query_date("date_to"),
        cursor=request.args.get("cursor") or None,
        limit=query_int("limit"),
        sort_by=request.args.get("sort_by") or None,
        sort_order=request.args.get("sort_order") or None,
    )
    fields.update(overrides)
    return AttendanceFilter(**fields)


def register(app: Flask, container) -> None:
    service = container.attendance_service

    @app.route(f"{API_PREFIX}/check-in", methods=["POST"], endpoint="attendance_check_in")
    def check_in():
        data = json_body()
        record = service.check_in(
            tenant_id=current_tenant_id(),
            staff_id=require_id(data.get("staff_id"), StaffIDRequiredError),
            half_day_type=data.get("half_day_type"),
            remarks=_remarks(data),
            marked_by=current_user_id(),
        )
        return ok(attendance_to_dict(record), 201)

    @app.route(f"{API_PREFIX}/check-out", methods=["POST"], endpoint="attendance_check_out")
    def check_out():
        data = json_body()
        record = service.check_out(
            tenant_id=current_tenant_id(),
            staff_id=require_id(data.get("staff_id"), StaffIDRequiredError),
            remarks=_remarks(data),
        )
        return ok(attendance_to_dict(record))

    @app.route(f"{API_PREFIX}/my/today", methods=["GET"], endpoint="attendance_my_today")
    def my_today():
        today = service.get_today_status(
            tenant_id=current_tenant_id(),
            staff_id=require_id(request.args.get("staff_id"), StaffIDRequiredError),
        )
        return ok(
            {
                "status": today.state.value,
                "attendance": attendance_to_dict(today.record) if today.record else None,
                "can_check_in": today.can_check_in,
                "can_check_out": today.can_check_out,
            }
        )

    @app.route(f"{API_PREFIX}/my", methods=["GET"], endpoint="attendance_my_list")
    def my_list():
        tenant_id = current_tenant_id()
        staff_id = require_id(request.args.get("staff_id"), StaffIDRequiredError)
        page = service.list_attendance(
            _list_filter(tenant_id, staff_id=staff_id, branch_id=None, department_id=None)
        )
        return ok(page_payload(page, "attendance", attendance_to_dict))

    @app.route(f"{API_PREFIX}/my/summary", methods=["GET"], endpoint="attendance_my_summary")
    def my_summary():
        tenant_id = current_tenant_id()
        staff_id = require_id(request.args.get("staff_id"), StaffIDRequiredError)
        now = now_local()
        year = query_int("year")
        month = query_int("month")
        summary = container.summary_service.monthly_summary(
            tenant_id=tenant_id,
            staff_id=staff_id,
            year=now.year if year is None else year,
            month=now.month if month is None else month,
        )
        return ok(
            {
                "staff_id": summary.staff_id,
                "month": summary.month_name,
                "year": summary.year,
                "total_days": summary.total_days,
                "present_days": summary.present_days,
                "absent_days": summary.absent_days,
                "half_days": summary.half_days,
                "leave_days": summary.leave_days,
                "holiday_days": summary.holiday_days,
                "late_days": summary.late_days,
                "total_late_minutes": summary.total_late_minutes,
            }
        )

    @app.route(API_PREFIX, methods=["GET"], endpoint="attendance_list")
    def list_attendance():
        page = service.list_attendance(_list_filter(current_tenant_id()))
        return ok(page_payload(page, "attendance", attendance_to_dict))

    @app.route(f"{API_PREFIX}/<int:attendance_id>", methods=["GET"], endpoint="attendance_get")
    def get_attendance(attendance_id: int):
        record = service.get_by_id(tenant_id=current_tenant_id(), attendance_id=attendance_id)
        return ok(attendance_to_dict(record))

    @app.route(f"{API_PREFIX}/mark", methods=["POST"], endpoint="attendance_mark")
    def mark():
        data = json_body()
        tenant_id = current_tenant_id()
        staff_id = require_id(data.get("staff_id"), StaffIDRequiredError)
        day = optional_date(data.get("attendance_date"))
        check_in_time = _time_on(day, data.get("check_in_time")) if day else None
        check_out_time = _time_on(day, data.get("check_out_time")) if day else None
        if check_in_time and check_out_time and check_out_time < check_in_time:
            raise ValidationError("check_out_time must not be before check_in_time")

        record = service.mark_attendance(
            tenant_id=tenant_id,
            staff_id=staff_id,
            attendance_date=day,
            status=data.get("status"),
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            half_day_type=data.get("half_day_type"),
            remarks=_remarks(data),
            marked_by=current_user_id(),
        )
        return ok(attendance_to_dict(record))
