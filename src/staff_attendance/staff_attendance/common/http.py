"""Request parsing and JSON envelopes shared by the controllers.

Every response is `{"success": true, "data": ...}` or
`{"success": false, "error": {"code": ..., "message": ...}}`.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import ConflictError, DomainError, NotFoundError, TenantIDRequiredError, ValidationError
from .datetime_utils import parse_iso_date
from .pagination import Page
from .validators import optional_id, require_id

logger = logging.getLogger(__name__)

TENANT_HEADER = "X-Tenant-ID"
USER_HEADER = "X-User-ID"


def ok(data: Any = None, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def fail(code: str, message: str, status: int):
    return jsonify({"success": False, "error": {"code": code, "message": message}}), status


def status_for(exc: DomainError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ConflictError):
        return 409
    return 400


def register_error_handlers(app: Flask) -> None:
    def handle_domain_error(e: DomainError):
        return fail(e.code, str(e), status_for(e))

    def handle_http_error(e: HTTPException):
        return fail((e.name or "error").lower().replace(" ", "_"), e.description or e.name, e.code or 500)

    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return fail("internal_error", "Internal server error", 500)

    app.register_error_handler(DomainError, handle_domain_error)
    app.register_error_handler(HTTPException, handle_http_error)
    app.register_error_handler(Exception, handle_unexpected)


def current_tenant_id() -> int:
    return require_id(request.headers.get(TENANT_HEADER), TenantIDRequiredError)


def current_user_id() -> Optional[int]:
    return optional_id(request.headers.get(USER_HEADER), "user ID")


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def query_id(name: str) -> Optional[int]:
    return optional_id(request.args.get(name), name)


def query_int(name: str) -> Optional[int]:
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Invalid {name}")


def query_date(name: str) -> Optional[date]:
    raw = (request.args.get(name) or "").strip()
    return parse_iso_date(raw) if raw else None


def optional_date(value: Any) -> Optional[date]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_iso_date(str(value))


def page_payload(page: Page, key: str, serialize: Callable[[Any], dict]) -> dict:
    return {
        key: [serialize(item) for item in page.items],
        "next_cursor": page.next_cursor,
        "has_more": page.has_more,
        "total": page.total,
    }
