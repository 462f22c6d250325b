from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

import mysql.connector

from ..common.pagination import Page, build_page, clamp_limit, parse_cursor
from ..core.enums import AttendanceStatus, RegularizationStatus
from ..core.exceptions import CannotRegularizePendingRequestError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, keyset_predicate
from .model import RegularizationFilter, RegularizationRequest
from .repository import RegularizationRepository

_SELECT = """
    SELECT r.regularization_id, r.tenant_id, r.staff_id, r.attendance_id, r.request_date,
           r.requested_status, r.reason, r.supporting_document_url, r.status,
           r.reviewed_by, r.reviewed_at, r.rejection_reason, r.created_at, r.updated_at,
           s.first_name, s.last_name, s.employee_id
    FROM staff_attendance_regularization r
    LEFT JOIN staff s ON s.staff_id = r.staff_id AND s.tenant_id = r.tenant_id
"""

_SORT_COLUMNS = ["r.created_at", "r.regularization_id"]


def _row_to_request(r: dict) -> RegularizationRequest:
    staff_name = None
    if r.get("first_name") is not None or r.get("last_name") is not None:
        staff_name = f"{r.get('first_name') or ''} {r.get('last_name') or ''}".strip()
    return RegularizationRequest(
        regularization_id=int(r["regularization_id"]),
        tenant_id=int(r["tenant_id"]),
        staff_id=int(r["staff_id"]),
        attendance_id=int(r["attendance_id"]) if r.get("attendance_id") is not None else None,
        request_date=r["request_date"],
        requested_status=AttendanceStatus(r["requested_status"]),
        reason=r.get("reason") or "",
        supporting_document_url=r.get("supporting_document_url") or None,
        status=RegularizationStatus(r["status"]),
        reviewed_by=int(r["reviewed_by"]) if r.get("reviewed_by") is not None else None,
        reviewed_at=r.get("reviewed_at"),
        rejection_reason=r.get("rejection_reason") or None,
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        staff_name=staff_name,
        employee_id=r.get("employee_id"),
    )


class MySQLRegularizationRepository(RegularizationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get(self, *, tenant_id: int, regularization_id: int, lock: bool) -> Optional[RegularizationRequest]:
        sql = _SELECT + " WHERE r.tenant_id=%s AND r.regularization_id=%s"
        if lock:
            sql += " FOR UPDATE"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, (int(tenant_id), int(regularization_id)))
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def get_by_id(self, *, tenant_id: int, regularization_id: int) -> Optional[RegularizationRequest]:
        return self._get(tenant_id=tenant_id, regularization_id=regularization_id, lock=False)

    def get_for_update(self, *, tenant_id: int, regularization_id: int) -> Optional[RegularizationRequest]:
        return self._get(tenant_id=tenant_id, regularization_id=regularization_id, lock=True)

    def has_pending(self, *, tenant_id: int, staff_id: int, request_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS pending
                FROM staff_attendance_regularization
                WHERE tenant_id=%s AND staff_id=%s AND request_date=%s AND status=%s
                """,
                (int(tenant_id), int(staff_id), request_date, RegularizationStatus.PENDING.value),
            )
            r = fetchone(cur) or {}
            return int(r.get("pending") or 0) > 0

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
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO staff_attendance_regularization(
                        tenant_id, staff_id, attendance_id, request_date, requested_status,
                        reason, supporting_document_url, status
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(tenant_id),
                        int(staff_id),
                        attendance_id,
                        request_date,
                        requested_status.value,
                        reason,
                        supporting_document_url,
                        RegularizationStatus.PENDING.value,
                    ),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise CannotRegularizePendingRequestError() from e
            raise

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE staff_attendance_regularization
                SET status=%s, reviewed_by=%s, reviewed_at=%s, rejection_reason=%s
                WHERE tenant_id=%s AND regularization_id=%s AND status=%s
                """,
                (
                    status.value,
                    reviewed_by,
                    reviewed_at,
                    rejection_reason,
                    int(tenant_id),
                    int(regularization_id),
                    RegularizationStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def list_requests(self, query: RegularizationFilter) -> Page[RegularizationRequest]:
        clauses = ["r.tenant_id=%s"]
        params: list[Any] = [int(query.tenant_id)]

        if query.staff_id is not None:
            clauses.append("r.staff_id=%s")
            params.append(int(query.staff_id))
        if query.status is not None:
            clauses.append("r.status=%s")
            params.append(query.status.value)
        if query.date_from is not None:
            clauses.append("r.request_date >= %s")
            params.append(query.date_from)
        if query.date_to is not None:
            clauses.append("r.request_date <= %s")
            params.append(query.date_to)

        limit = clamp_limit(query.limit)

        with db_cursor(self._conn_factory) as (_, cur):
            where = " AND ".join(clauses)
            cur.execute(
                f"SELECT COUNT(*) AS total FROM staff_attendance_regularization r WHERE {where}",
                tuple(params),
            )
            total = int((fetchone(cur) or {}).get("total") or 0)

            cursor_id = parse_cursor(query.cursor)
            if cursor_id is not None:
                cur.execute(
                    """
                    SELECT created_at, regularization_id
                    FROM staff_attendance_regularization
                    WHERE tenant_id=%s AND regularization_id=%s
                    """,
                    (int(query.tenant_id), cursor_id),
                )
                anchor = fetchone(cur)
                if anchor:
                    predicate, extra = keyset_predicate(
                        _SORT_COLUMNS, [anchor["created_at"], anchor["regularization_id"]], descending=True
                    )
                    clauses.append(predicate)
                    params.extend(extra)

            where = " AND ".join(clauses)
            cur.execute(
                _SELECT + f" WHERE {where} ORDER BY r.created_at DESC, r.regularization_id DESC LIMIT %s",
                tuple(params) + (limit + 1,),
            )
            rows = [_row_to_request(r) for r in fetchall(cur)]

        return build_page(rows, limit=limit, total=total, key=lambda req: req.regularization_id)
