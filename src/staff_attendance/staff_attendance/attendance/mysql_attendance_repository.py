from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Sequence

import mysql.connector

from ..common.pagination import Page, build_page, clamp_limit, parse_cursor
from ..core.enums import AttendanceStatus, HalfDayType
from ..core.exceptions import DuplicateAttendanceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, keyset_predicate
from .model import AttendanceFilter, AttendanceRecord
from .repository import SORTABLE_COLUMNS, AttendanceRepository

_SELECT = """
    SELECT a.attendance_id, a.tenant_id, a.staff_id, a.attendance_date, a.status,
           a.check_in_time, a.check_out_time, a.is_late, a.late_minutes, a.half_day_type,
           a.remarks, a.marked_by, a.marked_at, a.created_at, a.updated_at,
           s.first_name, s.last_name, s.employee_id
    FROM staff_attendance a
    LEFT JOIN staff s ON s.staff_id = a.staff_id AND s.tenant_id = a.tenant_id
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    staff_name = None
    if r.get("first_name") is not None or r.get("last_name") is not None:
        staff_name = f"{r.get('first_name') or ''} {r.get('last_name') or ''}".strip()
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        tenant_id=int(r["tenant_id"]),
        staff_id=int(r["staff_id"]),
        attendance_date=r["attendance_date"],
        status=AttendanceStatus(r["status"]),
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        is_late=bool(r.get("is_late")),
        late_minutes=int(r.get("late_minutes") or 0),
        half_day_type=HalfDayType(r["half_day_type"]) if r.get("half_day_type") else None,
        remarks=r.get("remarks") or "",
        marked_by=int(r["marked_by"]) if r.get("marked_by") is not None else None,
        marked_at=r.get("marked_at"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        staff_name=staff_name,
        employee_id=r.get("employee_id"),
    )


def _half_day_value(half_day_type: Optional[HalfDayType]) -> str:
    return half_day_type.value if half_day_type else ""


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, *, tenant_id: int, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE a.tenant_id=%s AND a.attendance_id=%s",
                (int(tenant_id), int(attendance_id)),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_for_staff_and_date(
        self, *, tenant_id: int, staff_id: int, attendance_date: date
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE a.tenant_id=%s AND a.staff_id=%s AND a.attendance_date=%s",
                (int(tenant_id), int(staff_id), attendance_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create(
        self,
        *,
        tenant_id: int,
        staff_id: int,
        attendance_date: date,
        status: AttendanceStatus,
        check_in_time: Optional[datetime] = None,
        check_out_time: Optional[datetime] = None,
        is_late: bool = False,
        late_minutes: int = 0,
        half_day_type: Optional[HalfDayType] = None,
        remarks: str = "",
        marked_by: Optional[int] = None,
        marked_at: Optional[datetime] = None,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO staff_attendance(
                        tenant_id, staff_id, attendance_date, status, check_in_time, check_out_time,
                        is_late, late_minutes, half_day_type, remarks, marked_by, marked_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,COALESCE(%s, CURRENT_TIMESTAMP(6)))
                    """,
                    (
                        int(tenant_id),
                        int(staff_id),
                        attendance_date,
                        status.value,
                        check_in_time,
                        check_out_time,
                        1 if is_late else 0,
                        int(late_minutes),
                        _half_day_value(half_day_type),
                        remarks or "",
                        marked_by,
                        marked_at,
                    ),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateAttendanceError() from e
            raise

    def record_check_in(
        self,
        *,
        tenant_id: int,
        attendance_id: int,
        check_in_time: datetime,
        status: AttendanceStatus,
        half_day_type: Optional[HalfDayType],
        is_late: bool,
        late_minutes: int,
        remarks: str,
        marked_by: Optional[int],
        marked_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE staff_attendance
                SET check_in_time=%s, status=%s, half_day_type=%s, is_late=%s, late_minutes=%s,
                    remarks=%s, marked_by=%s, marked_at=%s
                WHERE tenant_id=%s AND attendance_id=%s AND check_in_time IS NULL
                """,
                (
                    check_in_time,
                    status.value,
                    _half_day_value(half_day_type),
                    1 if is_late else 0,
                    int(late_minutes),
                    remarks or "",
                    marked_by,
                    marked_at,
                    int(tenant_id),
                    int(attendance_id),
                ),
            )
            return cur.rowcount > 0

    def record_check_out(
        self, *, tenant_id: int, attendance_id: int, check_out_time: datetime, remarks: str
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE staff_attendance
                SET check_out_time=%s, remarks=%s
                WHERE tenant_id=%s AND attendance_id=%s AND check_out_time IS NULL
                """,
                (check_out_time, remarks or "", int(tenant_id), int(attendance_id)),
            )
            return cur.rowcount > 0

    def overwrite(
        self,
        *,
        tenant_id: int,
        attendance_id: int,
        status: AttendanceStatus,
        check_in_time: Optional[datetime],
        check_out_time: Optional[datetime],
        is_late: bool,
        late_minutes: int,
        half_day_type: Optional[HalfDayType],
        remarks: str,
        marked_by: Optional[int],
        marked_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE staff_attendance
                SET status=%s, check_in_time=%s, check_out_time=%s, is_late=%s, late_minutes=%s,
                    half_day_type=%s, remarks=%s, marked_by=%s, marked_at=%s
                WHERE tenant_id=%s AND attendance_id=%s
                """,
                (
                    status.value,
                    check_in_time,
                    check_out_time,
                    1 if is_late else 0,
                    int(late_minutes),
                    _half_day_value(half_day_type),
                    remarks or "",
                    marked_by,
                    marked_at,
                    int(tenant_id),
                    int(attendance_id),
                ),
            )
            return cur.rowcount > 0

    def apply_regularization(
        self, *, tenant_id: int, attendance_id: int, status: AttendanceStatus, remarks: str
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE staff_attendance
                SET status=%s, remarks=%s
                WHERE tenant_id=%s AND attendance_id=%s
                """,
                (status.value, remarks or "", int(tenant_id), int(attendance_id)),
            )
            return cur.rowcount > 0

    def list_records(self, query: AttendanceFilter) -> Page[AttendanceRecord]:
        clauses = ["a.tenant_id=%s"]
        params: list[Any] = [int(query.tenant_id)]

        if query.staff_id is not None:
            clauses.append("a.staff_id=%s")
            params.append(int(query.staff_id))
        if query.branch_id is not None:
            clauses.append("s.branch_id=%s")
            params.append(int(query.branch_id))
        if query.department_id is not None:
            clauses.append("s.department_id=%s")
            params.append(int(query.department_id))
        if query.status is not None:
            clauses.append("a.status=%s")
            params.append(query.status.value)
        if query.date_from is not None:
            clauses.append("a.attendance_date >= %s")
            params.append(query.date_from)
        if query.date_to is not None:
            clauses.append("a.attendance_date <= %s")
            params.append(query.date_to)

        if query.sort_by in SORTABLE_COLUMNS:
            sort_columns = [f"a.{query.sort_by}"]
            descending = (query.sort_order or "desc").lower() != "asc"
        else:
            sort_columns = ["a.attendance_date", "a.created_at"]
            descending = True
        sort_columns.append("a.attendance_id")
        direction = "DESC" if descending else "ASC"

        limit = clamp_limit(query.limit)

        with db_cursor(self._conn_factory) as (_, cur):
            where = " AND ".join(clauses)
            cur.execute(
                f"""
                SELECT COUNT(*) AS total
                FROM staff_attendance a
                LEFT JOIN staff s ON s.staff_id = a.staff_id AND s.tenant_id = a.tenant_id
                WHERE {where}
                """,
                tuple(params),
            )
            total = int((fetchone(cur) or {}).get("total") or 0)

            cursor_id = parse_cursor(query.cursor)
            if cursor_id is not None:
                cur.execute(
                    f"SELECT {', '.join(sort_columns)} FROM staff_attendance a WHERE a.tenant_id=%s AND a.attendance_id=%s",
                    (int(query.tenant_id), cursor_id),
                )
                anchor = fetchone(cur)
                if anchor:
                    values = [anchor[c.split(".", 1)[1]] for c in sort_columns]
                    predicate, extra = keyset_predicate(sort_columns, values, descending=descending)
                    clauses.append(predicate)
                    params.extend(extra)

            where = " AND ".join(clauses)
            order_by = ", ".join(f"{c} {direction}" for c in sort_columns)
            cur.execute(
                _SELECT + f" WHERE {where} ORDER BY {order_by} LIMIT %s",
                tuple(params) + (limit + 1,),
            )
            rows = [_row_to_record(r) for r in fetchall(cur)]

        return build_page(rows, limit=limit, total=total, key=lambda rec: rec.attendance_id)

    def list_for_period(
        self, *, tenant_id: int, staff_id: int, date_from: date, date_to: date
    ) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE a.tenant_id=%s AND a.staff_id=%s AND a.attendance_date BETWEEN %s AND %s
                ORDER BY a.attendance_date ASC
                """,
                (int(tenant_id), int(staff_id), date_from, date_to),
            )
            return [_row_to_record(r) for r in fetchall(cur)]
