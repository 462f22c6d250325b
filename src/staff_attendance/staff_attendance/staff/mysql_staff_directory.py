from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Staff
from .repository import StaffDirectory


class MySQLStaffDirectory(StaffDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, *, tenant_id: int, staff_id: int) -> Optional[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT staff_id, tenant_id, branch_id, department_id, employee_id, first_name, last_name
                FROM staff
                WHERE tenant_id=%s AND staff_id=%s
                """,
                (int(tenant_id), int(staff_id)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Staff(
                staff_id=int(r["staff_id"]),
                tenant_id=int(r["tenant_id"]),
                branch_id=int(r["branch_id"]) if r.get("branch_id") is not None else None,
                department_id=int(r["department_id"]) if r.get("department_id") is not None else None,
                employee_id=r.get("employee_id") or "",
                first_name=r.get("first_name") or "",
                last_name=r.get("last_name") or "",
            )
