from __future__ import annotations

from datetime import time
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import AttendanceSettings
from .repository import SettingsRepository


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, tenant_id: int, branch_id: int) -> Optional[AttendanceSettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT settings_id, tenant_id, branch_id, work_start_time, work_end_time,
                       late_threshold_minutes, half_day_threshold_hours,
                       allow_self_checkout, require_regularization_approval,
                       created_at, updated_at
                FROM staff_attendance_settings
                WHERE tenant_id=%s AND branch_id=%s
                """,
                (int(tenant_id), int(branch_id)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return AttendanceSettings(
                settings_id=int(r["settings_id"]),
                tenant_id=int(r["tenant_id"]),
                branch_id=int(r["branch_id"]),
                work_start_time=normalize_mysql_time(r["work_start_time"]),
                work_end_time=normalize_mysql_time(r["work_end_time"]),
                late_threshold_minutes=int(r["late_threshold_minutes"]),
                half_day_threshold_hours=float(r["half_day_threshold_hours"]),
                allow_self_checkout=bool(r["allow_self_checkout"]),
                require_regularization_approval=bool(r["require_regularization_approval"]),
                created_at=r.get("created_at"),
                updated_at=r.get("updated_at"),
            )

    def upsert(
        self,
        *,
        tenant_id: int,
        branch_id: int,
        work_start_time: time,
        work_end_time: time,
        late_threshold_minutes: int,
        half_day_threshold_hours: float,
        allow_self_checkout: bool,
        require_regularization_approval: bool,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO staff_attendance_settings(
                    tenant_id, branch_id, work_start_time, work_end_time,
                    late_threshold_minutes, half_day_threshold_hours,
                    allow_self_checkout, require_regularization_approval
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    work_start_time=VALUES(work_start_time),
                    work_end_time=VALUES(work_end_time),
                    late_threshold_minutes=VALUES(late_threshold_minutes),
                    half_day_threshold_hours=VALUES(half_day_threshold_hours),
                    allow_self_checkout=VALUES(allow_self_checkout),
                    require_regularization_approval=VALUES(require_regularization_approval)
                """,
                (
                    int(tenant_id),
                    int(branch_id),
                    work_start_time,
                    work_end_time,
                    int(late_threshold_minutes),
                    float(half_day_threshold_hours),
                    1 if allow_self_checkout else 0,
                    1 if require_regularization_approval else 0,
                ),
            )
