from __future__ import annotations

from datetime import date

import mysql.connector
import pytest
from mysql.connector import errorcode

from src.staff_attendance.staff_attendance.core.enums import AttendanceStatus
from src.staff_attendance.staff_attendance.core.exceptions import CannotRegularizePendingRequestError
from src.staff_attendance.staff_attendance.database.mysql_base import PinnedConnectionFactory, db_cursor
from src.staff_attendance.staff_attendance.database.unit_of_work import MySQLUnitOfWork
from tests.database.fake_mysql import FakeConnection, FakeConnectionFactory


def test_pinned_connection_ignores_commit_rollback_and_close():
    conn = FakeConnection([None, RuntimeError("boom")])
    factory = PinnedConnectionFactory(conn)

    with db_cursor(factory) as (_, cur):
        cur.execute("SELECT 1")
    with pytest.raises(RuntimeError):
        with db_cursor(factory) as (_, cur):
            cur.execute("SELECT 2")

    assert conn.calls == []


def test_unit_of_work_commits_once_on_success():
    conn = FakeConnection([None, {"lastrowid": 3}])
    factory = FakeConnectionFactory(conn)

    with MySQLUnitOfWork(factory) as uow:
        assert uow.attendance.get_by_id(tenant_id=1, attendance_id=9) is None
        uow.attendance.create(tenant_id=1, staff_id=1, attendance_date=date(2025, 3, 7), status=AttendanceStatus.PRESENT)

    assert factory.connects == 1
    assert conn.calls == ["start_transaction", "commit", "close"]


def test_unit_of_work_rolls_back_on_error():
    duplicate = mysql.connector.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)
    conn = FakeConnection([duplicate])

    with pytest.raises(CannotRegularizePendingRequestError):
        with MySQLUnitOfWork(FakeConnectionFactory(conn)) as uow:
            uow.regularizations.create(
                tenant_id=1,
                staff_id=1,
                request_date=date(2025, 3, 7),
                requested_status=AttendanceStatus.PRESENT,
                reason="Forgot",
            )

    assert conn.calls == ["start_transaction", "rollback", "close"]


def test_unit_of_work_shares_one_connection_between_stores():
    conn = FakeConnection([None, None])
    factory = FakeConnectionFactory(conn)

    with MySQLUnitOfWork(factory) as uow:
        uow.attendance.get_by_id(tenant_id=1, attendance_id=1)
        uow.regularizations.get_by_id(tenant_id=1, regularization_id=1)

    assert factory.connects == 1
    assert len(conn.executed) == 2
