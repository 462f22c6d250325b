from __future__ import annotations

import logging
from typing import Protocol

from ..attendance.mysql_attendance_repository import MySQLAttendanceRepository
from ..attendance.repository import AttendanceRepository
from ..regularization.mysql_regularization_repository import MySQLRegularizationRepository
from ..regularization.repository import RegularizationRepository
from .connection import DatabaseConnection
from .mysql_base import PinnedConnectionFactory

logger = logging.getLogger(__name__)


class UnitOfWork(Protocol):
    """Transaction boundary spanning the attendance and regularization stores.

    Usage:
        with uow_factory() as uow:
            uow.regularizations.get_for_update(...)
            uow.attendance.apply_regularization(...)

    Leaving the block normally commits; an exception rolls everything back.
    """

    attendance: AttendanceRepository
    regularizations: RegularizationRepository

    def __enter__(self) -> "UnitOfWork":
        raise NotImplementedError

    def __exit__(self, exc_type, exc, tb) -> None:
        raise NotImplementedError


class MySQLUnitOfWork:
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory
        self._conn = None
        self.attendance: AttendanceRepository | None = None
        self.regularizations: RegularizationRepository | None = None

    def __enter__(self) -> "MySQLUnitOfWork":
        self._conn = self._conn_factory.connect()
        self._conn.start_transaction()
        pinned = PinnedConnectionFactory(self._conn)
        self.attendance = MySQLAttendanceRepository(pinned)
        self.regularizations = MySQLRegularizationRepository(pinned)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        conn, self._conn = self._conn, None
        try:
            if exc_type is None:
                conn.commit()
            else:
                logger.debug("Rolling back unit of work after %s", exc_type.__name__)
                conn.rollback()
        finally:
            conn.close()
