from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Callable

from .attendance.factory import LatenessStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .database.unit_of_work import MySQLUnitOfWork, UnitOfWork
from .regularization.mysql_regularization_repository import MySQLRegularizationRepository
from .regularization.repository import RegularizationRepository
from .regularization.service import RegularizationService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.resolver import SettingsResolver
from .settings.service import SettingsService
from .staff.mysql_staff_directory import MySQLStaffDirectory
from .staff.repository import StaffDirectory
from .summary.service import SummaryService


@dataclass(frozen=True)
class Container:
    staff_directory: StaffDirectory
    settings_repo: SettingsRepository
    attendance_repo: AttendanceRepository
    regularizations_repo: RegularizationRepository
    uow_factory: Callable[[], UnitOfWork]

    settings_service: SettingsService
    attendance_service: AttendanceService
    regularization_service: RegularizationService
    summary_service: SummaryService


def wire(
    *,
    staff_directory: StaffDirectory,
    settings_repo: SettingsRepository,
    attendance_repo: AttendanceRepository,
    regularizations_repo: RegularizationRepository,
    uow_factory: Callable[[], UnitOfWork],
) -> Container:
    """Build the services on top of whatever storage adapters are given."""

    attendance_service = AttendanceService(
        attendance_repo,
        staff_directory,
        SettingsResolver(settings_repo),
        strategy_factory=LatenessStrategyFactory(),
    )
    return Container(
        staff_directory=staff_directory,
        settings_repo=settings_repo,
        attendance_repo=attendance_repo,
        regularizations_repo=regularizations_repo,
        uow_factory=uow_factory,
        settings_service=SettingsService(settings_repo),
        attendance_service=attendance_service,
        regularization_service=RegularizationService(
            regularizations_repo, attendance_repo, staff_directory, uow_factory
        ),
        summary_service=SummaryService(attendance_repo),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        staff_directory=MySQLStaffDirectory(conn),
        settings_repo=MySQLSettingsRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        regularizations_repo=MySQLRegularizationRepository(conn),
        uow_factory=partial(MySQLUnitOfWork, conn),
    )
