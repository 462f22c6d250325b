"""Example: drive the service layer directly, without Flask.

Controllers are thin; the attendance rules live in the services.
"""

import importlib
from pprint import pprint

from config import get_settings_module

from src.staff_attendance.staff_attendance.attendance.model import AttendanceFilter
from src.staff_attendance.staff_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    today = container.attendance_service.get_today_status(tenant_id=1, staff_id=1)
    pprint(today)

    page = container.attendance_service.list_attendance(AttendanceFilter(tenant_id=1, limit=5))
    pprint(page)


if __name__ == "__main__":
    main()
