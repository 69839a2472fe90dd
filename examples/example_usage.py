"""Example: drive the service layer directly (no Flask).

Controllers stay thin; the attendance rules live in the services.
"""

import importlib

from config import get_settings_module

from src.attendance_portal.attendance_portal.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, storage_config=settings.STORAGE_CONFIG)
    print(container.site_service.list_sites())
    print(container.attendance_service.get_status_view("tl1@martindaletech.com"))


if __name__ == "__main__":
    main()
