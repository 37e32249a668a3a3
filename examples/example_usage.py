"""Example: use the service layer directly (no DB wiring in callers).

Prints the leave balance of worker 1 as of today in KST.
"""

import importlib
import json

from dotenv import load_dotenv

from config import get_settings_module

from src.guard_attendance.guard_attendance.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, timezone=settings.BUSINESS_TIMEZONE)
    print(json.dumps(container.vacation_service.balance_for_user(1), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
