"""Example: use the service layer directly (no Flask).

Prints today's official daily report for every staff member.
"""

import importlib

from config import get_settings_module

from src.school_checkin.school_checkin.common.datetime_utils import now_local
from src.school_checkin.school_checkin.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)

    today = now_local().date()
    holiday = container.holiday_resolver.holiday_for(today)
    print(f"{today.isoformat()} {holiday or ''}".strip())

    report = container.report_service.daily_report(today)
    for row in report.rows:
        print(f"{row['staffId']}\t{row['name']}\t{row['arrivalTime']}\t{row['arrivalStatus']}\t{row['note']}")
    print(report.summary)


if __name__ == "__main__":
    main()
