from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.school_checkin.school_checkin.database.bootstrap import seed_staff
from src.school_checkin.school_checkin.staff.seed import DEFAULT_STAFF_LIST


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    added = seed_staff(db_config, DEFAULT_STAFF_LIST)
    print(f"OK: {added} of {len(DEFAULT_STAFF_LIST)} default staff inserted into {db_config.get('database')}")


if __name__ == "__main__":
    main()
