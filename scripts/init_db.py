from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.school_checkin.school_checkin.database.bootstrap import apply_schema, list_tables


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(db_config)
    print(
        f"OK: schema.sql applied to {db_config.get('user')}@{db_config.get('host')}:"
        f"{db_config.get('port', 3306)}/{db_config.get('database')} ({', '.join(sorted(tables))})"
    )


if __name__ == "__main__":
    main()
