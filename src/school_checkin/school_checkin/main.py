from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .admin.controller import register as register_admin
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables, seed_staff
from .staff.seed import DEFAULT_STAFF_LIST
from .sync.scheduler import build_sync_scheduler, start_sync_scheduler

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format=LOG_FORMAT)
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            added = seed_staff(db_config, DEFAULT_STAFF_LIST)
            logger.info("default staff seeded (%d new)", added)

        container = build_container(db_config=db_config, settings=settings)

    register_attendance(app, container)
    register_admin(app, container)

    if not app.config["TESTING"]:
        scheduler = build_sync_scheduler(
            container.outbox,
            container.settings_service,
            interval_seconds=container.sync_interval_seconds,
        )
        if start_sync_scheduler(scheduler):
            app.extensions["sync_scheduler"] = scheduler

    return app
