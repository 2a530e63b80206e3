from __future__ import annotations

import logging
from datetime import datetime

from apscheduler.schedulers.background import BackgroundScheduler

from ..core.constants import DEFAULT_SYNC_INTERVAL_SECONDS
from ..settings.service import SettingsService
from .outbox import SyncOutbox

logger = logging.getLogger(__name__)


def build_sync_scheduler(
    outbox: SyncOutbox,
    settings: SettingsService,
    *,
    interval_seconds: int = DEFAULT_SYNC_INTERVAL_SECONDS,
) -> BackgroundScheduler:
    """Background jobs: periodic outbox drain and settings pull.

    Both jobs fire once on start, then every `interval_seconds`. The returned
    scheduler is attached to the outbox but not started.
    """

    scheduler = BackgroundScheduler(job_defaults={"coalesce": True, "max_instances": 1})
    first_run = datetime.now()
    scheduler.add_job(
        settings.sync_from_remote,
        "interval",
        seconds=interval_seconds,
        id="settings-pull",
        next_run_time=first_run,
    )
    scheduler.add_job(
        outbox.drain,
        "interval",
        seconds=interval_seconds,
        id="outbox-drain",
        next_run_time=first_run,
    )
    outbox.attach(scheduler)
    return scheduler


def start_sync_scheduler(scheduler: BackgroundScheduler) -> bool:
    try:
        scheduler.start()
    except Exception:
        logger.exception("sync scheduler failed to start, records stay queued locally")
        return False
    logger.info("sync scheduler started (%d jobs)", len(scheduler.get_jobs()))
    return True
