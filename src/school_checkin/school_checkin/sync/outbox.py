from __future__ import annotations

import logging
import threading
from typing import Optional

from apscheduler.schedulers.base import BaseScheduler

from .gateway import StorageSyncGateway

logger = logging.getLogger(__name__)

DRAIN_NOW_JOB_ID = "outbox-drain-now"


class SyncOutbox:
    """Unsynced local records, drained to the remote sheet until acknowledged.

    Drains never overlap; a record's synced flag only flips after its push
    succeeded.
    """

    def __init__(self, gateway: StorageSyncGateway, *, scheduler: Optional[BaseScheduler] = None):
        self._gateway = gateway
        self._scheduler = scheduler
        self._lock = threading.Lock()

    def attach(self, scheduler: BaseScheduler) -> None:
        self._scheduler = scheduler

    def pending(self) -> int:
        return len(self._gateway.list_unsynced())

    def drain(self) -> int:
        """Push every unsynced record once; returns how many were acknowledged."""

        if not self._lock.acquire(blocking=False):
            logger.debug("outbox drain already running")
            return 0
        try:
            unsynced = sorted(self._gateway.list_unsynced(), key=lambda r: r.timestamp)
            if not unsynced or not self._gateway.endpoint:
                return 0

            logger.info("found %d unsynced records, pushing", len(unsynced))
            synced = sum(1 for record in unsynced if self._gateway.push_remote(record))
            if synced:
                logger.info("synced %d/%d records", synced, len(unsynced))
            return synced
        finally:
            self._lock.release()

    def kick(self) -> None:
        """Schedule an immediate drain without waiting for it."""

        if self._scheduler is None or not self._scheduler.running:
            return
        self._scheduler.add_job(
            self.drain,
            id=DRAIN_NOW_JOB_ID,
            replace_existing=True,
            misfire_grace_time=None,
        )
