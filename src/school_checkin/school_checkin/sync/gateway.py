from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional, Sequence

from ..attendance.model import CheckInRecord
from ..attendance.repository import AttendanceRepository
from ..core.exceptions import RemoteUnavailable
from .merge import merge_remote_and_local
from .sheets import SheetsClient

logger = logging.getLogger(__name__)


class StorageSyncGateway:
    """Local persistence plus best-effort propagation to the remote sheet."""

    def __init__(
        self,
        records: AttendanceRepository,
        client: SheetsClient,
        *,
        endpoint: Callable[[], Optional[str]],
    ):
        self._records = records
        self._client = client
        self._endpoint = endpoint

    @property
    def endpoint(self) -> Optional[str]:
        return self._endpoint()

    def save(self, record: CheckInRecord) -> None:
        self._records.save(record)

    def get(self, record_id: str) -> Optional[CheckInRecord]:
        return self._records.get(record_id)

    def list(self) -> Sequence[CheckInRecord]:
        return self._records.list_all()

    def list_between(self, start: date, end: date) -> Sequence[CheckInRecord]:
        return self._records.list_between(start, end)

    def list_unsynced(self) -> Sequence[CheckInRecord]:
        return self._records.list_unsynced()

    def delete(self, record_id: str) -> bool:
        return self._records.delete(record_id)

    def delete_all(self) -> int:
        return self._records.delete_all()

    def push_remote(self, record: CheckInRecord) -> bool:
        url = self.endpoint
        if not url:
            return False
        if not self._client.push_record(url, record):
            return False
        self._records.mark_synced(record.record_id)
        return True

    def fetch_remote(self) -> list[CheckInRecord]:
        url = self.endpoint
        if not url:
            return []
        try:
            return self._client.fetch_records(url)
        except RemoteUnavailable as e:
            logger.warning("could not fetch remote records: %s", e)
            return []

    def merge_remote_and_local(self, remote: Sequence[CheckInRecord], local: Sequence[CheckInRecord]) -> list[CheckInRecord]:
        return merge_remote_and_local(remote, local)

    def list_merged(self, start: date, end: date) -> list[CheckInRecord]:
        remote = [r for r in self.fetch_remote() if start <= r.calendar_date <= end]
        return self.merge_remote_and_local(remote, self.list_between(start, end))

    def push_edit(self, record: CheckInRecord, *, new_timestamp: int, new_status: str) -> bool:
        url = self.endpoint
        if not url:
            return False
        return self._client.edit_record(url, record=record, new_timestamp=new_timestamp, new_status=new_status)
