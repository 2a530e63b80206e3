from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import CheckInRecord


class AttendanceRepository(Protocol):
    """Local store of check-in records."""

    def save(self, record: CheckInRecord) -> None:
        raise NotImplementedError

    def get(self, record_id: str) -> Optional[CheckInRecord]:
        raise NotImplementedError

    def list_all(self) -> Sequence[CheckInRecord]:
        """Every record, oldest first."""

        raise NotImplementedError

    def list_between(self, start: date, end: date) -> Sequence[CheckInRecord]:
        raise NotImplementedError

    def list_unsynced(self) -> Sequence[CheckInRecord]:
        raise NotImplementedError

    def mark_synced(self, record_id: str) -> bool:
        """Flip only the synced flag, atomically."""

        raise NotImplementedError

    def delete(self, record_id: str) -> bool:
        raise NotImplementedError

    def delete_all(self) -> int:
        raise NotImplementedError
