from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import to_epoch_ms
from ..core.enums import AttendanceType, CheckInStatus
from ..core.exceptions import ValidationError
from ..sync.gateway import StorageSyncGateway
from .factory import AttendanceStrategyFactory
from .model import CheckInRecord

_TIMED_TYPES = (AttendanceType.ARRIVAL, AttendanceType.DEPARTURE)


@dataclass(frozen=True)
class TimeEditOutcome:
    success: bool
    new_timestamp: Optional[int] = None
    new_status: Optional[CheckInStatus] = None


class RecordAdminService:
    """Use case: admin browses, corrects and deletes check-in records."""

    def __init__(self, gateway: StorageSyncGateway, *, strategy_factory: Optional[AttendanceStrategyFactory] = None):
        self._gateway = gateway
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def list_for_date(self, day: date) -> list[CheckInRecord]:
        return sorted(self._gateway.list_between(day, day), key=lambda r: r.timestamp)

    def delete(self, record_id: str) -> None:
        if not self._gateway.delete(record_id):
            raise ValidationError("ไม่พบรายการที่ต้องการลบ")

    def clear_all(self) -> int:
        return self._gateway.delete_all()

    @staticmethod
    def _parse_time(value: str):
        try:
            return datetime.strptime((value or "").strip(), "%H:%M").time()
        except ValueError:
            raise ValidationError("เวลาไม่ถูกต้อง (HH:MM)")

    def edit_time(self, record_id: str, new_time: str) -> TimeEditOutcome:
        """Recompute status for a corrected time and send the edit to the sheet.

        The local record is left untouched; the sheet is the system of record
        for corrections.
        """

        record = self._gateway.get(record_id)
        if not record:
            raise ValidationError("ไม่พบรายการที่ต้องการแก้ไข")

        moment = datetime.combine(record.calendar_date, self._parse_time(new_time))
        status = record.status
        if record.type in _TIMED_TYPES:
            status = self._factory.for_type(record.type).decide(now=moment).status

        new_timestamp = to_epoch_ms(moment)
        if not self._gateway.push_edit(record, new_timestamp=new_timestamp, new_status=status.value):
            return TimeEditOutcome(success=False)
        return TimeEditOutcome(success=True, new_timestamp=new_timestamp, new_status=status)
