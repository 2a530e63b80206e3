from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import from_epoch_ms
from ..core.enums import AttendanceType, CheckInStatus
from ..geo.model import GeoLocation


@dataclass(frozen=True)
class CheckInRecord:
    """Domain entity: one check-in.

    Immutable once synthesized; only `synced` flips after the remote push.
    """

    record_id: str
    staff_id: str
    name: str
    role: str
    type: AttendanceType
    timestamp: int  # epoch ms
    location: GeoLocation
    distance_from_base: float
    status: CheckInStatus
    image_ref: str = ""
    ai_note: Optional[str] = None
    reason: Optional[str] = None
    synced: bool = False

    @property
    def moment(self) -> datetime:
        return from_epoch_ms(self.timestamp)

    @property
    def calendar_date(self) -> date:
        return self.moment.date()

    @property
    def image_size(self) -> int:
        return len(self.image_ref or "")

    def mark_synced(self) -> "CheckInRecord":
        return replace(self, synced=True)

    def to_dict(self) -> dict:
        """JSON shape exchanged with the remote sheet."""

        data = {
            "id": self.record_id,
            "staffId": self.staff_id,
            "name": self.name,
            "role": self.role,
            "type": self.type.value,
            "timestamp": self.timestamp,
            "location": self.location.to_dict(),
            "distanceFromBase": self.distance_from_base,
            "status": self.status.value,
            "imageUrl": self.image_ref,
            "aiVerification": self.ai_note,
            "syncedToSheets": self.synced,
        }
        if self.reason:
            data["reason"] = self.reason
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CheckInRecord":
        return cls(
            record_id=str(data["id"]),
            staff_id=str(data.get("staffId") or ""),
            name=str(data.get("name") or ""),
            role=str(data.get("role") or ""),
            type=AttendanceType(data["type"]),
            timestamp=int(data["timestamp"]),
            location=GeoLocation.from_dict(data.get("location")),
            distance_from_base=float(data.get("distanceFromBase") or 0),
            status=CheckInStatus(data["status"]),
            image_ref=str(data.get("imageUrl") or ""),
            ai_note=data.get("aiVerification"),
            reason=data.get("reason") or None,
            synced=bool(data.get("syncedToSheets", False)),
        )
