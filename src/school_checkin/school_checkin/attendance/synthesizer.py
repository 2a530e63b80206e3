from __future__ import annotations

import uuid
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local, to_epoch_ms
from ..common.validators import clean_optional
from ..core.enums import AttendanceType, CheckInStatus
from ..geo.model import GeoCheckResult
from ..staff.model import StaffMember
from .model import CheckInRecord


class RecordSynthesizer:
    """Pure assembly of a CheckInRecord; persistence is the caller's job."""

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = now_local,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        self._clock = clock
        self._new_id = id_factory

    def synthesize(
        self,
        *,
        staff: StaffMember,
        attendance_type: AttendanceType,
        reason: Optional[str],
        geo: GeoCheckResult,
        status: CheckInStatus,
        image_ref: str,
        ai_note: Optional[str],
    ) -> CheckInRecord:
        return CheckInRecord(
            record_id=self._new_id(),
            staff_id=staff.staff_id,
            name=staff.name,
            role=staff.role,
            type=attendance_type,
            timestamp=to_epoch_ms(self._clock()),
            location=geo.location,
            distance_from_base=float(round(geo.distance_meters)) if geo.checked else 0.0,
            status=status,
            image_ref=image_ref,
            ai_note=ai_note,
            reason=clean_optional(reason),
            synced=False,
        )
