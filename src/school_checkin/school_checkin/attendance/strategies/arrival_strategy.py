from __future__ import annotations

from datetime import datetime, time

from ...core.constants import ARRIVAL_LATE_FROM
from ...core.enums import CheckInStatus, MessageCategory
from .base import AttendanceStrategy, StatusDecision


class ArrivalStrategy(AttendanceStrategy):
    """Arrival: late (and reason mandatory) from 08:01:00."""

    requires_location = True

    def __init__(self, late_from: time = ARRIVAL_LATE_FROM):
        self._late_from = late_from

    def _is_late(self, now: datetime) -> bool:
        return now.time() >= self._late_from

    def requires_reason(self, *, now: datetime) -> bool:
        return self._is_late(now)

    def decide(self, *, now: datetime) -> StatusDecision:
        if self._is_late(now):
            return StatusDecision(status=CheckInStatus.LATE, category=MessageCategory.LATE)
        return StatusDecision(status=CheckInStatus.ON_TIME, category=MessageCategory.ON_TIME)
