from __future__ import annotations

from datetime import datetime, time

from ...core.constants import DEPARTURE_NORMAL_FROM
from ...core.enums import CheckInStatus, MessageCategory
from .base import AttendanceStrategy, StatusDecision


class DepartureStrategy(AttendanceStrategy):
    """Departure: early leave (and reason mandatory) before 16:00:00."""

    requires_location = True

    def __init__(self, normal_from: time = DEPARTURE_NORMAL_FROM):
        self._normal_from = normal_from

    def _is_early(self, now: datetime) -> bool:
        return now.time() < self._normal_from

    def requires_reason(self, *, now: datetime) -> bool:
        return self._is_early(now)

    def decide(self, *, now: datetime) -> StatusDecision:
        status = CheckInStatus.EARLY_LEAVE if self._is_early(now) else CheckInStatus.NORMAL
        return StatusDecision(status=status, category=MessageCategory.DEPARTURE)
