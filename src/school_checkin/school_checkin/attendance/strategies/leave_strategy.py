from __future__ import annotations

from datetime import datetime

from ...core.enums import CheckInStatus
from .base import AttendanceStrategy, StatusDecision


class LeaveStrategy(AttendanceStrategy):
    """Duty, leave and authorized-late: reason always mandatory, status is the type label."""

    def __init__(self, status: CheckInStatus, *, requires_location: bool = False):
        self._status = status
        self.requires_location = requires_location

    def requires_reason(self, *, now: datetime) -> bool:
        return True

    def decide(self, *, now: datetime) -> StatusDecision:
        return StatusDecision(status=self._status)
