from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendanceType, CheckInStatus
from .strategies.arrival_strategy import ArrivalStrategy
from .strategies.base import AttendanceStrategy
from .strategies.departure_strategy import DepartureStrategy
from .strategies.leave_strategy import LeaveStrategy

_LEAVE_STATUS = {
    AttendanceType.DUTY: CheckInStatus.DUTY,
    AttendanceType.SICK_LEAVE: CheckInStatus.SICK_LEAVE,
    AttendanceType.PERSONAL_LEAVE: CheckInStatus.PERSONAL_LEAVE,
    AttendanceType.OTHER_LEAVE: CheckInStatus.OTHER_LEAVE,
}


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the policy for an attendance type."""

    def for_type(self, attendance_type: AttendanceType) -> AttendanceStrategy:
        if attendance_type == AttendanceType.ARRIVAL:
            return ArrivalStrategy()
        if attendance_type == AttendanceType.DEPARTURE:
            return DepartureStrategy()
        if attendance_type == AttendanceType.AUTHORIZED_LATE:
            return LeaveStrategy(CheckInStatus.AUTHORIZED_LATE, requires_location=True)
        return LeaveStrategy(_LEAVE_STATUS[attendance_type])
