from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import CheckInStatus, MessageCategory


@dataclass(frozen=True)
class StatusDecision:
    status: CheckInStatus
    category: Optional[MessageCategory] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: per attendance type policy (reason, location, status)."""

    requires_location: bool = False

    @abstractmethod
    def requires_reason(self, *, now: datetime) -> bool:
        raise NotImplementedError

    @abstractmethod
    def decide(self, *, now: datetime) -> StatusDecision:
        raise NotImplementedError
