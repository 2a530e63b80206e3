from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class SpecialHoliday:
    """Admin-defined holiday range (inclusive on both ends)."""

    holiday_id: str
    start_date: date
    end_date: date
    name: str

    def to_dict(self) -> dict:
        return {
            "id": self.holiday_id,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "name": self.name,
        }


@dataclass(frozen=True)
class SpecialHolidayItem:
    """One calendar day of an expanded SpecialHoliday."""

    holiday_id: str
    day: date
    name: str
