from __future__ import annotations

from typing import Protocol, Sequence

from .model import SpecialHoliday


class SpecialHolidayRepository(Protocol):
    def list_all(self) -> Sequence[SpecialHoliday]:
        """Every special holiday, sorted by start date."""

        raise NotImplementedError

    def add(self, holiday: SpecialHoliday) -> None:
        raise NotImplementedError

    def delete(self, holiday_id: str) -> bool:
        raise NotImplementedError
