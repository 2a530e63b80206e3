from __future__ import annotations

import uuid
from datetime import date
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import iter_days, parse_iso_date
from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from .calendar import DYNAMIC_HOLIDAYS, FIXED_HOLIDAYS
from .model import SpecialHoliday, SpecialHolidayItem
from .repository import SpecialHolidayRepository


class HolidayResolver:
    """Use case: tell whether a calendar day is a holiday.

    Lookup order: admin special holiday, fixed annual table, year-specific table.
    """

    def __init__(
        self,
        special: SpecialHolidayRepository,
        *,
        fixed: Optional[dict[str, str]] = None,
        dynamic: Optional[dict[int, dict[str, str]]] = None,
    ):
        self._special = special
        self._fixed = FIXED_HOLIDAYS if fixed is None else fixed
        self._dynamic = DYNAMIC_HOLIDAYS if dynamic is None else dynamic

    def holiday_for(self, day: date) -> Optional[str]:
        for item in expand(self._special.list_all()):
            if item.day == day:
                return item.name

        short = day.strftime("%m-%d")
        fixed = self._fixed.get(short)
        if fixed:
            return fixed

        return self._dynamic.get(day.year, {}).get(short)


def expand(holidays: Sequence[SpecialHoliday]) -> list[SpecialHolidayItem]:
    return [
        SpecialHolidayItem(holiday_id=h.holiday_id, day=d, name=h.name)
        for h in holidays
        for d in iter_days(h.start_date, h.end_date)
    ]


class HolidayService:
    """Use case: admin manages special holidays."""

    def __init__(self, special: SpecialHolidayRepository, *, id_factory: Callable[[], str] = lambda: str(uuid.uuid4())):
        self._special = special
        self._new_id = id_factory

    def list_holidays(self) -> list[SpecialHoliday]:
        return sorted(self._special.list_all(), key=lambda h: h.start_date)

    def list_days(self) -> list[SpecialHolidayItem]:
        return expand(self.list_holidays())

    def add_holiday(self, *, start: str, end: str, name: str) -> SpecialHoliday:
        name = require_non_empty(name, "ชื่อวันหยุด")
        try:
            start_date = parse_iso_date(start)
            end_date = parse_iso_date(end or start)
        except (TypeError, ValueError):
            raise ValidationError("วันที่ไม่ถูกต้อง (YYYY-MM-DD)")
        if end_date < start_date:
            raise ValidationError("วันสิ้นสุดต้องไม่ก่อนวันเริ่มต้น")

        holiday = SpecialHoliday(holiday_id=self._new_id(), start_date=start_date, end_date=end_date, name=name)
        self._special.add(holiday)
        return holiday

    def remove_holiday(self, holiday_id: str) -> None:
        if not self._special.delete(holiday_id):
            raise ValidationError("ไม่พบวันหยุดที่ต้องการลบ")
