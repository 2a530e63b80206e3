from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import SpecialHoliday
from .repository import SpecialHolidayRepository


class MySQLSpecialHolidayRepository(SpecialHolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[SpecialHoliday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_id, start_date, end_date, name
                FROM special_holidays
                ORDER BY start_date, end_date
                """
            )
            return [
                SpecialHoliday(
                    holiday_id=r["holiday_id"],
                    start_date=r["start_date"],
                    end_date=r["end_date"],
                    name=r["name"],
                )
                for r in fetchall(cur)
            ]

    def add(self, holiday: SpecialHoliday) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO special_holidays (holiday_id, start_date, end_date, name) VALUES (%s, %s, %s, %s)",
                (holiday.holiday_id, holiday.start_date, holiday.end_date, holiday.name),
            )

    def delete(self, holiday_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM special_holidays WHERE holiday_id=%s", (holiday_id,))
            return cur.rowcount > 0
