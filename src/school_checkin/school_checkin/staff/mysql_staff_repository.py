from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import StaffMember
from .repository import StaffRepository


class MySQLStaffRepository(StaffRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[StaffMember]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT staff_id, name, role, birthday FROM staff ORDER BY created_at, staff_id")
            return [
                StaffMember(
                    staff_id=r["staff_id"],
                    name=r["name"],
                    role=r["role"],
                    birthday=r.get("birthday") or None,
                )
                for r in fetchall(cur)
            ]

    def add(self, staff: StaffMember) -> None:
        self.add_many([staff])

    def add_many(self, staff: Sequence[StaffMember]) -> None:
        if not staff:
            return
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                "INSERT INTO staff (staff_id, name, role, birthday) VALUES (%s, %s, %s, %s)",
                [(m.staff_id, m.name, m.role, m.birthday) for m in staff],
            )

    def delete(self, staff_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM staff WHERE UPPER(staff_id)=UPPER(%s)", (staff_id,))
            return cur.rowcount > 0
