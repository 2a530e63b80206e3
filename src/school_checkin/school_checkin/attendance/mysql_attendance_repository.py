from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceType, CheckInStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..geo.model import GeoLocation
from .model import CheckInRecord
from .repository import AttendanceRepository

_COLUMNS = """
    record_id, staff_id, name, role, type, timestamp_ms, reason,
    lat, lng, distance_from_base, status, image_ref, ai_note, synced
"""


def _to_record(r: dict) -> CheckInRecord:
    return CheckInRecord(
        record_id=r["record_id"],
        staff_id=r["staff_id"],
        name=r["name"],
        role=r["role"],
        type=AttendanceType(r["type"]),
        timestamp=int(r["timestamp_ms"]),
        location=GeoLocation(lat=float(r.get("lat") or 0), lng=float(r.get("lng") or 0)),
        distance_from_base=float(r.get("distance_from_base") or 0),
        status=CheckInStatus(r["status"]),
        image_ref=r.get("image_ref") or "",
        ai_note=r.get("ai_note"),
        reason=r.get("reason"),
        synced=bool(r.get("synced")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, record: CheckInRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO checkin_records ({_COLUMNS}, work_date)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                """,
                (
                    record.record_id,
                    record.staff_id,
                    record.name,
                    record.role,
                    record.type.value,
                    record.timestamp,
                    record.reason,
                    record.location.lat,
                    record.location.lng,
                    record.distance_from_base,
                    record.status.value,
                    record.image_ref,
                    record.ai_note,
                    1 if record.synced else 0,
                    record.calendar_date,
                ),
            )

    def get(self, record_id: str) -> Optional[CheckInRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM checkin_records WHERE record_id=%s", (record_id,))
            row = fetchone(cur)
            return _to_record(row) if row else None

    def list_all(self) -> Sequence[CheckInRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM checkin_records ORDER BY timestamp_ms")
            return [_to_record(r) for r in fetchall(cur)]

    def list_between(self, start: date, end: date) -> Sequence[CheckInRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM checkin_records
                WHERE work_date BETWEEN %s AND %s
                ORDER BY timestamp_ms
                """,
                (start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_unsynced(self) -> Sequence[CheckInRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM checkin_records WHERE synced=0 ORDER BY timestamp_ms")
            return [_to_record(r) for r in fetchall(cur)]

    def mark_synced(self, record_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE checkin_records SET synced=1 WHERE record_id=%s", (record_id,))
            return cur.rowcount > 0

    def delete(self, record_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM checkin_records WHERE record_id=%s", (record_id,))
            return cur.rowcount > 0

    def delete_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM checkin_records")
            return int(cur.rowcount or 0)
