from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from ..geo.model import GeoLocation
from .model import AppSettings
from .repository import SettingsRepository

_SETTINGS_ROW_ID = 1


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load(self) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT location_mode, office_lat, office_lng, max_distance_meters, remote_endpoint
                FROM app_settings
                WHERE settings_id=%s
                """,
                (_SETTINGS_ROW_ID,),
            )
            row = fetchone(cur)
        if not row:
            return None

        stored: dict = {}
        if row.get("location_mode"):
            stored["location_mode"] = row["location_mode"]
        if row.get("office_lat") is not None and row.get("office_lng") is not None:
            stored["office_location"] = GeoLocation(lat=float(row["office_lat"]), lng=float(row["office_lng"]))
        if row.get("max_distance_meters") is not None:
            stored["max_distance_meters"] = float(row["max_distance_meters"])
        if row.get("remote_endpoint"):
            stored["remote_endpoint"] = row["remote_endpoint"]
        return stored

    def save(self, settings: AppSettings) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO app_settings
                    (settings_id, location_mode, office_lat, office_lng, max_distance_meters, remote_endpoint)
                VALUES (%s, %s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    location_mode=VALUES(location_mode),
                    office_lat=VALUES(office_lat),
                    office_lng=VALUES(office_lng),
                    max_distance_meters=VALUES(max_distance_meters),
                    remote_endpoint=VALUES(remote_endpoint)
                """,
                (
                    _SETTINGS_ROW_ID,
                    settings.location_mode.value,
                    settings.office_location.lat,
                    settings.office_location.lng,
                    settings.max_distance_meters,
                    settings.remote_endpoint,
                ),
            )
