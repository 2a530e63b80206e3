from __future__ import annotations

import logging
import threading
from typing import Optional

from ..common.validators import clean_optional
from ..core.constants import DEFAULT_MAX_DISTANCE_METERS, REMOTE_FALLBACK_MAX_DISTANCE_METERS
from ..core.enums import LocationMode
from ..core.exceptions import RemoteUnavailable, ValidationError
from ..geo.model import GeoLocation
from ..sync.sheets import SheetsClient
from .model import AppSettings, SettingsDefaults
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class SettingsService:
    """Use case: read/update the check-in settings singleton."""

    def __init__(self, settings: SettingsRepository, client: SheetsClient, *, defaults: Optional[SettingsDefaults] = None):
        self._settings = settings
        self._client = client
        self._defaults = defaults or SettingsDefaults()
        # Admin edits and the background pull each read-modify-write the row.
        self._lock = threading.Lock()

    def get(self) -> AppSettings:
        return self._defaults.apply(self._settings.load())

    def remote_endpoint(self) -> Optional[str]:
        return self.get().remote_endpoint

    def update(
        self,
        *,
        location_mode: Optional[str] = None,
        office_lat: Optional[float] = None,
        office_lng: Optional[float] = None,
        max_distance_meters: Optional[float] = None,
        remote_endpoint: Optional[str] = None,
    ) -> AppSettings:
        with self._lock:
            current = self.get()
            changes: dict = {}

            if location_mode is not None:
                try:
                    changes["location_mode"] = LocationMode(location_mode)
                except ValueError:
                    raise ValidationError("โหมดตรวจสอบตำแหน่งไม่ถูกต้อง")

            if office_lat is not None or office_lng is not None:
                try:
                    office = GeoLocation(
                        lat=float(office_lat if office_lat is not None else current.office_location.lat),
                        lng=float(office_lng if office_lng is not None else current.office_location.lng),
                    )
                except (TypeError, ValueError):
                    raise ValidationError("พิกัดไม่ถูกต้อง")
                if office.is_unset() or not (-90 <= office.lat <= 90 and -180 <= office.lng <= 180):
                    raise ValidationError("พิกัดไม่ถูกต้อง")
                changes["office_location"] = office

            if max_distance_meters is not None:
                try:
                    distance = float(max_distance_meters)
                except (TypeError, ValueError):
                    raise ValidationError("ระยะที่อนุญาตไม่ถูกต้อง")
                if distance <= 0:
                    raise ValidationError("ระยะที่อนุญาตต้องมากกว่า 0")
                changes["max_distance_meters"] = distance

            if remote_endpoint is not None:
                changes["remote_endpoint"] = clean_optional(remote_endpoint)

            updated = current.with_changes(**changes)
            self._settings.save(updated)

        self._push(updated)
        return updated

    def _push(self, settings: AppSettings) -> None:
        if not settings.remote_endpoint:
            return
        if self._client.push_settings(
            settings.remote_endpoint,
            lat=settings.office_location.lat,
            lng=settings.office_location.lng,
            max_distance=settings.max_distance_meters,
        ):
            logger.info("global settings pushed to remote sheet")

    def _apply_office(self, office: GeoLocation, max_distance_meters: Optional[float] = None) -> AppSettings:
        """Write the office point (and radius) onto the freshly stored settings."""

        with self._lock:
            changes: dict = {"office_location": office}
            if max_distance_meters is not None:
                changes["max_distance_meters"] = max_distance_meters
            updated = self.get().with_changes(**changes)
            self._settings.save(updated)
        return updated

    def sync_from_remote(self) -> bool:
        """Adopt the office point published on the sheet, seeding it when empty.

        Only the office point and radius are taken from the sheet; they are
        applied to the settings as stored after the fetch returns.
        """

        url = self.get().remote_endpoint
        if not url:
            return False

        try:
            remote = self._client.fetch_settings(url)
        except RemoteUnavailable as e:
            logger.warning("could not fetch global settings: %s", e)
            with self._lock:
                stored = self._settings.load() or {}
                if stored.get("office_location") is not None:
                    return False
                self._settings.save(self.get().with_changes(office_location=self._defaults.office_location))
            return True

        office = GeoLocation.from_dict(remote.get("officeLocation")) if remote else GeoLocation.unset()
        if not office.is_unset():
            updated = self._apply_office(
                office,
                float(remote.get("maxDistanceMeters") or REMOTE_FALLBACK_MAX_DISTANCE_METERS),
            )
            logger.info("settings updated from remote sheet: %s", updated.office_location)
            return True

        logger.info("remote sheet has no settings, seeding default office location")
        seeded = self._apply_office(self._defaults.office_location, float(DEFAULT_MAX_DISTANCE_METERS))
        self._push(seeded)
        return True
