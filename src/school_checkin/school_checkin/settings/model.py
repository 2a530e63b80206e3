from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from ..core.constants import DEFAULT_MAX_DISTANCE_METERS, DEFAULT_OFFICE_LAT, DEFAULT_OFFICE_LNG
from ..core.enums import LocationMode
from ..geo.model import GeoLocation


@dataclass(frozen=True)
class AppSettings:
    """Process-wide check-in settings (one row, admin editable)."""

    location_mode: LocationMode
    office_location: GeoLocation
    max_distance_meters: float
    remote_endpoint: Optional[str] = None

    def with_changes(self, **changes) -> "AppSettings":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "locationMode": self.location_mode.value,
            "officeLocation": self.office_location.to_dict(),
            "maxDistanceMeters": self.max_distance_meters,
            "remoteEndpoint": self.remote_endpoint or "",
        }


@dataclass(frozen=True)
class SettingsDefaults:
    location_mode: LocationMode = LocationMode.GPS
    office_location: GeoLocation = GeoLocation(DEFAULT_OFFICE_LAT, DEFAULT_OFFICE_LNG)
    max_distance_meters: float = DEFAULT_MAX_DISTANCE_METERS
    remote_endpoint: Optional[str] = None

    def apply(self, stored: Optional[dict]) -> AppSettings:
        """Fill every missing option from the defaults."""

        stored = stored or {}

        mode = stored.get("location_mode")
        try:
            location_mode = LocationMode(mode) if mode else self.location_mode
        except ValueError:
            location_mode = self.location_mode

        office = stored.get("office_location")
        if not isinstance(office, GeoLocation) or office.is_unset():
            office = self.office_location

        max_distance = stored.get("max_distance_meters")
        max_distance = float(max_distance) if max_distance not in (None, "") else float(self.max_distance_meters)

        endpoint = stored.get("remote_endpoint") or self.remote_endpoint or None

        return AppSettings(
            location_mode=location_mode,
            office_location=office,
            max_distance_meters=max_distance,
            remote_endpoint=endpoint,
        )
