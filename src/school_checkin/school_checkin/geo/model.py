from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GeoLocation:
    """WGS-84 coordinate in degrees. (0, 0) means "unset"."""

    lat: float
    lng: float

    @classmethod
    def unset(cls) -> "GeoLocation":
        return cls(lat=0.0, lng=0.0)

    def is_unset(self) -> bool:
        return not self.lat or not self.lng

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "GeoLocation":
        if not data:
            return cls.unset()
        return cls(lat=float(data.get("lat") or 0), lng=float(data.get("lng") or 0))


@dataclass(frozen=True)
class PositionSample:
    lat: float
    lng: float
    accuracy: float

    @property
    def location(self) -> GeoLocation:
        return GeoLocation(lat=self.lat, lng=self.lng)


@dataclass(frozen=True)
class GeoCheckResult:
    """Outcome of the geo gate; distance stays 0 when no check ran."""

    location: GeoLocation
    distance_meters: float
    checked: bool

    @classmethod
    def skipped(cls) -> "GeoCheckResult":
        return cls(location=GeoLocation.unset(), distance_meters=0.0, checked=False)
