"""Great-circle distance between two coordinates (haversine)."""

from __future__ import annotations

import math

from ..core.constants import EARTH_RADIUS_KM
from .model import GeoLocation


def distance_meters(a: GeoLocation, b: GeoLocation) -> float:
    """Distance in meters on a sphere of mean Earth radius.

    Returns 0 when either point is unset (any zero/falsy component).
    """
    if not a or not b or a.is_unset() or b.is_unset():
        return 0.0

    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c * 1000

