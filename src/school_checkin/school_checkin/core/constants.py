"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

ARRIVAL_LATE_FROM = time(8, 1, 0)
DEPARTURE_NORMAL_FROM = time(16, 0, 0)

EARTH_RADIUS_KM = 6371

POSITION_MAX_ATTEMPTS = 5
POSITION_GOOD_ACCURACY_METERS = 20
POSITION_PAUSE_SECONDS = 0.8
POSITION_TIMEOUT_MS = 8000

DEFAULT_OFFICE_LAT = 17.345854
DEFAULT_OFFICE_LNG = 102.834789
DEFAULT_MAX_DISTANCE_METERS = 20
REMOTE_FALLBACK_MAX_DISTANCE_METERS = 10

RESULT_DISPLAY_SECONDS = 3
BIRTHDAY_DISPLAY_SECONDS = 10

ANALYSIS_UNAVAILABLE_NOTE = "AI verification unavailable."

DEFAULT_SYNC_INTERVAL_SECONDS = 30
DEFAULT_REMOTE_TIMEOUT_SECONDS = 15
