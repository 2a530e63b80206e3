from __future__ import annotations

from enum import Enum


class AttendanceType(str, Enum):
    """ประเภทการลงเวลาที่บุคลากรเลือกบนหน้าจอ"""

    ARRIVAL = "arrival"
    DEPARTURE = "departure"
    DUTY = "duty"
    SICK_LEAVE = "sick_leave"
    PERSONAL_LEAVE = "personal_leave"
    OTHER_LEAVE = "other_leave"
    AUTHORIZED_LATE = "authorized_late"


class CheckInStatus(str, Enum):
    """Status label stored on every record (same strings the sheet expects)."""

    ON_TIME = "On Time"
    LATE = "Late"
    NORMAL = "Normal"
    EARLY_LEAVE = "Early Leave"
    DUTY = "Duty"
    SICK_LEAVE = "Sick Leave"
    PERSONAL_LEAVE = "Personal Leave"
    OTHER_LEAVE = "Other Leave"
    AUTHORIZED_LATE = "Authorized Late"
    ADMIN_ASSIST = "Admin Assist"


class LocationMode(str, Enum):
    ONLINE = "online"
    GPS = "gps"


class MessageCategory(str, Enum):
    ON_TIME = "on_time"
    LATE = "late"
    DEPARTURE = "departure"


class CheckInStep(str, Enum):
    """States of a single check-in transaction."""

    COLLECTING_INPUT = "collecting-input"
    REASON_CHECK = "reason-check"
    GEO_CHECK = "geo-check"
    CAPTURING = "capturing"
    VERIFYING = "verifying"
    COMMITTED = "committed"
