from __future__ import annotations

import json
from datetime import date, datetime
from typing import Optional

import pytest
import requests
from werkzeug.security import generate_password_hash

from src.school_checkin.school_checkin.attendance.model import CheckInRecord
from src.school_checkin.school_checkin.container import wire_container
from src.school_checkin.school_checkin.core.enums import LocationMode
from src.school_checkin.school_checkin.geo.model import GeoLocation
from src.school_checkin.school_checkin.geo.position import AccuratePositionFetcher
from src.school_checkin.school_checkin.holidays.model import SpecialHoliday
from src.school_checkin.school_checkin.settings.model import AppSettings
from src.school_checkin.school_checkin.staff.model import StaffMember
from src.school_checkin.school_checkin.sync.sheets import SheetsClient

OFFICE = GeoLocation(lat=17.345854, lng=102.834789)
SAMPLE_IMAGE = "data:image/jpeg;base64,/9j/4AAQSkZJRgABAQ=="
ADMIN_PASSWORD = "secret-pass"


class Clock:
    """Mutable clock injected wherever the code asks for "now"."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class InMemoryStaff:
    def __init__(self, members=()):
        self.members: list[StaffMember] = list(members)

    def list_all(self):
        return list(self.members)

    def add(self, staff: StaffMember) -> None:
        self.members.append(staff)

    def add_many(self, staff) -> None:
        self.members.extend(staff)

    def delete(self, staff_id: str) -> bool:
        before = len(self.members)
        self.members = [m for m in self.members if not m.matches_id(staff_id)]
        return len(self.members) < before


class InMemoryHolidays:
    def __init__(self, holidays=()):
        self.holidays: list[SpecialHoliday] = list(holidays)

    def list_all(self):
        return sorted(self.holidays, key=lambda h: h.start_date)

    def add(self, holiday: SpecialHoliday) -> None:
        self.holidays.append(holiday)

    def delete(self, holiday_id: str) -> bool:
        before = len(self.holidays)
        self.holidays = [h for h in self.holidays if h.holiday_id != holiday_id]
        return len(self.holidays) < before


class InMemorySettings:
    def __init__(self, stored: Optional[dict] = None):
        self.stored = stored
        self.saves: list[AppSettings] = []

    def load(self) -> Optional[dict]:
        return dict(self.stored) if self.stored is not None else None

    def save(self, settings: AppSettings) -> None:
        self.saves.append(settings)
        self.stored = {
            "location_mode": settings.location_mode.value,
            "office_location": settings.office_location,
            "max_distance_meters": settings.max_distance_meters,
            "remote_endpoint": settings.remote_endpoint,
        }


class InMemoryRecords:
    def __init__(self, records=()):
        self.records: dict[str, CheckInRecord] = {r.record_id: r for r in records}

    def save(self, record: CheckInRecord) -> None:
        self.records[record.record_id] = record

    def get(self, record_id: str) -> Optional[CheckInRecord]:
        return self.records.get(record_id)

    def list_all(self):
        return sorted(self.records.values(), key=lambda r: r.timestamp)

    def list_between(self, start: date, end: date):
        return [r for r in self.list_all() if start <= r.calendar_date <= end]

    def list_unsynced(self):
        return [r for r in self.list_all() if not r.synced]

    def mark_synced(self, record_id: str) -> bool:
        record = self.records.get(record_id)
        if record is None:
            return False
        self.records[record_id] = record.mark_synced()
        return True

    def delete(self, record_id: str) -> bool:
        return self.records.pop(record_id, None) is not None

    def delete_all(self) -> int:
        count = len(self.records)
        self.records.clear()
        return count


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def raise_for_status(self) -> None:
        if not self.ok:
            raise requests.HTTPError(f"HTTP {self.status_code}")

    def json(self):
        if self._payload is None:
            raise ValueError("no JSON body")
        return self._payload


class FakeSession:
    """requests.Session stand-in: records calls, replays queued responses."""

    def __init__(self):
        self.posts: list[dict] = []
        self.gets: list[dict] = []
        self.post_responses: list = []
        self.get_responses: list = []

    @staticmethod
    def _next(queue: list):
        item = queue.pop(0) if queue else FakeResponse(200, [])
        if isinstance(item, Exception):
            raise item
        return item

    def post(self, url, data=None, headers=None, timeout=None, allow_redirects=True):
        self.posts.append({"url": url, "body": json.loads(data.decode("utf-8")), "headers": headers, "timeout": timeout})
        return self._next(self.post_responses)

    def get(self, url, params=None, timeout=None):
        self.gets.append({"url": url, "params": params, "timeout": timeout})
        return self._next(self.get_responses)


class StubAnalyzer:
    def __init__(self, note: str = "Yes: 1 person visible", error: Optional[Exception] = None):
        self.note = note
        self.error = error
        self.calls: list[str] = []

    def analyze(self, image_ref: str) -> str:
        self.calls.append(image_ref)
        if self.error:
            raise self.error
        return self.note


@pytest.fixture
def fixed_now() -> datetime:
    # Tuesday, not a holiday
    return datetime(2025, 6, 10, 7, 45, 0)


@pytest.fixture
def clock(fixed_now) -> Clock:
    return Clock(fixed_now)


@pytest.fixture
def staff_members() -> list[StaffMember]:
    return [
        StaffMember("PJ001", "นางชัชตะวัน สีเขียว", "ผู้อำนวยการ"),
        StaffMember("PJ003", "นางทิวาวรรณ กองแก้ว", "ครูชำนาญการพิเศษ", birthday="10/06/1980"),
        StaffMember("PJ015", "นายจักรพงษ์ ไชยราช", "ครู"),
    ]


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def settings_repo() -> InMemorySettings:
    return InMemorySettings(
        {
            "location_mode": LocationMode.GPS.value,
            "office_location": OFFICE,
            "max_distance_meters": 50.0,
            "remote_endpoint": "https://script.example.test/exec",
        }
    )


@pytest.fixture
def records_repo() -> InMemoryRecords:
    return InMemoryRecords()


@pytest.fixture
def analyzer() -> StubAnalyzer:
    return StubAnalyzer()


@pytest.fixture
def container(staff_members, settings_repo, records_repo, fake_session, analyzer, clock):
    return wire_container(
        staff_repo=InMemoryStaff(staff_members),
        holidays_repo=InMemoryHolidays(),
        settings_repo=settings_repo,
        attendance_repo=records_repo,
        sheets_client=SheetsClient(session=fake_session, timeout=1, clock=clock),
        admin_password_hash=generate_password_hash(ADMIN_PASSWORD),
        analyzer=analyzer,
        position_fetcher=AccuratePositionFetcher(sleep=lambda _: None),
        clock=clock,
    )
