import pytest
import requests

from src.school_checkin.school_checkin.core.enums import LocationMode
from src.school_checkin.school_checkin.core.exceptions import ValidationError
from src.school_checkin.school_checkin.geo.model import GeoLocation
from src.school_checkin.school_checkin.settings.model import SettingsDefaults
from src.school_checkin.school_checkin.settings.service import SettingsService
from src.school_checkin.school_checkin.sync.sheets import SheetsClient

from conftest import FakeResponse, FakeSession, InMemorySettings

URL = "https://script.example.test/exec"
DEFAULT_OFFICE = GeoLocation(17.345854, 102.834789)


def _service(stored=None, session=None):
    repo = InMemorySettings(stored)
    session = session or FakeSession()
    return SettingsService(repo, SheetsClient(session=session, timeout=1), defaults=SettingsDefaults(remote_endpoint=URL)), repo, session


def test_defaults_fill_missing_options():
    service, _, _ = _service({"max_distance_meters": 35})

    settings = service.get()

    assert settings.location_mode == LocationMode.GPS
    assert settings.office_location == DEFAULT_OFFICE
    assert settings.max_distance_meters == 35
    assert settings.remote_endpoint == URL


def test_update_validates_and_pushes_to_remote():
    service, repo, session = _service()

    updated = service.update(location_mode="online", office_lat=17.4, office_lng=102.9, max_distance_meters=25)

    assert updated.location_mode == LocationMode.ONLINE
    assert repo.stored["office_location"] == GeoLocation(17.4, 102.9)
    assert session.posts[0]["body"] == {"action": "saveSettings", "lat": 17.4, "lng": 102.9, "maxDistance": 25.0}


@pytest.mark.parametrize(
    "kwargs",
    [
        {"location_mode": "satellite"},
        {"office_lat": 0, "office_lng": 0},
        {"office_lat": 95, "office_lng": 102.9},
        {"max_distance_meters": 0},
        {"max_distance_meters": "far"},
    ],
)
def test_update_rejects_invalid_values(kwargs):
    service, repo, _ = _service()

    with pytest.raises(ValidationError):
        service.update(**kwargs)
    assert repo.saves == []


def test_pull_adopts_remote_office_and_radius():
    session = FakeSession()
    session.get_responses = [FakeResponse(200, {"officeLocation": {"lat": 17.5, "lng": 102.5}, "maxDistanceMeters": 40})]
    service, repo, _ = _service(session=session)

    assert service.sync_from_remote() is True

    assert service.get().office_location == GeoLocation(17.5, 102.5)
    assert service.get().max_distance_meters == 40
    assert session.posts == []


def test_pull_without_radius_uses_remote_fallback_of_ten():
    session = FakeSession()
    session.get_responses = [FakeResponse(200, {"officeLocation": {"lat": 17.5, "lng": 102.5}})]
    service, _, _ = _service(session=session)

    service.sync_from_remote()

    assert service.get().max_distance_meters == 10


def test_empty_remote_is_seeded_with_default_office():
    session = FakeSession()
    session.get_responses = [FakeResponse(200, {})]
    service, repo, _ = _service({"max_distance_meters": 99}, session=session)

    assert service.sync_from_remote() is True

    assert service.get().office_location == DEFAULT_OFFICE
    assert service.get().max_distance_meters == 20
    assert session.posts[0]["body"]["action"] == "saveSettings"


def test_unreachable_remote_stores_default_only_when_nothing_stored():
    session = FakeSession()
    session.get_responses = [requests.ConnectionError("offline")]
    service, repo, _ = _service(session=session)

    assert service.sync_from_remote() is True
    assert repo.stored["office_location"] == DEFAULT_OFFICE

    session.get_responses = [requests.ConnectionError("offline")]
    repo.stored["office_location"] = GeoLocation(17.6, 102.6)
    assert service.sync_from_remote() is False
    assert repo.stored["office_location"] == GeoLocation(17.6, 102.6)


def test_pull_without_endpoint_does_nothing():
    repo = InMemorySettings()
    session = FakeSession()
    service = SettingsService(repo, SheetsClient(session=session, timeout=1))

    assert service.sync_from_remote() is False
    assert session.gets == []


class _EditingResponse(FakeResponse):
    """Response whose body is read while an admin saves new settings."""

    def __init__(self, payload, on_read):
        super().__init__(200, payload)
        self._on_read = on_read

    def json(self):
        self._on_read()
        return super().json()


def test_admin_edit_made_during_pull_is_kept():
    session = FakeSession()
    service, repo, _ = _service({"location_mode": "gps", "max_distance_meters": 30}, session=session)
    session.get_responses = [
        _EditingResponse(
            {"officeLocation": {"lat": 17.5, "lng": 102.5}, "maxDistanceMeters": 40},
            on_read=lambda: service.update(location_mode="online", remote_endpoint="https://script.example.test/other"),
        )
    ]

    assert service.sync_from_remote() is True

    settings = service.get()
    assert settings.location_mode == LocationMode.ONLINE
    assert settings.remote_endpoint == "https://script.example.test/other"
    assert settings.office_location == GeoLocation(17.5, 102.5)
    assert settings.max_distance_meters == 40
