from __future__ import annotations

from datetime import datetime

import pytest

from src.school_checkin.school_checkin.main import create_app

from conftest import ADMIN_PASSWORD, OFFICE, SAMPLE_IMAGE


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=container)
    return app.test_client()


@pytest.fixture
def admin(client):
    assert client.post("/admin/login", json={"password": ADMIN_PASSWORD}).status_code == 200
    return client


def _at_office():
    return [{"lat": OFFICE.lat, "lng": OFFICE.lng, "accuracy": 8}]


def test_staff_lookup(client):
    res = client.get("/api/staff/pj003")

    assert res.status_code == 200
    assert res.get_json()["staff"]["id"] == "PJ003"
    assert res.get_json()["isBirthdayToday"] in (True, False)


def test_staff_lookup_unknown_is_404(client):
    res = client.get("/api/staff/PJ999")

    assert res.status_code == 404
    assert res.get_json()["error"] == "unknown_staff"


def test_holiday_lookup(client):
    assert client.get("/api/holiday?date=2025-01-01").get_json()["holiday"] == "วันขึ้นปีใหม่"
    assert client.get("/api/holiday?date=2025-06-10").get_json()["holiday"] is None
    assert client.get("/api/holiday?date=01-01-2025").status_code == 400


def test_prepare_returns_gate_outcome(client):
    res = client.post("/api/checkin/prepare", json={"staffId": "PJ015", "type": "arrival", "positions": _at_office()})

    body = res.get_json()
    assert res.status_code == 200
    assert body["reasonRequired"] is False
    assert body["locationChecked"] is True
    assert body["distance"] == 0


def test_checkin_commits_and_returns_message(client, records_repo):
    res = client.post(
        "/api/checkin",
        json={"staffId": "PJ015", "type": "arrival", "positions": _at_office(), "image": SAMPLE_IMAGE},
    )

    body = res.get_json()
    assert res.status_code == 201
    assert body["record"]["status"] == "On Time"
    assert body["displaySeconds"] == 3
    assert body["step"] == "committed"
    assert len(records_repo.records) == 1


def test_late_checkin_without_reason_is_400(client, clock):
    clock.now = datetime(2025, 6, 10, 8, 30)

    res = client.post("/api/checkin", json={"staffId": "PJ015", "type": "arrival", "positions": _at_office(), "image": SAMPLE_IMAGE})

    assert res.status_code == 400
    assert res.get_json()["error"] == "reason_required"
    assert res.get_json()["step"] == "reason-check"


def test_far_away_checkin_is_403(client, records_repo):
    far = [{"lat": OFFICE.lat + 0.01, "lng": OFFICE.lng, "accuracy": 5}]

    res = client.post("/api/checkin", json={"staffId": "PJ015", "type": "arrival", "positions": far, "image": SAMPLE_IMAGE})

    body = res.get_json()
    assert res.status_code == 403
    assert body["error"] == "out_of_range"
    assert body["allowed"] == 50.0
    assert body["step"] == "geo-check"
    assert records_repo.records == {}


def test_gps_permission_denied_is_503(client):
    res = client.post(
        "/api/checkin/prepare",
        json={"staffId": "PJ015", "type": "arrival", "positions": [{"error": "permission_denied"}]},
    )

    assert res.status_code == 503
    assert res.get_json()["error"] == "permission_denied"


def test_missing_image_is_503(client):
    res = client.post("/api/checkin", json={"staffId": "PJ015", "type": "arrival", "positions": _at_office()})

    assert res.status_code == 503
    assert res.get_json()["error"] == "camera_unavailable"
    assert res.get_json()["step"] == "capturing"


def test_unknown_type_is_400(client):
    res = client.post("/api/checkin/prepare", json={"staffId": "PJ015", "type": "nap"})

    assert res.status_code == 400


def test_admin_routes_require_login(client):
    res = client.get("/admin/settings")
    assert res.status_code == 403
    assert res.get_json()["error"] == "forbidden"
    assert client.post("/admin/login", json={"password": "wrong"}).status_code == 403


def test_admin_logout_drops_session(admin):
    admin.post("/admin/logout")

    assert admin.get("/admin/staff").status_code == 403


def test_admin_staff_management(admin):
    assert admin.post("/admin/staff", json={"id": "PJ100", "name": "ครูใหม่", "role": "ครู"}).status_code == 201
    assert admin.post("/admin/staff", json={"id": "pj100", "name": "ซ้ำ", "role": "ครู"}).status_code == 400

    ids = [m["id"] for m in admin.get("/admin/staff").get_json()["staff"]]
    assert "PJ100" in ids

    assert admin.delete("/admin/staff/PJ100").status_code == 200


def test_admin_holidays(admin, client):
    res = admin.post("/admin/holidays", json={"startDate": "2025-06-20", "endDate": "2025-06-21", "name": "กีฬาสี"})
    holiday_id = res.get_json()["holiday"]["id"]

    assert client.get("/api/holiday?date=2025-06-21").get_json()["holiday"] == "กีฬาสี"
    assert admin.delete(f"/admin/holidays/{holiday_id}").status_code == 200
    assert admin.get("/admin/holidays").get_json()["holidays"] == []


def test_admin_settings_update(admin, fake_session):
    res = admin.put("/admin/settings", json={"locationMode": "online", "maxDistanceMeters": 30})

    assert res.status_code == 200
    assert res.get_json()["settings"]["locationMode"] == "online"
    assert fake_session.posts[-1]["body"]["action"] == "saveSettings"


def test_admin_records_reports_and_sync(admin, fake_session):
    admin.post("/api/checkin", json={"staffId": "PJ015", "type": "arrival", "positions": _at_office(), "image": SAMPLE_IMAGE})

    records = admin.get("/admin/records?date=2025-06-10").get_json()["records"]
    assert len(records) == 1

    daily = admin.get("/admin/reports/daily?date=2025-06-10").get_json()
    assert daily["summary"]["onTime"] == 1

    csv_res = admin.get("/admin/reports/daily.csv?date=2025-06-10")
    assert csv_res.mimetype == "text/csv"
    assert csv_res.data.startswith(b"\xef\xbb\xbf")

    sync = admin.post("/admin/sync").get_json()
    assert sync["synced"] == 1
    assert sync["pending"] == 0
    assert fake_session.posts[-1]["body"]["id"] == records[0]["id"]

    edit = admin.patch(f"/admin/records/{records[0]['id']}", json={"time": "08:15"}).get_json()
    assert edit["status"] == "Late"

    assert admin.delete("/admin/records").get_json()["deleted"] == 1
