from datetime import date, datetime

import pytest

from src.school_checkin.school_checkin.attendance.admin_service import RecordAdminService
from src.school_checkin.school_checkin.attendance.model import CheckInRecord
from src.school_checkin.school_checkin.common.datetime_utils import to_epoch_ms
from src.school_checkin.school_checkin.core.enums import AttendanceType, CheckInStatus
from src.school_checkin.school_checkin.core.exceptions import ValidationError
from src.school_checkin.school_checkin.geo.model import GeoLocation
from src.school_checkin.school_checkin.sync.gateway import StorageSyncGateway
from src.school_checkin.school_checkin.sync.sheets import SheetsClient

from conftest import FakeResponse, FakeSession, InMemoryRecords

ENDPOINT = "https://script.example.test/exec"


def _record(record_id, moment, attendance_type=AttendanceType.ARRIVAL, status=CheckInStatus.ON_TIME, reason=None):
    return CheckInRecord(
        record_id=record_id,
        staff_id="PJ015",
        name="นายจักรพงษ์ ไชยราช",
        role="ครู",
        type=attendance_type,
        timestamp=to_epoch_ms(moment),
        location=GeoLocation.unset(),
        distance_from_base=0.0,
        status=status,
        reason=reason,
    )


def _service(records, session=None, endpoint=ENDPOINT):
    session = session or FakeSession()
    gateway = StorageSyncGateway(InMemoryRecords(records), SheetsClient(session=session, timeout=1), endpoint=lambda: endpoint)
    return RecordAdminService(gateway), gateway


def test_edit_time_recomputes_arrival_status_and_posts_edit():
    original = _record("r1", datetime(2025, 6, 10, 7, 55))
    session = FakeSession()
    service, gateway = _service([original], session)

    outcome = service.edit_time("r1", "08:01")

    assert outcome.success
    assert outcome.new_status == CheckInStatus.LATE
    assert outcome.new_timestamp == to_epoch_ms(datetime(2025, 6, 10, 8, 1))
    body = session.posts[0]["body"]
    assert body["action"] == "editRecord"
    assert body["originalTimestamp"] == original.timestamp
    assert body["newTimestamp"] == outcome.new_timestamp
    assert body["status"] == "Late"
    # local record is immutable
    assert gateway.get("r1") == original


def test_edit_time_departure_threshold():
    service, _ = _service([_record("r2", datetime(2025, 6, 10, 15, 30), AttendanceType.DEPARTURE, CheckInStatus.EARLY_LEAVE)])

    assert service.edit_time("r2", "16:00").new_status == CheckInStatus.NORMAL


def test_edit_time_keeps_leave_label():
    service, _ = _service([_record("r3", datetime(2025, 6, 10, 9, 0), AttendanceType.DUTY, CheckInStatus.DUTY, "อบรม")])

    assert service.edit_time("r3", "13:15").new_status == CheckInStatus.DUTY


def test_edit_time_reports_remote_failure():
    session = FakeSession()
    session.post_responses.append(FakeResponse(500))
    service, _ = _service([_record("r1", datetime(2025, 6, 10, 7, 55))], session)

    assert service.edit_time("r1", "07:00").success is False


def test_edit_time_without_endpoint_fails():
    service, _ = _service([_record("r1", datetime(2025, 6, 10, 7, 55))], endpoint=None)

    assert service.edit_time("r1", "07:00").success is False


@pytest.mark.parametrize("value", ["7 o'clock", "25:00", ""])
def test_edit_time_rejects_bad_input(value):
    service, _ = _service([_record("r1", datetime(2025, 6, 10, 7, 55))])

    with pytest.raises(ValidationError):
        service.edit_time("r1", value)


def test_edit_unknown_record_fails():
    service, _ = _service([])

    with pytest.raises(ValidationError):
        service.edit_time("missing", "08:00")


def test_list_delete_and_clear():
    a = _record("a", datetime(2025, 6, 10, 7, 50))
    b = _record("b", datetime(2025, 6, 11, 7, 50))
    service, gateway = _service([b, a])

    assert [r.record_id for r in service.list_for_date(date(2025, 6, 10))] == ["a"]

    service.delete("a")
    with pytest.raises(ValidationError):
        service.delete("a")

    assert service.clear_all() == 1
    assert gateway.list() == []
