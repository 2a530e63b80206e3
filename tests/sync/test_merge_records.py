from dataclasses import replace
from datetime import datetime

from src.school_checkin.school_checkin.attendance.model import CheckInRecord
from src.school_checkin.school_checkin.common.datetime_utils import to_epoch_ms
from src.school_checkin.school_checkin.core.enums import AttendanceType, CheckInStatus
from src.school_checkin.school_checkin.geo.model import GeoLocation
from src.school_checkin.school_checkin.sync.merge import merge_remote_and_local, record_signature


def _record(record_id, staff_id="PJ015", attendance_type=AttendanceType.ARRIVAL, moment=datetime(2025, 6, 10, 7, 50), image=""):
    return CheckInRecord(
        record_id=record_id,
        staff_id=staff_id,
        name="x",
        role="ครู",
        type=attendance_type,
        timestamp=to_epoch_ms(moment),
        location=GeoLocation.unset(),
        distance_from_base=0.0,
        status=CheckInStatus.ON_TIME,
        image_ref=image,
    )


def test_signature_ignores_staff_id_case_and_time_of_day():
    a = _record("a", staff_id="pj015", moment=datetime(2025, 6, 10, 7, 0))
    b = _record("b", staff_id="PJ015", moment=datetime(2025, 6, 10, 9, 30))

    assert record_signature(a) == record_signature(b)


def test_larger_image_wins():
    remote = _record("remote", image="data:small")
    local = _record("local", image="data:image/jpeg;base64,much-larger-payload")

    assert [r.record_id for r in merge_remote_and_local([remote], [local])] == ["local"]


def test_tie_keeps_remote_copy():
    remote = _record("remote", image="same")
    local = _record("local", image="same")

    assert [r.record_id for r in merge_remote_and_local([remote], [local])] == ["remote"]


def test_remote_only_local_only_and_distinct_types_all_survive_sorted():
    remote_only = _record("r", staff_id="PJ001", moment=datetime(2025, 6, 10, 7, 40))
    local_only = _record("l", staff_id="PJ003", moment=datetime(2025, 6, 10, 7, 30))
    departure = _record("d", attendance_type=AttendanceType.DEPARTURE, moment=datetime(2025, 6, 10, 16, 5))

    merged = merge_remote_and_local([remote_only], [departure, local_only])

    assert [r.record_id for r in merged] == ["l", "r", "d"]


def test_duplicates_within_one_side_follow_the_same_rule():
    first = _record("first", image="aa")
    bigger = replace(first, record_id="bigger", image_ref="aaaa")

    assert [r.record_id for r in merge_remote_and_local([first, bigger], [])] == ["bigger"]
