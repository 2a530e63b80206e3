import pytest

from src.school_checkin.school_checkin.geo.distance import distance_meters
from src.school_checkin.school_checkin.geo.model import GeoLocation

OFFICE = GeoLocation(17.345854, 102.834789)


def test_identical_points_are_zero_apart():
    assert distance_meters(OFFICE, OFFICE) == 0.0


def test_distance_is_symmetric():
    other = GeoLocation(17.346500, 102.835500)
    assert distance_meters(OFFICE, other) == pytest.approx(distance_meters(other, OFFICE))


def test_unset_location_yields_zero_sentinel():
    assert distance_meters(GeoLocation.unset(), OFFICE) == 0.0
    assert distance_meters(OFFICE, GeoLocation(0.0, 102.8)) == 0.0
    assert distance_meters(None, OFFICE) == 0.0


def test_one_thousandth_degree_of_latitude_is_about_111_meters():
    north = GeoLocation(OFFICE.lat + 0.001, OFFICE.lng)
    assert distance_meters(OFFICE, north) == pytest.approx(111.19, abs=0.05)

