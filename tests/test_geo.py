import math

import pytest

from src.training_attendance.training_attendance.common.geo import GeoPoint, haversine_meters
from src.training_attendance.training_attendance.core.constants import EARTH_RADIUS_METERS


def test_same_point_is_zero_distance(anchor):
    assert haversine_meters(anchor, anchor) == 0.0


def test_distance_along_meridian_matches_offset(anchor, north_of):
    assert haversine_meters(anchor, north_of(anchor, 30.0)) == pytest.approx(30.0, abs=1e-6)


def test_distance_is_symmetric(anchor):
    other = GeoPoint(lat=22.0810, lon=82.1405)
    assert haversine_meters(anchor, other) == pytest.approx(haversine_meters(other, anchor))


def test_known_city_distance(anchor):
    # Bilaspur -> Raipur, roughly 95 km as the crow flies.
    raipur = GeoPoint(lat=21.2514, lon=81.6296)
    assert 80_000 < haversine_meters(anchor, raipur) < 120_000


def test_geojson_shape_is_lon_lat(anchor):
    assert anchor.to_dict() == {"type": "Point", "coordinates": [82.1391, 22.0797]}


@pytest.mark.parametrize("lat", [0.0, 0.1, 12.5, 22.0797, 45.0, 89.9])
@pytest.mark.parametrize("lon", [0.0, 33.3, 82.1391, 179.9])
def test_antipodal_points_are_half_the_circumference(lat, lon):
    a = GeoPoint(lat=lat, lon=lon)
    b = GeoPoint(lat=-lat, lon=lon - 180.0)

    assert haversine_meters(a, b) == pytest.approx(math.pi * EARTH_RADIUS_METERS, rel=1e-9)
