import math

import pytest

from pints.core.geo import (
    GeoPoint,
    haversine_m,
    heading_from_alpha,
    initial_bearing_deg,
    normalize_deg,
    relative_bearing_deg,
)

LONDON = GeoPoint(lat=51.5007, lon=-0.1246)
PARIS = GeoPoint(lat=48.8566, lon=2.3522)

POINTS = [
    LONDON,
    PARIS,
    GeoPoint(lat=0.0, lon=0.0),
    GeoPoint(lat=-33.8688, lon=151.2093),
    GeoPoint(lat=89.9, lon=-179.9),
    GeoPoint(lat=-89.9, lon=179.9),
    GeoPoint(lat=0.0, lon=180.0),
]


def test_london_to_paris_distance_and_bearing():
    assert haversine_m(LONDON, PARIS) == pytest.approx(342_807, abs=500)
    assert initial_bearing_deg(LONDON, PARIS) == pytest.approx(148.1, abs=0.5)


@pytest.mark.parametrize("a", POINTS)
@pytest.mark.parametrize("b", POINTS)
def test_distance_is_symmetric_and_bearing_in_range(a, b):
    assert haversine_m(a, b) == pytest.approx(haversine_m(b, a), rel=1e-6, abs=1e-9)
    bearing = initial_bearing_deg(a, b)
    assert 0.0 <= bearing < 360.0
    assert not math.isnan(bearing)


@pytest.mark.parametrize("a", POINTS)
def test_same_point_has_zero_distance_and_determinate_bearing(a):
    assert haversine_m(a, a) == 0
    assert initial_bearing_deg(a, a) == 0.0


def test_antipodal_points_do_not_raise():
    d = haversine_m(GeoPoint(lat=0.0, lon=0.0), GeoPoint(lat=0.0, lon=180.0))
    assert d == pytest.approx(math.pi * 6_371_000, rel=1e-9)


def test_cardinal_bearings():
    origin = GeoPoint(lat=0.0, lon=0.0)
    assert initial_bearing_deg(origin, GeoPoint(lat=1.0, lon=0.0)) == pytest.approx(0.0, abs=1e-9)
    assert initial_bearing_deg(origin, GeoPoint(lat=0.0, lon=1.0)) == pytest.approx(90.0)
    assert initial_bearing_deg(origin, GeoPoint(lat=-1.0, lon=0.0)) == pytest.approx(180.0)
    assert initial_bearing_deg(origin, GeoPoint(lat=0.0, lon=-1.0)) == pytest.approx(270.0)


@pytest.mark.parametrize(
    ("target", "heading", "expected"),
    [
        (90.0, 0.0, 90.0),
        (0.0, 90.0, -90.0),
        (10.0, 350.0, 20.0),
        (350.0, 10.0, -20.0),
        (180.0, 0.0, 180.0),
        (0.0, 180.0, 180.0),
        (720.0, 0.0, 0.0),
        (45.0, 405.0, 0.0),
    ],
)
def test_relative_bearing(target, heading, expected):
    assert relative_bearing_deg(target, heading) == pytest.approx(expected)


def test_relative_bearing_range():
    for target in range(0, 360, 7):
        for heading in range(0, 720, 11):
            rel = relative_bearing_deg(float(target), float(heading))
            assert -180.0 < rel <= 180.0


def test_normalize_deg_edges():
    assert normalize_deg(-1e-20) == 0.0
    assert normalize_deg(360.0) == 0.0
    assert normalize_deg(-90.0) == 270.0
    assert normalize_deg(float("nan")) == 0.0


def test_heading_from_alpha():
    assert heading_from_alpha(0.0) == 0.0
    assert heading_from_alpha(90.0) == 270.0
    assert heading_from_alpha(270.0) == 90.0
