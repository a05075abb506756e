import httpx
import pytest

from pints.compass.display import compass_rotation, directions_url, display_name, format_distance
from pints.config.settings import DirectionsSettings
from pints.domain.models import GeoPoint, PointOfInterest


@pytest.mark.parametrize(
    ("meters", "expected"),
    [
        (0.0, "0m"),
        (42.4, "42m"),
        (999.0, "999m"),
        (999.4, "999m"),
        (999.7, "1.00km"),
        (1000.0, "1.00km"),
        (1500.0, "1.50km"),
        (2346.0, "2.35km"),
    ],
)
def test_format_distance(meters, expected):
    assert format_distance(meters) == expected


def test_format_distance_custom_threshold():
    assert format_distance(600.0, km_threshold_m=500) == "0.60km"


def test_display_name_fallback():
    named = PointOfInterest(id="node/1", name="The Crown", location=GeoPoint(lat=0, lon=0))
    unnamed = PointOfInterest(id="node/2", location=GeoPoint(lat=0, lon=0))
    blank = PointOfInterest(id="node/3", name="   ", location=GeoPoint(lat=0, lon=0))

    assert display_name(named) == "The Crown"
    assert display_name(unnamed) == "Unnamed Pub"
    assert display_name(blank) == "Unnamed Pub"
    assert display_name(unnamed, unnamed_label="?") == "?"


def test_directions_url():
    poi = PointOfInterest(id="node/1", location=GeoPoint(lat=51.5, lon=-0.12))
    url = directions_url(GeoPoint(lat=51.4, lon=-0.1), poi, DirectionsSettings())

    assert url.startswith("https://www.google.com/maps/dir/?")
    params = httpx.URL(url).params
    assert params["api"] == "1"
    assert params["travelmode"] == "walking"
    assert params["origin"] == "51.4,-0.1"
    assert params["destination"] == "51.5,-0.12"


def test_compass_rotation_without_heading_is_north_up():
    assert compass_rotation(156.2, None) == pytest.approx(156.2)
    assert compass_rotation(270.0, None) == pytest.approx(-90.0)
    assert compass_rotation(270.0, 300.0) == pytest.approx(-30.0)
