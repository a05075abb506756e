from __future__ import annotations
from dataclasses import dataclass
from math import asin, atan2, cos, degrees, isfinite, radians, sin, sqrt

"""
Geospatial helpers.

We keep a tiny geometry layer here so the compass can do distance and bearing
calculations without pulling in heavier GIS dependencies.

Angles are degrees throughout; bearings are clockwise from true north.
"""

EARTH_RADIUS_M = 6_371_000


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lon: float


def normalize_deg(deg: float) -> float:
    """Map an angle into [0, 360)."""
    if not isfinite(deg):
        return 0.0
    out = deg % 360.0
    # Tiny negative inputs can round up to exactly 360.0.
    if out >= 360.0:
        return 0.0
    return out


def haversine_m(a: GeoPoint, b: GeoPoint) -> float:
    """Compute great-circle distance in meters between two points."""
    lat1 = radians(a.lat)
    lon1 = radians(a.lon)
    lat2 = radians(b.lat)
    lon2 = radians(b.lon)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_M * asin(sqrt(h))


def initial_bearing_deg(a: GeoPoint, b: GeoPoint) -> float:
    """Initial great-circle bearing from `a` toward `b`, in [0, 360).

    Equal points have no defined bearing; 0.0 is returned instead of NaN.
    """
    if a == b:
        return 0.0
    lat1 = radians(a.lat)
    lat2 = radians(b.lat)
    dlon = radians(b.lon - a.lon)

    y = sin(dlon) * cos(lat2)
    x = cos(lat1) * sin(lat2) - sin(lat1) * cos(lat2) * cos(dlon)
    return normalize_deg(degrees(atan2(y, x)))


def relative_bearing_deg(target_deg: float, heading_deg: float) -> float:
    """Signed turn from `heading_deg` to face `target_deg`, in (-180, 180].

    Positive values mean clockwise.
    """
    rel = normalize_deg(target_deg - heading_deg)
    if rel > 180.0:
        rel -= 360.0
    return rel


def heading_from_alpha(alpha: float) -> float:
    """Convert a device-orientation alpha (counter-clockwise) into a compass heading."""
    return normalize_deg(360.0 - alpha)
