"""
Derived display values.

Pure helpers that turn (location, heading, candidates, target) into the
`DerivedDisplay` a renderer shows. No state lives here.
"""

from __future__ import annotations

import httpx

from pints.compass.repository import distance_to
from pints.config.settings import DirectionsSettings, DisplaySettings
from pints.core.geo import GeoPoint as CoreGeoPoint
from pints.core.geo import initial_bearing_deg, relative_bearing_deg
from pints.domain.models import CandidateView, GeoPoint, PointOfInterest, TargetView


def format_distance(meters: float, *, km_threshold_m: float = 1000) -> str:
    """`999m` below the threshold, `1.50km` at or above it."""
    whole = round(meters)
    if whole >= km_threshold_m:
        return f"{meters / 1000:.2f}km"
    return f"{whole}m"


def display_name(poi: PointOfInterest, *, unnamed_label: str = "Unnamed Pub") -> str:
    return poi.name if poi.name is not None else unnamed_label


def _coord_str(point: GeoPoint) -> str:
    return f"{point.lat},{point.lon}"


def directions_url(origin: GeoPoint, poi: PointOfInterest, settings: DirectionsSettings) -> str:
    """Walking directions link (Google Maps `dir` API) from `origin` to `poi`."""
    url = httpx.URL(
        settings.base_url,
        params={
            "api": 1,
            "origin": _coord_str(origin),
            "destination": _coord_str(poi.location),
            "travelmode": settings.travel_mode,
        },
    )
    return str(url)


def bearing_to(origin: GeoPoint, poi: PointOfInterest) -> float:
    return initial_bearing_deg(
        CoreGeoPoint(lat=origin.lat, lon=origin.lon),
        CoreGeoPoint(lat=poi.location.lat, lon=poi.location.lon),
    )


def compass_rotation(bearing_deg: float, heading: float | None) -> float:
    """Rotation for the compass needle; no heading yet means north-up."""
    return relative_bearing_deg(bearing_deg, heading or 0.0)


def build_target_view(
    origin: GeoPoint,
    poi: PointOfInterest,
    *,
    display: DisplaySettings,
    directions: DirectionsSettings,
) -> TargetView:
    meters = distance_to(origin, poi)
    return TargetView(
        id=poi.id,
        name=display_name(poi, unnamed_label=display.unnamed_label),
        distance_m=meters,
        distance_text=format_distance(meters, km_threshold_m=display.km_threshold_m),
        bearing_deg=bearing_to(origin, poi),
        directions_url=directions_url(origin, poi, directions),
    )


def build_candidate_views(
    origin: GeoPoint,
    ordered: list[PointOfInterest],
    *,
    selected_id: str | None,
    display: DisplaySettings,
    directions: DirectionsSettings,
) -> list[CandidateView]:
    out: list[CandidateView] = []
    for poi in ordered:
        meters = distance_to(origin, poi)
        out.append(
            CandidateView(
                id=poi.id,
                name=display_name(poi, unnamed_label=display.unnamed_label),
                distance_m=meters,
                distance_text=format_distance(meters, km_threshold_m=display.km_threshold_m),
                selected=poi.id == selected_id,
                directions_url=directions_url(origin, poi, directions),
            )
        )
    return out
