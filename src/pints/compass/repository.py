"""
In-memory point-of-interest repository.

Holds the last fetched candidate set and answers "which candidate is the target?".
Everything here is pure in-memory work on values passed in; it never reaches
back into the compass state.
"""

from __future__ import annotations

from collections.abc import Iterable

from pints.core.geo import GeoPoint as CoreGeoPoint
from pints.core.geo import haversine_m
from pints.domain.models import GeoPoint, PointOfInterest


def distance_between(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in meters between two domain points."""
    return haversine_m(CoreGeoPoint(lat=a.lat, lon=a.lon), CoreGeoPoint(lat=b.lat, lon=b.lon))


def distance_to(origin: GeoPoint, poi: PointOfInterest) -> float:
    """Great-circle distance in meters from `origin` to `poi`."""
    return distance_between(origin, poi.location)


class PoiRepository:
    def __init__(self) -> None:
        self._candidates: tuple[PointOfInterest, ...] | None = None

    @property
    def candidates(self) -> tuple[PointOfInterest, ...] | None:
        """The current candidate set, or None before the first successful fetch."""
        return self._candidates

    @property
    def has_candidates(self) -> bool:
        return self._candidates is not None

    def contains(self, poi_id: str) -> bool:
        return self._find(poi_id) is not None

    def replace_candidates(self, new_set: Iterable[PointOfInterest]) -> None:
        """Swap in a new candidate set. No merging with the previous one."""
        self._candidates = tuple(new_set)

    def _find(self, poi_id: str) -> PointOfInterest | None:
        for poi in self._candidates or ():
            if poi.id == poi_id:
                return poi
        return None

    def resolve_target(self, origin: GeoPoint, selection: str | None) -> PointOfInterest | None:
        """Return the selected candidate if present, else the nearest one.

        Ties on distance go to the earlier candidate. Returns None when there
        are no candidates.
        """
        if selection is not None:
            selected = self._find(selection)
            if selected is not None:
                return selected

        best: PointOfInterest | None = None
        best_d = 0.0
        for poi in self._candidates or ():
            d = distance_to(origin, poi)
            if best is None or d < best_d:
                best, best_d = poi, d
        return best

    def sorted_by_distance(self, origin: GeoPoint) -> list[PointOfInterest]:
        """Candidates sorted nearest-first (stable). Always a new list."""
        return sorted(self._candidates or (), key=lambda poi: distance_to(origin, poi))
