"""
Candidate search client (OpenStreetMap Overpass API).

Given a coordinate, this module asks Overpass for every element tagged with the
configured amenity (`amenity=pub` by default) within the search radius, then
normalizes the result into `PointOfInterest` records.

Overpass returns nodes with `lat`/`lon`, while ways/relations (requested with
`out center`) carry a `center` object instead; both shapes are accepted.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from pints.config.settings import Settings
from pints.core.http import get_json
from pints.domain.models import GeoPoint, PointOfInterest
from pints.exceptions import FetchFailed

logger = logging.getLogger(__name__)


def build_query(origin: GeoPoint, *, amenity: str, radius_m: int, timeout_seconds: int) -> str:
    """Overpass QL for all `amenity=<amenity>` nodes/ways/relations around `origin`."""
    return (
        f"[out:json][timeout:{timeout_seconds}];\n"
        f'nwr["amenity"="{amenity}"]'
        f"(around:{radius_m},{origin.lat},{origin.lon});\n"
        "out center;\n"
    )


def _element_point(element: dict[str, Any]) -> GeoPoint | None:
    center = element.get("center")
    source = center if isinstance(center, dict) else element
    lat = source.get("lat")
    lon = source.get("lon")
    if lat is None or lon is None:
        return None
    return GeoPoint(lat=float(lat), lon=float(lon))


def parse_elements(payload: Any) -> list[PointOfInterest]:
    """Normalize an Overpass JSON payload into candidates (response order is kept).

    Raises:
        FetchFailed: If the payload is not an object or `elements` is not a list.
    """
    if not isinstance(payload, dict):
        raise FetchFailed("Malformed Overpass response: expected a JSON object")
    elements = payload.get("elements") or []
    if not isinstance(elements, list):
        raise FetchFailed("Malformed Overpass response: 'elements' is not a list")

    out: list[PointOfInterest] = []
    for element in elements:
        if not isinstance(element, dict) or element.get("id") is None:
            continue
        try:
            point = _element_point(element)
        except (TypeError, ValueError):
            point = None
        if point is None:
            logger.warning("Skipping Overpass element without coordinates: %s", element.get("id"))
            continue

        tags = element.get("tags") or {}
        name = tags.get("name") if isinstance(tags, dict) else None
        out.append(
            PointOfInterest(
                id=f"{element.get('type', 'node')}/{element['id']}",
                name=str(name) if name is not None else None,
                location=point,
            )
        )
    return out


class OverpassClient:
    """Fetches nearby candidates for a coordinate."""

    def __init__(self, settings: Settings):
        self._settings = settings

    async def search(self, origin: GeoPoint) -> list[PointOfInterest]:
        """Return candidates around `origin`.

        Raises:
            FetchFailed: On transport errors, non-2xx responses or malformed JSON.
        """
        search = self._settings.search
        query = build_query(
            origin,
            amenity=search.amenity,
            radius_m=search.radius_m,
            timeout_seconds=search.query_timeout_seconds,
        )
        logger.info(
            "Searching amenity=%s within %dm of lat=%.4f lon=%.4f",
            search.amenity,
            search.radius_m,
            origin.lat,
            origin.lon,
        )
        try:
            payload = await get_json(
                search.base_url,
                params={"data": query},
                headers={"User-Agent": self._settings.app.user_agent},
                timeout_seconds=self._settings.app.http_timeout_seconds,
            )
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise FetchFailed(f"HTTP {status}", status_code=status) from e
        except httpx.HTTPError as e:
            raise FetchFailed(f"{type(e).__name__}: {e}") from e
        except ValueError as e:
            raise FetchFailed("Invalid JSON from Overpass") from e

        results = parse_elements(payload)
        logger.info("Fetched %d candidates", len(results))
        return results
