"""
API routes.

The browser (or any client) is the sensor: it posts geolocation and orientation
readings here and reads back the latest display frame.

Endpoints:
- GET    `/api/display`: latest derived display.
- POST   `/api/location`: push a location fix (`?wait=true` returns after the search completes).
- POST   `/api/orientation`: push a raw device-orientation reading.
- PUT    `/api/selection`: pick a candidate as the target.
- DELETE `/api/selection`: go back to "nearest".
- GET    `/api/health`: liveness + current phase.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import APIRouter, HTTPException, Request

from pints.compass.app import CompassApp, SearchClient
from pints.compass.render import LatestDisplayRenderer
from pints.compass.sources import SensorStream
from pints.config.settings import Settings, get_settings
from pints.domain.models import DerivedDisplay, GeoPoint, OrientationReading, SelectionRequest
from pints.ingestion.overpass_client import OverpassClient

router = APIRouter()


@dataclass
class CompassSession:
    """Everything one hosted compass needs; created per application lifespan."""

    compass: CompassApp
    renderer: LatestDisplayRenderer
    locations: SensorStream[GeoPoint]
    orientations: SensorStream[float | None]


def _search_client(settings: Settings) -> SearchClient:
    return OverpassClient(settings)


def open_session(settings: Settings | None = None) -> CompassSession:
    """Build and start a compass wired to push-based sensor streams."""
    settings = settings or get_settings()
    renderer = LatestDisplayRenderer()
    session = CompassSession(
        compass=CompassApp(settings, _search_client(settings), renderer),
        renderer=renderer,
        locations=SensorStream("location"),
        orientations=SensorStream("orientation"),
    )
    session.compass.start(session.locations, session.orientations)
    return session


def _session(request: Request) -> CompassSession:
    return request.app.state.compass_session


def _latest(session: CompassSession) -> DerivedDisplay:
    latest = session.renderer.latest
    if latest is None:
        raise HTTPException(status_code=503, detail="Compass has not rendered a frame yet")
    return latest


@router.get("/api/health")
def get_health(request: Request) -> dict:
    session = _session(request)
    return {"ok": True, "phase": session.compass.phase, "refresh_in_flight": session.compass.refresh_in_flight}


@router.get("/api/display", response_model=DerivedDisplay)
def get_display(request: Request) -> DerivedDisplay:
    """Return the most recent display frame."""
    return _latest(_session(request))


@router.post("/api/location", response_model=DerivedDisplay)
async def post_location(point: GeoPoint, request: Request, wait: bool = False) -> DerivedDisplay:
    """Publish a location fix; optionally wait for the resulting search to land."""
    session = _session(request)
    session.locations.publish(point)
    if wait:
        await session.compass.wait_for_refresh()
    return _latest(session)


@router.post("/api/orientation", response_model=DerivedDisplay)
async def post_orientation(reading: OrientationReading, request: Request) -> DerivedDisplay:
    session = _session(request)
    session.orientations.publish(reading.alpha)
    return _latest(session)


@router.put("/api/selection", response_model=DerivedDisplay)
async def put_selection(selection: SelectionRequest, request: Request) -> DerivedDisplay:
    session = _session(request)
    session.compass.select(selection.id)
    return _latest(session)


@router.delete("/api/selection", response_model=DerivedDisplay)
async def delete_selection(request: Request) -> DerivedDisplay:
    session = _session(request)
    session.compass.clear_selection()
    return _latest(session)
