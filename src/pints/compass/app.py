"""
Compass orchestrator.

`CompassApp` owns the application state and is the only component that mutates
it. Every input is a discrete event handled to completion on the event loop:

- location fix      -> maybe start a candidate search, recompute everything
- orientation/heading -> recompute the needle rotation only
- search completion -> swap candidates (or report the failure), recompute everything
- user selection    -> re-resolve the target, recompute everything

The search is the only suspending operation. It runs as a task in a single slot
(`RefreshGuard`), so sensor events keep being applied while it is outstanding.
A response that arrives after further movement is still applied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from pints.compass.display import build_candidate_views, build_target_view, compass_rotation
from pints.compass.refresh import RefreshGuard, should_refresh
from pints.compass.render import Renderer
from pints.compass.repository import PoiRepository
from pints.compass.sources import SensorStream, Subscription
from pints.config.settings import Settings
from pints.core.geo import heading_from_alpha
from pints.domain.models import DerivedDisplay, GeoPoint, Phase, PointOfInterest, Status, StatusLevel
from pints.exceptions import FetchFailed, SensorUnavailable

logger = logging.getLogger(__name__)


class SearchClient(Protocol):
    async def search(self, origin: GeoPoint) -> list[PointOfInterest]: ...


@dataclass
class ApplicationState:
    location: GeoPoint | None = None
    heading: float | None = None
    selection: str | None = None
    repository: PoiRepository = field(default_factory=PoiRepository)

    @property
    def phase(self) -> Phase:
        if self.location is None:
            return Phase.AWAITING_FIX
        if not self.repository.has_candidates:
            return Phase.AWAITING_CANDIDATES
        return Phase.READY


class CompassApp:
    def __init__(self, settings: Settings, search_client: SearchClient, renderer: Renderer):
        self._settings = settings
        self._search = search_client
        self._renderer = renderer
        self._state = ApplicationState()
        self._guard = RefreshGuard()
        self._status: Status | None = None
        self._display: DerivedDisplay | None = None
        self._subscriptions: list[Subscription] = []
        self._closed = False

    # -- read-only views -------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def location(self) -> GeoPoint | None:
        return self._state.location

    @property
    def heading(self) -> float | None:
        return self._state.heading

    @property
    def selection(self) -> str | None:
        return self._state.selection

    @property
    def candidates(self) -> tuple[PointOfInterest, ...] | None:
        return self._state.repository.candidates

    @property
    def refresh_in_flight(self) -> bool:
        return self._guard.in_flight

    @property
    def display(self) -> DerivedDisplay | None:
        return self._display

    @property
    def closed(self) -> bool:
        return self._closed

    # -- lifecycle -------------------------------------------------------

    def start(
        self,
        location_source: SensorStream[GeoPoint] | None,
        orientation_source: SensorStream[float | None] | None,
    ) -> None:
        """Subscribe to both sensor streams.

        Raises:
            SensorUnavailable: If either source is missing (reported once as a fatal status).
        """
        missing = [
            label
            for label, source in (("Geolocation", location_source), ("Device orientation", orientation_source))
            if source is None
        ]
        if missing:
            message = f"{' and '.join(missing)} not available."
            self._status = Status(level=StatusLevel.FATAL, message=message)
            self._recompute()
            raise SensorUnavailable(message)

        self._status = Status(level=StatusLevel.INFO, message="Fetching location")
        self._recompute()
        self._subscriptions = [
            location_source.subscribe(self.on_location),
            orientation_source.subscribe(self.on_orientation),
        ]

    def close(self) -> None:
        """Release both sensor subscriptions and drop any outstanding search. Idempotent."""
        if self._closed:
            return
        self._closed = True
        for subscription in self._subscriptions:
            subscription.cancel()
        self._subscriptions = []
        self._guard.cancel()

    async def wait_for_refresh(self) -> None:
        """Wait until the in-flight search (if any) has been applied."""
        await self._guard.wait()

    # -- events ----------------------------------------------------------

    def on_location(self, point: GeoPoint) -> None:
        if self._closed:
            return
        previous = self._state.location
        self._state.location = point
        logger.debug("Location lat=%.5f lon=%.5f", point.lat, point.lon)

        wants_refresh = should_refresh(previous, point, min_move_m=self._settings.refresh.min_move_m)
        if wants_refresh and self._guard.start(lambda: self._refresh(point)):
            self._status = Status(level=StatusLevel.INFO, message="Fetching nearby pubs")
        elif not self._guard.in_flight and self._state.phase is Phase.READY:
            self._status = self._settled_status()
        self._recompute()

    def on_orientation(self, alpha: float | None) -> None:
        """Raw device-orientation event; readings without alpha are ignored."""
        if alpha is None:
            return
        self.on_heading(heading_from_alpha(alpha))

    def on_heading(self, heading: float) -> None:
        if self._closed:
            return
        self._state.heading = heading
        display = self._display
        if self._state.phase is not Phase.READY or display is None or display.target is None:
            return
        # Target and location are unchanged here; only the needle moves.
        rotation = compass_rotation(display.target.bearing_deg, heading)
        self._display = display.model_copy(update={"rotation_deg": rotation})
        self._renderer.render(self._display)

    def select(self, poi_id: str) -> None:
        if self._closed:
            return
        if not self._state.repository.contains(poi_id):
            logger.debug("Selected id %s is not among current candidates; nearest is shown", poi_id)
        self._state.selection = poi_id
        self._recompute()

    def clear_selection(self) -> None:
        if self._closed:
            return
        self._state.selection = None
        self._recompute()

    async def _refresh(self, origin: GeoPoint) -> None:
        try:
            results = await self._search.search(origin)
        except FetchFailed as e:
            logger.warning("Candidate search failed: %s", e)
            self._status = Status(level=StatusLevel.ERROR, message=f"Error fetching local pubs: {e}")
            self._recompute()
            return

        self._state.repository.replace_candidates(results)
        self._status = self._settled_status()
        self._recompute()

    # -- derived display -------------------------------------------------

    def _settled_status(self) -> Status | None:
        if self._state.repository.candidates:
            return None
        return Status(level=StatusLevel.INFO, message="No pubs nearby")

    def _recompute(self) -> None:
        state = self._state
        phase = state.phase
        if phase is not Phase.READY or state.location is None:
            self._display = DerivedDisplay(phase=phase, status=self._status)
            self._renderer.render(self._display)
            return

        origin = state.location
        repo = state.repository
        display_settings = self._settings.display
        directions = self._settings.directions

        target = repo.resolve_target(origin, state.selection)
        target_view = None
        rotation = None
        if target is not None:
            target_view = build_target_view(origin, target, display=display_settings, directions=directions)
            rotation = compass_rotation(target_view.bearing_deg, state.heading)

        self._display = DerivedDisplay(
            phase=phase,
            target=target_view,
            rotation_deg=rotation,
            candidates=build_candidate_views(
                origin,
                repo.sorted_by_distance(origin),
                selected_id=target.id if target is not None else None,
                display=display_settings,
                directions=directions,
            ),
            status=self._status,
        )
        self._renderer.render(self._display)
