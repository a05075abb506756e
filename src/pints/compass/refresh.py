"""
Refresh policy.

Two small pieces decide when the candidate search runs again:
- `should_refresh()`: only after a real move (GPS jitter stays below the threshold);
- `RefreshGuard`: a single-slot task handle so at most one search is in flight.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from pints.compass.repository import distance_between
from pints.domain.models import GeoPoint

logger = logging.getLogger(__name__)

DEFAULT_MIN_MOVE_M = 250.0


def should_refresh(previous: GeoPoint | None, current: GeoPoint, *, min_move_m: float = DEFAULT_MIN_MOVE_M) -> bool:
    """True on the first fix or when the user moved at least `min_move_m` since the previous fix."""
    if previous is None:
        return True
    return distance_between(previous, current) >= min_move_m


class RefreshGuard:
    """Single-slot handle for the in-flight refresh task.

    Starting while a task is outstanding is a no-op (the request is dropped,
    not queued). Completion, successful or not, always frees the slot.
    """

    def __init__(self) -> None:
        self._task: asyncio.Task[None] | None = None

    @property
    def in_flight(self) -> bool:
        return self._task is not None

    def start(self, trigger: Callable[[], Awaitable[None]]) -> bool:
        """Run `trigger()` as a task unless one is already running. Must be called on the event loop."""
        if self._task is not None:
            logger.debug("Refresh already in flight; dropping request")
            return False
        self._task = asyncio.get_running_loop().create_task(self._run(trigger))
        return True

    async def _run(self, trigger: Callable[[], Awaitable[None]]) -> None:
        try:
            await trigger()
        finally:
            # A cancelled task may finish after a newer one took the slot.
            if self._task is asyncio.current_task():
                self._task = None

    async def wait(self) -> None:
        """Wait for the outstanding refresh (if any); re-raises its unexpected errors."""
        task = self._task
        if task is not None:
            await task

    def cancel(self) -> None:
        task = self._task
        if task is not None:
            task.cancel()
            self._task = None
