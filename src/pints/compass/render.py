"""Render contract.

The compass never draws anything itself; it hands a `DerivedDisplay` to a renderer.
"""

from __future__ import annotations

from typing import Protocol

from pints.domain.models import DerivedDisplay


class Renderer(Protocol):
    def render(self, display: DerivedDisplay) -> None: ...


class LatestDisplayRenderer:
    """Keeps the most recent frame so a host can serve it on demand."""

    def __init__(self) -> None:
        self.latest: DerivedDisplay | None = None
        self.frames = 0

    def render(self, display: DerivedDisplay) -> None:
        self.latest = display
        self.frames += 1
