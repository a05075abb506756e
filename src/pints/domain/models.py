"""
Domain models (Pydantic).

These types represent the stable "contract" between layers:
- sensor inputs (`GeoPoint`, `OrientationReading`)
- search results (`PointOfInterest`)
- the derived display handed to renderers (`DerivedDisplay`)

Keeping these models in one place helps:
- validation (reject out-of-range coordinates early),
- consistent JSON output across CLI/API.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GeoPoint(BaseModel):
    """A geographic point in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class PointOfInterest(BaseModel):
    """A search candidate. Identity is `id`; the rest may change between fetches."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str | None = None
    location: GeoPoint

    @field_validator("name")
    @classmethod
    def _blank_name_is_missing(cls, name: str | None) -> str | None:
        if name is None or not name.strip():
            return None
        return name.strip()


class OrientationReading(BaseModel):
    """Raw device-orientation event; `alpha` is counter-clockwise degrees (or absent)."""

    alpha: float | None = None


class SelectionRequest(BaseModel):
    id: str = Field(..., min_length=1)


class Phase(StrEnum):
    AWAITING_FIX = "awaiting_fix"
    AWAITING_CANDIDATES = "awaiting_candidates"
    READY = "ready"


class StatusLevel(StrEnum):
    INFO = "info"
    ERROR = "error"
    FATAL = "fatal"


class Status(BaseModel):
    level: StatusLevel
    message: str


class CandidateView(BaseModel):
    """One row of the nearby list."""

    id: str
    name: str
    distance_m: float
    distance_text: str
    selected: bool = False
    directions_url: str


class TargetView(BaseModel):
    """The resolved target shown in the main panel."""

    id: str
    name: str
    distance_m: float
    distance_text: str
    bearing_deg: float
    directions_url: str


class DerivedDisplay(BaseModel):
    """Everything a renderer needs for one frame.

    `target`/`rotation_deg` are None while there is nothing to point at;
    `status` is None when no banner applies.
    """

    phase: Phase
    target: TargetView | None = None
    rotation_deg: float | None = None
    candidates: list[CandidateView] = Field(default_factory=list)
    status: Status | None = None
