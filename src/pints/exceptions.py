"""Custom exception hierarchy for pints."""

from __future__ import annotations


class PintsError(Exception):
    """Base exception for all pints errors."""


class SensorUnavailable(PintsError):
    """A location or orientation source is missing at startup (fatal)."""


class FetchFailed(PintsError):
    """Candidate search failed (network, non-2xx, invalid or malformed JSON).

    Recoverable: the compass keeps its previous candidates and waits for the
    next qualifying movement.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
