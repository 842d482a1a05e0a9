"""Abstractions for pluggable mid-rate sources."""

from __future__ import annotations

from datetime import date
from typing import Protocol


class RateNotFoundError(LookupError):
    """Raised when no mid rate is published for a currency on a given day."""

    def __init__(self, code: str, day: date) -> None:
        super().__init__(f"No NBP rate published for {code} on {day.isoformat()}")
        self.code = code
        self.day = day


class MidRateSource(Protocol):
    """Contract for looking up a single NBP mid rate.

    Implementations raise :class:`RateNotFoundError` when the day has no
    published rate (weekends, holidays) and let every other failure propagate.
    """

    def fetch_mid(self, code: str, day: date) -> float:
        ...  # pragma: no cover - protocol definition


__all__ = ["MidRateSource", "RateNotFoundError"]
