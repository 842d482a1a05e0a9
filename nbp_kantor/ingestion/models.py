"""Data models shared by the fetcher, the web layer and the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from nbp_kantor.utils.currency import SUPPORTED_CODES


@dataclass(frozen=True, slots=True)
class RateQuery:
    """A calendar day and the ordered currency codes to look up for it."""

    day: date
    codes: tuple[str, ...] = SUPPORTED_CODES


@dataclass(slots=True)
class RateRecord:
    """One currency priced from the NBP mid rate of ``rate_date``."""

    code: str
    name: str
    mid: float
    sell_rate: float
    rate_date: date
    buy_rate: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "name": self.name,
            "nbpRate": self.mid,
            "buyRate": self.buy_rate,
            "sellRate": self.sell_rate,
            "date": self.rate_date.isoformat(),
        }


@dataclass(slots=True)
class RateSet:
    """Every record fetched for one :class:`RateQuery`.

    ``effective_date`` is the oldest day any record had to fall back to; it
    equals ``requested_date`` when no stepback happened or nothing was found.
    """

    requested_date: date
    effective_date: date
    rates: list[RateRecord] = field(default_factory=list)

    def get(self, code: str) -> RateRecord | None:
        for record in self.rates:
            if record.code == code:
                return record
        return None

    @property
    def codes(self) -> list[str]:
        return [record.code for record in self.rates]

    def to_dict(self) -> dict[str, Any]:
        return {
            "requestedDate": self.requested_date.isoformat(),
            "dataFromTheDay": self.effective_date.isoformat(),
            "rates": [record.to_dict() for record in self.rates],
        }
