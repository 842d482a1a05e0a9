"""Public interface for the nbp_kantor package."""

from __future__ import annotations

from datetime import date
from importlib import metadata as importlib_metadata
from typing import Iterable

from nbp_kantor.config import Settings
from nbp_kantor.converter import convert as _convert
from nbp_kantor.converter import exchange_rate_info
from nbp_kantor.ingestion.models import RateQuery, RateRecord, RateSet
from nbp_kantor.ingestion.nbp_requests import NBPRequestsClient
from nbp_kantor.ingestion.strategy import MidRateSource, RateNotFoundError
from nbp_kantor.rates import fetch_rate_set
from nbp_kantor.utils import date_range

__all__ = [
    "__version__",
    "NbpKantor",
    "NBPRequestsClient",
    "MidRateSource",
    "RateNotFoundError",
    "RateQuery",
    "RateRecord",
    "RateSet",
    "Settings",
    "fetch_rate_set",
]

try:
    __version__ = importlib_metadata.version("nbp-kantor")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"


class NbpKantor:
    """Package facade tying settings, the NBP client and the fetcher together."""

    __slots__ = ("settings", "source")

    # Provide direct access to the package version as a class attribute.
    __version__ = __version__

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        source: MidRateSource | None = None,
    ) -> None:
        """Configure where rates come from.

        Without ``source`` an :class:`NBPRequestsClient` is built from
        ``settings`` (which default to :meth:`Settings.from_env`). Tests and
        offline callers pass any object implementing :class:`MidRateSource`.
        """

        self.settings = settings or Settings.from_env()
        self.source: MidRateSource = source or NBPRequestsClient(
            base_url=self.settings.api_url,
            table=self.settings.table,
            timeout=self.settings.timeout,
        )

    def exchange_rates(
        self,
        day: date | str | None = None,
        *,
        max_days_to_check: int | None = None,
        codes: Iterable[str] | None = None,
    ) -> RateSet:
        """Return the priced rate set for ``day`` (today when omitted)."""

        target = date_range.parse_date(day) if day is not None else date_range.today()
        return fetch_rate_set(
            self.source,
            target,
            tuple(codes) if codes is not None else self.settings.currencies,
            max_days_to_check if max_days_to_check is not None else self.settings.max_days_to_check,
        )

    def today_rates(self, max_days_to_check: int | None = None) -> RateSet:
        return self.exchange_rates(date_range.today(), max_days_to_check=max_days_to_check)

    @staticmethod
    def convert(amount: float, from_code: str, to_code: str, rate_set: RateSet) -> float:
        """Convert ``amount`` using the mid rates of ``rate_set``."""

        return _convert(amount, from_code, to_code, rate_set.rates)

    @staticmethod
    def exchange_rate_info(from_code: str, to_code: str, rate_set: RateSet) -> tuple[float, float]:
        return exchange_rate_info(from_code, to_code, rate_set.rates)

    def close(self) -> None:
        closer = getattr(self.source, "close", None)
        if callable(closer):
            closer()
