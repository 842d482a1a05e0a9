"""Fetch a kantor rate set from a mid-rate source, stepping back over missing days."""

from __future__ import annotations

from datetime import date
from typing import Sequence

from nbp_kantor.ingestion.models import RateQuery, RateRecord, RateSet
from nbp_kantor.ingestion.strategy import MidRateSource, RateNotFoundError
from nbp_kantor.utils.currency import SUPPORTED_CODES, buy_rate, currency_name, sell_rate
from nbp_kantor.utils.date_range import lookback_dates, parse_date
from nbp_kantor.utils.logger import get_logger

LOGGER = get_logger(__name__)

__all__ = ["fetch_rate_set", "fetch_record", "price_record"]


def price_record(code: str, mid: float, rate_date: date) -> RateRecord:
    """Build a :class:`RateRecord` with the kantor's spreads applied to ``mid``."""

    return RateRecord(
        code=code,
        name=currency_name(code),
        mid=mid,
        buy_rate=buy_rate(code, mid),
        sell_rate=sell_rate(code, mid),
        rate_date=rate_date,
    )


def fetch_record(source: MidRateSource, code: str, day: date, max_days: int) -> RateRecord | None:
    """Look up ``code`` on ``day``, retrying earlier days while NBP reports none.

    Returns ``None`` once ``max_days`` days have been tried without a rate.
    Any error other than :class:`RateNotFoundError` propagates.
    """

    for candidate in lookback_dates(day, max_days):
        try:
            mid = source.fetch_mid(code, candidate)
        except RateNotFoundError:
            LOGGER.debug("No %s rate on %s; stepping back one day", code, candidate)
            continue
        return price_record(code, mid, candidate)
    return None


def fetch_rate_set(
    source: MidRateSource,
    day: str | date,
    codes: Sequence[str] = SUPPORTED_CODES,
    max_days_to_check: int | None = None,
) -> RateSet:
    """Fetch and price every currency in ``codes`` for ``day``.

    Each currency gets its own lookback window starting at ``day``;
    ``max_days_to_check=None`` checks ``day`` only. Currencies with no rate in
    their window are left out of the result.
    """

    max_days = 1 if max_days_to_check is None else max_days_to_check
    if max_days < 1:
        raise ValueError("max_days_to_check must be at least 1")

    query = RateQuery(day=parse_date(day), codes=tuple(codes))
    LOGGER.info(
        "Fetching %s rates for %s (checking up to %s day(s))",
        ", ".join(query.codes),
        query.day,
        max_days,
    )

    records: list[RateRecord] = []
    for code in query.codes:
        record = fetch_record(source, code, query.day, max_days)
        if record is None:
            LOGGER.warning(
                "No %s rate found within %s day(s) up to %s", code, max_days, query.day
            )
            continue
        records.append(record)

    effective_date = min((record.rate_date for record in records), default=query.day)
    return RateSet(requested_date=query.day, effective_date=effective_date, rates=records)
