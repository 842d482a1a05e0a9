"""Date helpers for NBP lookups and request validation."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator

ISO_DATE_FORMAT = "%Y-%m-%d"


def parse_date(value: str | date) -> date:
    """Parse a date string in ISO format to :class:`date`."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def validate_date(value: str, fmt: str = ISO_DATE_FORMAT) -> bool:
    """Return True when ``value`` is a real calendar day written exactly in ``fmt``.

    ``strptime`` alone is lenient about zero padding (``2024-8-1`` parses), so
    the parsed value must also format back to the original string.
    """

    try:
        parsed = datetime.strptime(value, fmt)
    except (TypeError, ValueError):
        return False
    return parsed.strftime(fmt) == value


def lookback_dates(start: str | date, max_days: int) -> Iterator[date]:
    """Yield ``start`` followed by the preceding days, ``max_days`` in total."""

    if max_days <= 0:
        raise ValueError("max_days must be positive")

    current = parse_date(start)
    for _ in range(max_days):
        yield current
        current -= timedelta(days=1)


def today() -> date:
    return date.today()


__all__ = ["ISO_DATE_FORMAT", "parse_date", "validate_date", "lookback_dates", "today"]
