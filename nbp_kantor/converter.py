"""Currency calculator: convert amounts between PLN and the fetched currencies."""

from __future__ import annotations

import math
import re
from typing import Iterable

from nbp_kantor.ingestion.models import RateRecord
from nbp_kantor.utils.currency import BASE_CURRENCY, normalise_code

_AMOUNT_PATTERN = re.compile(r"^\d*\.?\d*$")


def parse_amount(value: str | float | None) -> float | None:
    """Parse a user-typed amount; a comma is accepted as the decimal separator.

    Blank input yields ``None``. Anything other than digits with at most one
    separator raises :class:`ValueError`.
    """

    if value is None:
        return None
    if isinstance(value, (int, float)):
        if value < 0:
            raise ValueError("Amount must not be negative")
        return _finite(float(value))
    cleaned = value.strip().replace(",", ".", 1)
    if not cleaned or cleaned == ".":
        return None
    if not _AMOUNT_PATTERN.match(cleaned):
        raise ValueError(f"Invalid amount: {value!r}")
    return _finite(float(cleaned))


def _finite(amount: float) -> float:
    if not math.isfinite(amount):
        raise ValueError("Amount must be a finite number")
    return amount


def mid_for(code: str, records: Iterable[RateRecord]) -> float:
    """Mid rate of ``code`` in PLN; PLN and unknown codes count as 1."""

    code = normalise_code(code)
    if code == BASE_CURRENCY:
        return 1.0
    for record in records:
        if record.code == code:
            return record.mid or 1.0
    return 1.0


def convert(amount: float, from_code: str, to_code: str, records: Iterable[RateRecord]) -> float:
    """Convert ``amount`` through PLN, rounded to two decimal places."""

    if amount < 0:
        raise ValueError("Amount must not be negative")
    records = list(records)
    from_mid = mid_for(from_code, records)
    to_mid = mid_for(to_code, records)
    return _finite(round(amount * from_mid / to_mid, 2))


def exchange_rate_info(
    from_code: str, to_code: str, records: Iterable[RateRecord]
) -> tuple[float, float]:
    """Return ``(1 from in to, 1 to in from)`` rounded to four decimal places."""

    records = list(records)
    from_mid = mid_for(from_code, records)
    to_mid = mid_for(to_code, records)
    return round(from_mid / to_mid, 4), round(to_mid / from_mid, 4)


__all__ = ["convert", "exchange_rate_info", "mid_for", "parse_amount"]
