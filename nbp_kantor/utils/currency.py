"""Static currency table and the kantor's spread rules."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

UNKNOWN_CURRENCY_NAME = "Unknown"
BASE_CURRENCY = "PLN"
BASE_CURRENCY_NAME = "Polish Zloty"


@dataclass(frozen=True, slots=True)
class CurrencySpec:
    """A supported currency and the spreads applied to its NBP mid rate.

    ``buy_spread`` is ``None`` when the kantor does not buy the currency.
    """

    code: str
    name: str
    sell_spread: float
    buy_spread: float | None = None

    @property
    def is_privileged(self) -> bool:
        return self.buy_spread is not None


PRIVILEGED_BUY_SPREAD = 0.05
PRIVILEGED_SELL_SPREAD = 0.07
DEFAULT_SELL_SPREAD = 0.15

CURRENCIES: Mapping[str, CurrencySpec] = MappingProxyType(
    {
        "EUR": CurrencySpec("EUR", "Euro", PRIVILEGED_SELL_SPREAD, PRIVILEGED_BUY_SPREAD),
        "USD": CurrencySpec("USD", "US Dollar", PRIVILEGED_SELL_SPREAD, PRIVILEGED_BUY_SPREAD),
        "CZK": CurrencySpec("CZK", "Czech Koruna", DEFAULT_SELL_SPREAD),
        "IDR": CurrencySpec("IDR", "Indonesian Rupiah", DEFAULT_SELL_SPREAD),
        "BRL": CurrencySpec("BRL", "Brazilian Real", DEFAULT_SELL_SPREAD),
    }
)

SUPPORTED_CODES: tuple[str, ...] = tuple(CURRENCIES)


def normalise_code(code: str) -> str:
    return code.strip().upper()


def currency_name(code: str) -> str:
    """Return the display name for ``code`` or ``"Unknown"``."""

    spec = CURRENCIES.get(normalise_code(code))
    return spec.name if spec else UNKNOWN_CURRENCY_NAME


def buy_rate(code: str, mid: float) -> float | None:
    """Rate at which the kantor buys ``code``; ``None`` if it does not buy it."""

    spec = CURRENCIES.get(normalise_code(code))
    if spec is None or spec.buy_spread is None:
        return None
    return mid - spec.buy_spread


def sell_rate(code: str, mid: float) -> float:
    """Rate at which the kantor sells ``code``."""

    spec = CURRENCIES.get(normalise_code(code))
    spread = spec.sell_spread if spec else DEFAULT_SELL_SPREAD
    return mid + spread


def validate_codes(codes: list[str] | tuple[str, ...]) -> tuple[str, ...]:
    """Normalise ``codes`` and reject anything missing from :data:`CURRENCIES`."""

    normalised = tuple(normalise_code(code) for code in codes if code.strip())
    unknown = [code for code in normalised if code not in CURRENCIES]
    if unknown:
        raise ValueError(f"Unsupported currency codes: {', '.join(unknown)}")
    if not normalised:
        raise ValueError("At least one currency code is required")
    return normalised


__all__ = [
    "BASE_CURRENCY",
    "BASE_CURRENCY_NAME",
    "CURRENCIES",
    "CurrencySpec",
    "SUPPORTED_CODES",
    "UNKNOWN_CURRENCY_NAME",
    "buy_rate",
    "currency_name",
    "normalise_code",
    "sell_rate",
    "validate_codes",
]
