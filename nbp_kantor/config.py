"""Runtime settings, read from ``NBP_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from nbp_kantor.ingestion.nbp_requests import NBP_API_URL, NBP_DEFAULT_TABLE
from nbp_kantor.utils.currency import SUPPORTED_CODES, validate_codes


@dataclass(frozen=True, slots=True)
class Settings:
    """How the kantor talks to NBP and how far it looks back for rates."""

    api_url: str = NBP_API_URL
    table: str = NBP_DEFAULT_TABLE
    timeout: float = 30.0
    max_days_to_check: int = 1
    index_max_days_to_check: int = 7
    currencies: tuple[str, ...] = SUPPORTED_CODES

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.max_days_to_check < 1 or self.index_max_days_to_check < 1:
            raise ValueError("days to check must be at least 1")
        if self.table.upper() not in {"A", "B"}:
            raise ValueError("NBP mid rates are only published in tables A and B")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from ``environ`` (defaults to :data:`os.environ`)."""

        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}
        if env.get("NBP_API_URL"):
            kwargs["api_url"] = env["NBP_API_URL"]
        if env.get("NBP_TABLE"):
            kwargs["table"] = env["NBP_TABLE"].upper()
        if env.get("NBP_TIMEOUT"):
            kwargs["timeout"] = _parse_number(env, "NBP_TIMEOUT", float)
        if env.get("NBP_MAX_DAYS_TO_CHECK"):
            kwargs["max_days_to_check"] = _parse_number(env, "NBP_MAX_DAYS_TO_CHECK", int)
        if env.get("NBP_INDEX_MAX_DAYS_TO_CHECK"):
            kwargs["index_max_days_to_check"] = _parse_number(
                env, "NBP_INDEX_MAX_DAYS_TO_CHECK", int
            )
        if env.get("NBP_CURRENCIES"):
            kwargs["currencies"] = validate_codes(env["NBP_CURRENCIES"].split(","))
        return cls(**kwargs)  # type: ignore[arg-type]


def _parse_number(env: Mapping[str, str], key: str, kind: type):
    try:
        return kind(env[key])
    except ValueError as exc:
        raise ValueError(f"{key} must be a valid {kind.__name__}, got {env[key]!r}") from exc


__all__ = ["Settings"]
