"""CLI helpers for printing kantor rates and running the web server."""

from __future__ import annotations

import argparse
import json
from typing import Sequence

from nbp_kantor import NbpKantor
from nbp_kantor.config import Settings
from nbp_kantor.utils.currency import validate_codes
from nbp_kantor.utils.date_range import validate_date
from nbp_kantor.utils.logger import get_logger

LOGGER = get_logger(__name__)

__all__ = ["parse_fetch_args", "parse_serve_args", "fetch_main", "serve_main"]


def _iso_date(value: str) -> str:
    if not validate_date(value):
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD")
    return value


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _currency_code(value: str) -> str:
    try:
        return validate_codes([value])[0]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def parse_fetch_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print NBP-based kantor rates as JSON")
    parser.add_argument("--date", dest="day", type=_iso_date, help="Rate date (YYYY-MM-DD), default today")
    parser.add_argument(
        "--max-days",
        dest="max_days",
        type=_positive_int,
        default=None,
        help="Days to step back when NBP has no rate for the date",
    )
    parser.add_argument(
        "--currency",
        dest="codes",
        type=_currency_code,
        action="append",
        help="Currency code to fetch; repeat for several (default: all supported)",
    )
    return parser.parse_args(argv)


def parse_serve_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the kantor web application")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    parser.add_argument("--port", type=int, default=8000, help="Bind port")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    return parser.parse_args(argv)


def fetch_main(argv: Sequence[str] | None = None) -> int:
    args = parse_fetch_args(argv)
    kantor = NbpKantor(Settings.from_env())
    try:
        rate_set = kantor.exchange_rates(
            args.day, max_days_to_check=args.max_days, codes=args.codes
        )
    finally:
        kantor.close()
    print(json.dumps(rate_set.to_dict(), indent=2))
    return 0


def serve_main(argv: Sequence[str] | None = None) -> None:
    import uvicorn

    args = parse_serve_args(argv)
    LOGGER.info("Serving on http://%s:%s", args.host, args.port)
    uvicorn.run(
        "nbp_kantor.web.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
