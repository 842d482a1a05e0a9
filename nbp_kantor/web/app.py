"""FastAPI application serving kantor rates as JSON and the frontend shell."""

from __future__ import annotations

import json
import re
from contextlib import asynccontextmanager
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse

from nbp_kantor import NbpKantor, __version__
from nbp_kantor.config import Settings
from nbp_kantor.converter import convert, exchange_rate_info, parse_amount
from nbp_kantor.utils import date_range
from nbp_kantor.utils.currency import BASE_CURRENCY, BASE_CURRENCY_NAME, normalise_code
from nbp_kantor.utils.logger import get_logger

LOGGER = get_logger(__name__)

INVALID_DATE_ERROR = "Invalid date format"

_LEADING_INT = re.compile(r"\s*[+-]?\d+")

router = APIRouter()


def get_kantor(request: Request) -> NbpKantor:
    return request.app.state.kantor


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}


@router.get("/setup-check")
def setup_check(test_param: str | None = Query(None, alias="testParam")) -> dict[str, Any]:
    """Echo ``testParam`` as an integer so deployments can be smoke-tested.

    Missing, empty and ``"0"`` values echo ``null``. Otherwise the leading
    integer is kept (``"12abc"`` gives 12, ``"1.9"`` gives 1) and text without
    one gives 0.
    """

    if not test_param or test_param == "0":
        return {"testParam": None}
    match = _LEADING_INT.match(test_param)
    return {"testParam": int(match.group()) if match else 0}


@router.get("/api/exchange-rates")
def exchange_rates(
    selected: str | None = Query(None, alias="date"),
    kantor: NbpKantor = Depends(get_kantor),
):
    """Rates for the selected date next to today's rates."""

    today = date_range.today().isoformat()
    selected_date = selected if selected is not None else today
    if not date_range.validate_date(selected_date):
        return _error(INVALID_DATE_ERROR, 400)

    try:
        rates = kantor.exchange_rates(selected_date)
        today_rates = kantor.exchange_rates(today)
    except Exception as exc:
        LOGGER.exception("Failed to fetch exchange rates for %s", selected_date)
        return _error(str(exc), 500)

    return {
        "selectedDate": selected_date,
        "rates": [record.to_dict() for record in rates.rates],
        "dataFromTheDay": rates.effective_date.isoformat(),
        "todayRates": [record.to_dict() for record in today_rates.rates],
        "todayDataFromTheDay": today_rates.effective_date.isoformat(),
    }


@router.get("/api/convert")
def convert_amount(
    amount: str = Query(...),
    from_code: str = Query("EUR", alias="from"),
    to_code: str = Query(BASE_CURRENCY, alias="to"),
    selected: str | None = Query(None, alias="date"),
    kantor: NbpKantor = Depends(get_kantor),
):
    """Convert ``amount`` between two currencies through their NBP mid rates."""

    selected_date = selected if selected is not None else date_range.today().isoformat()
    if not date_range.validate_date(selected_date):
        return _error(INVALID_DATE_ERROR, 400)
    try:
        value = parse_amount(amount)
    except ValueError as exc:
        return _error(str(exc), 400)
    if value is None:
        return _error("Amount is required", 400)

    from_code, to_code = normalise_code(from_code), normalise_code(to_code)
    allowed = {BASE_CURRENCY, *kantor.settings.currencies}
    unsupported = [code for code in (from_code, to_code) if code not in allowed]
    if unsupported:
        return _error(f"Unsupported currency: {', '.join(unsupported)}", 400)

    try:
        rate_set = kantor.exchange_rates(
            selected_date, max_days_to_check=kantor.settings.index_max_days_to_check
        )
    except Exception as exc:
        LOGGER.exception("Failed to fetch exchange rates for conversion on %s", selected_date)
        return _error(str(exc), 500)

    try:
        result = convert(value, from_code, to_code, rate_set.rates)
    except ValueError as exc:
        return _error(str(exc), 400)
    rate, reverse_rate = exchange_rate_info(from_code, to_code, rate_set.rates)
    return {
        "amount": value,
        "from": from_code,
        "to": to_code,
        "result": result,
        "rate": rate,
        "reverseRate": reverse_rate,
        "dataFromTheDay": rate_set.effective_date.isoformat(),
    }


@router.get("/", response_class=HTMLResponse)
def index(kantor: NbpKantor = Depends(get_kantor)):
    """Frontend shell with today's rates embedded as ``window.__INITIAL_DATA__``."""

    try:
        rate_set = kantor.today_rates(kantor.settings.index_max_days_to_check)
    except Exception:
        LOGGER.exception("Failed to fetch today's rates for the index page")
        return HTMLResponse(content="Error loading exchange rates", status_code=500)

    initial_data = rate_set.to_dict()
    initial_data["baseCurrency"] = {"code": BASE_CURRENCY, "name": BASE_CURRENCY_NAME}
    # Keep "</script>" sequences inside the JSON from closing the tag.
    payload = json.dumps(initial_data).replace("</", "<\\/")
    return HTMLResponse(
        content=f"""<!DOCTYPE html>
<html lang="en">
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1">
        <title>Kantor - NBP exchange rates</title>
    </head>
    <body>
        <div id="root"></div>
        <script>window.__INITIAL_DATA__ = {payload};</script>
        <script src="/build/app.js" defer></script>
    </body>
</html>
"""
    )


def create_app(kantor: NbpKantor | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the application around ``kantor`` (created from ``settings`` if omitted)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        LOGGER.info("Starting nbp-kantor %s", __version__)
        yield
        app.state.kantor.close()

    application = FastAPI(title="NBP Kantor", version=__version__, lifespan=lifespan)
    application.state.kantor = kantor or NbpKantor(settings)
    application.include_router(router)
    return application

