"""requests-based client for the NBP exchange rate API."""

from __future__ import annotations

import threading
from datetime import date
from typing import Any

import requests

from nbp_kantor.ingestion.strategy import RateNotFoundError
from nbp_kantor.utils.logger import get_logger

LOGGER = get_logger(__name__)

NBP_API_URL = "https://api.nbp.pl/api"
NBP_DEFAULT_TABLE = "A"


class NBPRequestsClient:
    """Looks up single-day mid rates from NBP table A (or another table).

    Without an injected ``session`` each calling thread gets its own
    ``requests.Session``; the web app calls the client from a threadpool.
    """

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        base_url: str = NBP_API_URL,
        table: str = NBP_DEFAULT_TABLE,
        timeout: float = 30,
    ) -> None:
        self._session = self._prepare(session) if session is not None else None
        self._local = threading.local()
        self._owned_sessions: list[requests.Session] = []
        self._lock = threading.Lock()
        self.base_url = base_url.rstrip("/")
        self.table = table
        self.timeout = timeout

    @property
    def session(self) -> requests.Session:
        """The injected session, or the one owned by the calling thread."""

        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._prepare(requests.Session())
            self._local.session = session
            with self._lock:
                self._owned_sessions.append(session)
        return session

    @staticmethod
    def _prepare(session: requests.Session) -> requests.Session:
        session.headers.setdefault("Accept", "application/json")
        session.headers.setdefault("User-Agent", "nbp-kantor/1.0")
        return session

    def rate_url(self, code: str, day: date) -> str:
        return (
            f"{self.base_url}/exchangerates/rates/{self.table}/"
            f"{code.upper()}/{day.isoformat()}/?format=json"
        )

    def fetch_mid(self, code: str, day: date) -> float:
        """Return the mid rate of ``code`` published on ``day``."""

        url = self.rate_url(code, day)
        LOGGER.debug("GET %s", url)
        response = self.session.get(url, timeout=self.timeout)
        if response.status_code == 404:
            raise RateNotFoundError(code.upper(), day)
        self._raise_with_context(response, url)
        return self._extract_mid(response.json(), code)

    @staticmethod
    def _extract_mid(payload: Any, code: str) -> float:
        try:
            return float(payload["rates"][0]["mid"])
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise ValueError(f"Unexpected NBP payload for {code.upper()}: {payload!r}") from exc

    def _raise_with_context(self, response: requests.Response, url: str) -> None:
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = response.status_code
            hint = ""
            if status == 400:
                hint = " NBP rejects future dates and dates before 2002-01-02."
            raise RuntimeError(f"NBP API responded with HTTP {status} for {url}.{hint}") from exc

    def close(self) -> None:
        """Close the sessions this client created; an injected one is left open."""

        with self._lock:
            owned, self._owned_sessions = self._owned_sessions, []
            self._local = threading.local()
        for session in owned:
            session.close()

    def __enter__(self) -> "NBPRequestsClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = ["NBPRequestsClient", "NBP_API_URL", "NBP_DEFAULT_TABLE"]
