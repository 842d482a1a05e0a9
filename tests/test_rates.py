from __future__ import annotations

from datetime import date

import pytest

from nbp_kantor.ingestion.strategy import RateNotFoundError
from nbp_kantor.rates import fetch_rate_set, fetch_record, price_record


class _DummySource:
    """Serves mid rates from a ``{(code, day): mid}`` table; missing keys are 404s."""

    def __init__(self, table: dict[tuple[str, date], float] | None = None, *, default: float | None = None) -> None:
        self.table = table or {}
        self.default = default
        self.calls: list[tuple[str, date]] = []

    def fetch_mid(self, code: str, day: date) -> float:
        self.calls.append((code, day))
        if (code, day) in self.table:
            return self.table[(code, day)]
        if self.default is not None:
            return self.default
        raise RateNotFoundError(code, day)


class _FailingSource:
    def __init__(self, fail_on: str) -> None:
        self.fail_on = fail_on
        self.calls: list[str] = []

    def fetch_mid(self, code: str, day: date) -> float:
        self.calls.append(code)
        if code == self.fail_on:
            raise RuntimeError("NBP API responded with HTTP 500")
        return 4.0


def test_fetch_rate_set_prices_every_currency() -> None:
    source = _DummySource(default=4.1234)

    rate_set = fetch_rate_set(source, "2024-08-06")

    assert rate_set.codes == ["EUR", "USD", "CZK", "IDR", "BRL"]
    assert rate_set.requested_date == date(2024, 8, 6)
    assert rate_set.effective_date == date(2024, 8, 6)
    for record in rate_set.rates:
        assert record.mid == 4.1234
        assert record.rate_date == date(2024, 8, 6)
        if record.code in {"EUR", "USD"}:
            assert record.buy_rate == pytest.approx(4.0734, abs=1e-4)
            assert record.sell_rate == pytest.approx(4.1934, abs=1e-4)
        else:
            assert record.buy_rate is None
            assert record.sell_rate == pytest.approx(4.2734, abs=1e-4)


def test_default_window_checks_only_requested_day() -> None:
    source = _DummySource()

    rate_set = fetch_rate_set(source, date(2024, 8, 4), codes=("EUR", "USD"))

    assert rate_set.rates == []
    assert rate_set.effective_date == date(2024, 8, 4)
    assert source.calls == [("EUR", date(2024, 8, 4)), ("USD", date(2024, 8, 4))]


def test_each_currency_steps_back_independently() -> None:
    saturday = date(2024, 8, 3)
    source = _DummySource(
        {
            ("EUR", date(2024, 8, 2)): 4.30,
            ("USD", saturday): 3.95,
            ("CZK", date(2024, 8, 1)): 0.17,
        }
    )

    rate_set = fetch_rate_set(source, saturday, codes=("EUR", "USD", "CZK"), max_days_to_check=7)

    assert [(r.code, r.rate_date) for r in rate_set.rates] == [
        ("EUR", date(2024, 8, 2)),
        ("USD", saturday),
        ("CZK", date(2024, 8, 1)),
    ]
    # every currency restarts its window from the requested day
    assert source.calls[1] == ("EUR", date(2024, 8, 2))
    assert source.calls[2] == ("USD", saturday)
    assert source.calls[3] == ("CZK", saturday)
    assert rate_set.effective_date == date(2024, 8, 1)


def test_exhausted_window_omits_currency(caplog) -> None:
    source = _DummySource({("EUR", date(2024, 8, 2)): 4.30})

    with caplog.at_level("WARNING"):
        rate_set = fetch_rate_set(source, date(2024, 8, 4), codes=("EUR", "IDR"), max_days_to_check=3)

    assert rate_set.codes == ["EUR"]
    assert len([call for call in source.calls if call[0] == "IDR"]) == 3
    assert "No IDR rate found" in caplog.text


def test_non_not_found_errors_abort_whole_fetch() -> None:
    source = _FailingSource(fail_on="USD")

    with pytest.raises(RuntimeError, match="HTTP 500"):
        fetch_rate_set(source, "2024-08-06", max_days_to_check=5)

    assert source.calls == ["EUR", "USD"]


def test_window_must_be_positive() -> None:
    with pytest.raises(ValueError):
        fetch_rate_set(_DummySource(default=1.0), "2024-08-06", max_days_to_check=0)


def test_fetch_record_returns_none_when_nothing_published() -> None:
    assert fetch_record(_DummySource(), "BRL", date(2024, 12, 26), 2) is None


def test_price_record_serialises_for_frontend() -> None:
    record = price_record("CZK", 0.1712, date(2024, 8, 1))

    assert record.to_dict() == {
        "code": "CZK",
        "name": "Czech Koruna",
        "nbpRate": 0.1712,
        "buyRate": None,
        "sellRate": pytest.approx(0.3212),
        "date": "2024-08-01",
    }


def test_rate_set_to_dict_reports_requested_and_effective_dates() -> None:
    source = _DummySource({("EUR", date(2024, 8, 2)): 4.3})

    payload = fetch_rate_set(source, "2024-08-03", codes=("EUR",), max_days_to_check=2).to_dict()

    assert payload["requestedDate"] == "2024-08-03"
    assert payload["dataFromTheDay"] == "2024-08-02"
    assert payload["rates"][0]["code"] == "EUR"
