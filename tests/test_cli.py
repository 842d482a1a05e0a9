from __future__ import annotations

import json
import runpy
from datetime import date

import pytest

from nbp_kantor import NbpKantor
from nbp_kantor import cli as cli_module
from nbp_kantor.config import Settings


class _DummySource:
    def fetch_mid(self, code: str, day: date) -> float:
        return 4.1234


def _patch_kantor(monkeypatch) -> None:
    monkeypatch.setattr(
        cli_module,
        "NbpKantor",
        lambda settings: NbpKantor(settings, source=_DummySource()),
    )


def test_parse_fetch_args() -> None:
    args = cli_module.parse_fetch_args(
        ["--date", "2024-08-01", "--max-days", "7", "--currency", "EUR", "--currency", "USD"]
    )

    assert args.day == "2024-08-01"
    assert args.max_days == 7
    assert args.codes == ["EUR", "USD"]


def test_parse_fetch_args_rejects_bad_date() -> None:
    with pytest.raises(SystemExit):
        cli_module.parse_fetch_args(["--date", "2024-02-30"])


def test_parse_fetch_args_normalises_currency() -> None:
    assert cli_module.parse_fetch_args(["--currency", " eur "]).codes == ["EUR"]


@pytest.mark.parametrize(
    "argv",
    [
        ["--currency", "gbp"],
        ["--currency", ""],
        ["--max-days", "0"],
        ["--max-days", "-3"],
        ["--max-days", "week"],
    ],
)
def test_parse_fetch_args_rejects_bad_options(argv: list[str]) -> None:
    with pytest.raises(SystemExit):
        cli_module.parse_fetch_args(argv)


def test_fetch_main_prints_rate_set(monkeypatch, capsys) -> None:
    monkeypatch.setattr(Settings, "from_env", classmethod(lambda cls, environ=None: cls()))
    _patch_kantor(monkeypatch)

    assert cli_module.fetch_main(["--date", "2024-08-01", "--currency", "EUR"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert payload["requestedDate"] == "2024-08-01"
    assert payload["rates"][0]["code"] == "EUR"
    assert payload["rates"][0]["buyRate"] == pytest.approx(4.0734)


def test_parse_serve_args_defaults() -> None:
    args = cli_module.parse_serve_args([])

    assert (args.host, args.port, args.reload) == ("127.0.0.1", 8000, False)


def test_serve_main_runs_uvicorn(monkeypatch) -> None:
    import uvicorn

    calls: list[tuple[str, dict]] = []
    monkeypatch.setattr(uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs)))

    cli_module.serve_main(["--port", "9001"])

    assert calls == [
        (
            "nbp_kantor.web.app:create_app",
            {"factory": True, "host": "127.0.0.1", "port": 9001, "reload": False},
        )
    ]


def test_web_app_import_does_not_read_environment(monkeypatch) -> None:
    import importlib

    from nbp_kantor.web import app as app_module

    monkeypatch.setenv("NBP_TIMEOUT", "soon")

    reloaded = importlib.reload(app_module)

    assert callable(reloaded.create_app)
    assert not hasattr(reloaded, "app")


def test_fetch_rates_script_invokes_main(monkeypatch) -> None:
    called = {"value": False}

    def _fake_main() -> int:
        called["value"] = True
        return 0

    monkeypatch.setattr(cli_module, "fetch_main", _fake_main)

    with pytest.raises(SystemExit) as excinfo:
        runpy.run_module("nbp_kantor.scripts.fetch_rates", run_name="__main__")

    assert excinfo.value.code == 0
    assert called["value"] is True


def test_serve_script_invokes_main(monkeypatch) -> None:
    called = {"value": False}

    def _fake_main() -> None:
        called["value"] = True

    monkeypatch.setattr(cli_module, "serve_main", _fake_main)

    runpy.run_module("nbp_kantor.scripts.serve", run_name="__main__")

    assert called["value"] is True
