"""CLI entry point for running the kantor web application."""

from __future__ import annotations

from nbp_kantor.cli import serve_main

if __name__ == "__main__":  # pragma: no cover - thin wrapper
    serve_main()
