"""CLI entry point for printing kantor rates."""

from __future__ import annotations

import sys

from nbp_kantor.cli import fetch_main

if __name__ == "__main__":  # pragma: no cover - thin wrapper
    sys.exit(fetch_main())
