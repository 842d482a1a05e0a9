"""Logging utilities for the nbp_kantor package."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL_ENV = "NBP_LOG_LEVEL"

_configured = False


def get_logger(name: str = "nbp_kantor") -> logging.Logger:
    """Return ``name``'s logger, configuring the root handler once.

    The level comes from ``NBP_LOG_LEVEL`` (``INFO`` when unset or unknown).
    """
    global _configured
    if not _configured:
        level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
        logging.basicConfig(
            level=getattr(logging, level_name, logging.INFO),
            format=LOG_FORMAT,
        )
        _configured = True
    return logging.getLogger(name)


__all__ = ["LOG_FORMAT", "LOG_LEVEL_ENV", "get_logger"]
