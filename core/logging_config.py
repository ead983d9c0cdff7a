"""
Centralized logging configuration.

Modules keep using `logging.getLogger(__name__)`; entry points (scripts,
the service container) call `configure_logging()` once.
"""

from __future__ import annotations

import logging
import sys

from core import config

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_initialized = False


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once."""
    global _initialized
    if _initialized:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root = logging.getLogger()
    root.setLevel(level or config.LOG_LEVEL)
    root.addHandler(handler)
    _initialized = True
