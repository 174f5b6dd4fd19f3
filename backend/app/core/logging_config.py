"""
Logging setup for the back office API.

Call setup_logging() once at startup, then get a module logger with
get_logger(__name__).
"""
from __future__ import annotations

import logging
import sys

from backend.app.core.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_configured = False


def setup_logging(level: str | None = None) -> None:
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("backend")
    root.setLevel((level or LOG_LEVEL).upper())
    root.addHandler(handler)
    root.propagate = False

    # SQL echo stays off unless explicitly asked for
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
