"""
Process-wide logging setup.

Modules log through `logging.getLogger(__name__)`; this only configures the
root logger.
"""

from __future__ import annotations

import logging

from .config import env_str

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def log_level() -> int:
    level = logging.getLevelName(env_str("LOG_LEVEL", "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging() -> None:
    # basicConfig is a no-op when a handler is already installed (e.g. uvicorn).
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(log_level())
