"""Logging setup for the ``app`` package.

Modules only ever call ``logging.getLogger(__name__)``. The application
factory calls :func:`configure_logging` once so that every ``app.*`` logger
shares a single stream handler.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

_PKG_LOGGER_NAME = "app"
_CONFIGURED = False


def _parse_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    value = level.strip().upper()
    if value.isdigit():
        return int(value)
    numeric = getattr(logging, value, None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO


def configure_logging(level: int | str = logging.INFO, *, fmt: str | None = None, stream: IO[str] = sys.stderr) -> None:
    """Attach one ``StreamHandler`` to the package logger, once per process."""

    global _CONFIGURED
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    logger.setLevel(_parse_level(level))
    if _CONFIGURED:
        return

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt or "%(asctime)s %(name)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True
