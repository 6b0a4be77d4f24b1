"""Logging setup for scatters.

Modules log through ``get_logger(__name__)`` and never configure handlers.
Only entry points (the CLI, scripts) call ``configure_logging``, which attaches
a stderr handler to the ``scatters`` logger. The root logger is left alone, so
an embedding application keeps control of its own logging.

The default level comes from the ``SCATTERS_LOG_LEVEL`` environment variable
(``INFO`` when unset).
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

PACKAGE_LOGGER = "scatters"
LOG_LEVEL_ENV = "SCATTERS_LOG_LEVEL"

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: Optional[Union[str, int]]) -> int:
    """Level from an int, a level name, or the environment; unknown names give INFO."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def _has_stderr_handler(logger: logging.Logger) -> bool:
    return any(
        isinstance(h, logging.StreamHandler) and h.stream is sys.stderr
        for h in logger.handlers
    )


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """Send ``scatters`` log records to stderr.

    Args:
        level: Level name or number. None reads SCATTERS_LOG_LEVEL.
        fmt: Record format; DEFAULT_FMT if None.
        datefmt: Timestamp format; DEFAULT_DATEFMT if None.
        force: Drop existing handlers first. Without it, a second call only
            updates the level when a stderr handler is already attached.
    """
    resolved = _resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(resolved)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    elif _has_stderr_handler(logger):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT))
    logger.addHandler(handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for ``name``; the package logger when None."""
    return logging.getLogger(name or PACKAGE_LOGGER)
