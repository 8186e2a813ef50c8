"""Logging helpers for mirror square search.

Found squares are logged at INFO as they are discovered, search statistics
at INFO once a run ends, and per-node detail at DEBUG.
"""

from __future__ import annotations

import logging
from typing import Optional, TextIO

ROOT_LOGGER = "mirrorsquare"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"


def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> logging.Handler:
    """Install a single stream handler on the root logger and return it.

    ``stream`` defaults to stderr, which keeps stdout free for the squares
    printed by the CLI.
    """

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
    return handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger below ``mirrorsquare``; ``__main__``-style names are nested too."""

    if not logging.getLogger().handlers:
        configure_logging()
    if not name:
        return logging.getLogger(ROOT_LOGGER)
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def parse_level(name: str, default: int = logging.INFO) -> int:
    """Map a level name such as ``"debug"`` to its numeric value."""

    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default
