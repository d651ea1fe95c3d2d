"""Central logging configuration utilities for gfxpack_updater.

Progress meant for the user is printed by the CLI; logging carries the
diagnostic detail and stays quiet (WARNING) unless asked otherwise.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

_LEVEL_MAP = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}

DEFAULT_LEVEL = "WARNING"


def configure_logging(level: str | int | None = None, *, force: bool = False) -> None:
    """Configure root logger.

    Order of precedence for level:
    1. Explicit `level` argument if given
    2. Environment variable `GFXPACK_LOG_LEVEL`
    3. Fallback to `WARNING`
    """
    if level is None:
        level = os.environ.get("GFXPACK_LOG_LEVEL") or DEFAULT_LEVEL

    invalid_level = None
    if isinstance(level, str):
        name = level.strip().upper()
        if name not in _LEVEL_MAP:
            invalid_level = level
            name = DEFAULT_LEVEL
        level = _LEVEL_MAP[name]

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=force,
    )
    if invalid_level is not None:
        logging.getLogger("gfxpack_updater").warning(
            "Invalid log level %r; falling back to %s. Valid values: %s.",
            invalid_level,
            DEFAULT_LEVEL,
            ", ".join(sorted(_LEVEL_MAP)),
        )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a project logger, configuring logging lazily on first access."""
    logger = logging.getLogger(name or "gfxpack_updater")
    if not logging.getLogger().handlers:  # pragma: no cover
        configure_logging()
    return logger


__all__ = ["configure_logging", "get_logger"]
