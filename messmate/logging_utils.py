"""Mini README: Application-wide logging helpers for MessMate.

Structure:
    * configure_root_logger - attaches the shared handler, optionally at a level.
    * set_level - changes the root level without touching handlers.
    * get_logger - module loggers; installs the handler on first use only.

Usage:
    Modules take ``LOGGER = get_logger(__name__)`` at import time. Entry
    points (the CLI and ``create_application``) call
    ``configure_root_logger(settings.log_level)``; later ``get_logger`` calls
    never reset that level.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"


def set_level(level: Union[int, str]) -> None:
    """Set the root logging level (names such as ``"debug"`` are accepted)."""

    if isinstance(level, str):
        level = level.strip().upper()
    logging.getLogger().setLevel(level)


def _install_handler() -> None:
    global _LOGGER_INITIALISED
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def configure_root_logger(level: Optional[Union[int, str]] = None) -> None:
    """Install the shared handler once and apply ``level`` when given."""

    _install_handler()
    if level is not None:
        set_level(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger, leaving any configured level alone."""

    _install_handler()
    return logging.getLogger(name)
