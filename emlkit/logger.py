"""
Unified Logging Module
======================

One ``emlkit`` logger tree shared by the engine, the batch layer, the CLI and
the API. The root level comes from ``EMLKIT_LOG_LEVEL`` on first use.

Usage:
    from emlkit.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Rewrote %d header(s) in %s", count, filename)
    logger.debug("No boundary in %r, keeping leaf", content_type)
"""

import logging
import sys
from typing import Optional, Union

from emlkit.config import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "emlkit"

_root_configured = False


def _resolve_level(level: Union[int, str]) -> int:
    """``"debug"`` / ``"DEBUG"`` / ``10`` -> ``10``."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def _configure_root_logger() -> None:
    """Attach the stdout handler to the ``emlkit`` logger, once."""
    global _root_configured
    if _root_configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(_resolve_level(get_settings().LOG_LEVEL))
    root_logger.addHandler(handler)
    root_logger.propagate = False

    _root_configured = True


def get_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Return the logger for *name* (normally ``__name__``).

    Args:
        name: dotted logger name; names outside ``emlkit.*`` get no handler
        level: optional override for this logger only, int or level name
    """
    _configure_root_logger()
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(_resolve_level(level))
    return logger


def set_level(level: Union[int, str], logger_name: Optional[str] = None) -> None:
    """
    Change the level of *logger_name*, or of the whole ``emlkit`` tree.

    Example:
        set_level("DEBUG")                    # every emlkit module
        set_level(logging.DEBUG, "emlkit.rewrite")
    """
    _configure_root_logger()
    logging.getLogger(logger_name or ROOT_LOGGER_NAME).setLevel(_resolve_level(level))
