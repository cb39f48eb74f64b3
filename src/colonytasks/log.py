"""Logging setup for the colonytasks package.

Modules log through ``logging.getLogger(__name__)``; this only attaches a
single stream handler to the package logger.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_HANDLER_NAME = "colonytasks"


def setup_logging(level: str | int = logging.INFO) -> logging.Logger:
    """Configure the package logger. Safe to call more than once.

    Args:
        level: Level name ("INFO") or number.

    Returns:
        The configured "colonytasks" logger.
    """
    logger = logging.getLogger("colonytasks")
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if not any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
