"""Logging setup for the cache package.

Modules log through ``logging.getLogger(__name__)``; nothing is printed
until an application either configures logging itself or calls
``configure_logging``.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Union

from lazycache.config import LOG_LEVEL

LOGGER_NAME = "lazycache"
HANDLER_NAME = "lazycache.stream"

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    if level is None:
        level = LOG_LEVEL
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    # Only one handler, however often this is called
    if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)

    return logger
