# SPDX-License-Identifier: MIT
"""Logging setup."""

import sys
from contextlib import suppress

from loguru import logger

from .config import LoggingConfig

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "{name}:{line} - <level>{message}</level>"
)

_sink_ids: list[int] = []


def configure_logging(config: LoggingConfig) -> None:
    """Install the server's log sinks, replacing any installed earlier.

    Sinks added by other code (test capture handlers, for instance) are left
    in place.
    """
    # loguru's default stderr sink
    with suppress(ValueError):
        logger.remove(0)

    while _sink_ids:
        with suppress(ValueError):
            logger.remove(_sink_ids.pop())

    _sink_ids.append(logger.add(sys.stderr, level=config.level, format=LOG_FORMAT))
    if config.file:
        _sink_ids.append(
            logger.add(
                config.file,
                level=config.level,
                rotation=config.rotation,
                retention=config.retention,
            )
        )
