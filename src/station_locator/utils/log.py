"""Logging setup for the station locator.

Every module logs through ``logging.getLogger(__name__)``; those loggers are
children of the ``station_locator`` logger configured here, so one stdout
handler covers the API, the ingestion run and the CLI.

Usage:
    from station_locator.utils.log import configure_logging
    configure_logging("INFO")
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "station_locator"

logger = logging.getLogger(LOGGER_NAME)


def configure_logging(level: str | int = logging.INFO) -> logging.Logger:
    # Only attach a handler once, the app factory and the CLI may both call this.
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger
