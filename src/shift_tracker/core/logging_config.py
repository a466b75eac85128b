from __future__ import annotations

import logging
import logging.config

from .constants import DEFAULT_LOG_DATEFMT, DEFAULT_LOG_FORMAT


def setup_logging(level: str = "INFO") -> None:
    """Install a console handler for the ``shift_tracker`` loggers."""

    level = (level or "INFO").upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": DEFAULT_LOG_FORMAT,
                    "datefmt": DEFAULT_LOG_DATEFMT,
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                "shift_tracker": {
                    "handlers": ["console"],
                    "level": level,
                    "propagate": False,
                },
            },
        }
    )
