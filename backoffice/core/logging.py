"""Logging setup for the service process."""

from __future__ import annotations

import logging
import logging.config

from backoffice.core.config import get_settings

_configured = False


def configure_logging(level: str | None = None) -> None:
    """Install a console handler for the ``backoffice`` logger tree."""
    global _configured
    if _configured:
        return

    level = (level or get_settings().logging.level).upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {
                    "format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "console",
                },
            },
            "loggers": {
                "backoffice": {
                    "handlers": ["console"],
                    "level": level,
                    "propagate": False,
                },
            },
        }
    )
    _configured = True


__all__ = ["configure_logging"]
