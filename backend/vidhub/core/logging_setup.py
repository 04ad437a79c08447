"""Logging setup for the vidhub package."""

from __future__ import annotations

import logging

from vidhub.core.config import Settings

LOGGER_NAME = "vidhub"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> logging.Logger:
    """Attach one stream handler to the package logger; safe to call repeatedly."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.vidhub_log_level.upper())
    if not any(getattr(handler, "_vidhub", False) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        handler._vidhub = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
