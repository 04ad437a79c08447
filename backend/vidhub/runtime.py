"""Process-wide runtime state shared by request handlers."""

from __future__ import annotations

import logging

from vidhub.auth.service import startup_schema
from vidhub.core.config import Settings
from vidhub.core.config import load_settings
from vidhub.core.logging_setup import configure_logging
from vidhub.core.tokens import TokenCodec

logger = logging.getLogger(__name__)

settings: Settings | None = None
codec: TokenCodec | None = None


def startup(explicit_settings: Settings | None = None) -> None:
    """Load settings once, build the token codec and ensure the schema exists."""
    global settings, codec
    settings = explicit_settings or load_settings()
    configure_logging(settings)
    startup_schema(settings)
    codec = TokenCodec.from_settings(settings)
    logger.info("vidhub started env=%s db=%s", settings.vidhub_app_env, settings.vidhub_sqlite_path)


def get_settings() -> Settings:
    if settings is None:
        raise RuntimeError("runtime.startup() has not been called")
    return settings


def get_codec() -> TokenCodec:
    if codec is None:
        raise RuntimeError("runtime.startup() has not been called")
    return codec


__all__ = [
    "codec",
    "get_codec",
    "get_settings",
    "settings",
    "startup",
]
