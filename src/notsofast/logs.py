"""Logging setup for applications embedding notsofast."""

from __future__ import annotations

import logging

from notsofast.settings import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Apply ``settings.log_level`` to the root logger.

    The library itself only creates named loggers under ``notsofast``; it
    never installs handlers on import.
    """
    if settings is None:
        settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    logging.getLogger("notsofast").setLevel(settings.log_level.upper())
