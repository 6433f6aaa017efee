"""
Logging configuration helpers.
Every entrypoint (dashboard and report) calls `configure_logging()` once before doing any work.
The level comes from `LOG_LEVEL`; modules only ask for named loggers.
"""

from __future__ import annotations

import logging

from dayuse_pricing.common.settings import get_settings

_LOGGING_CONFIGURED = False


def configure_logging() -> None:
    """Configure process-wide logging from environment settings."""

    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    settings = get_settings()
    level_name = settings.LOG_LEVEL.upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    _LOGGING_CONFIGURED = True
