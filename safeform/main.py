"""Application startup.

Call ``await initialize()`` once before building any screen; nothing is
configured at import time.
"""
from __future__ import annotations

from safeform.core.config import Settings, get_settings
from safeform.core.logging import configure_logging, get_logger

log = get_logger(__name__)

_active: Settings | None = None


async def initialize(settings: Settings | None = None) -> Settings:
    """Configure logging from settings and return them. Later calls are no-ops."""
    global _active
    if _active is not None:
        return _active

    settings = settings or get_settings()
    configure_logging(level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
    _active = settings
    log.info("startup", message="safeform initialized", log_level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
    return settings


def is_initialized() -> bool:
    return _active is not None
