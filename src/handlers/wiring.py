"""
Process-level wiring shared by the HTTP handlers.

The record store is built lazily on first use and then injected into every
service, so warm invocations reuse one connection pool. Nothing here runs
at import time.
"""

from typing import Optional

from config.settings import Settings
from utils.logging_config import get_logger

logger = get_logger(__name__)

_settings: Optional[Settings] = None
_store = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_environment()
    return _settings


def get_store():
    """Lazy-load the record store for this process."""
    global _store
    if _store is None:
        from repositories.factory import build_record_store

        _store = build_record_store(get_settings())
    return _store


def reset() -> None:
    """Dispose of the store (shutdown, or between tests)."""
    global _settings, _store
    if _store is not None:
        _store.close()
        logger.info("Record store closed")
    _settings = None
    _store = None
