"""Configuration for clubify-checkout."""

from .settings import (
    CacheBackend,
    ClubifySettings,
    ENVIRONMENT_URLS,
    Environment,
    get_settings,
)
from .logging_config import LoggingConfig, get_logger, setup_logging

__all__ = [
    "CacheBackend",
    "ClubifySettings",
    "ENVIRONMENT_URLS",
    "Environment",
    "get_settings",
    "LoggingConfig",
    "get_logger",
    "setup_logging",
]
