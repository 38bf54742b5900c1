"""Exception hierarchy for clubify-checkout."""

from .base import ClubifyError, create_error_response
from .domain import (
    ConfigurationError,
    ConflictError,
    ModuleNotInitializedError,
    SlugGenerationError,
    ValidationError,
)
from .infrastructure import (
    CacheConnectionError,
    CacheError,
    CacheSerializationError,
    HttpError,
)

__all__ = [
    "ClubifyError",
    "create_error_response",
    "ConfigurationError",
    "ConflictError",
    "ModuleNotInitializedError",
    "SlugGenerationError",
    "ValidationError",
    "CacheConnectionError",
    "CacheError",
    "CacheSerializationError",
    "HttpError",
]
