"""Domain exceptions raised before or around remote calls."""

from typing import Any, Dict, List, Optional

from .base import ClubifyError


class ValidationError(ClubifyError):
    """Raised when a payload fails its rule map.

    ``errors`` maps each failing field to its messages.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[Dict[str, List[str]]] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.errors = errors or {}
        merged = dict(details or {})
        if self.errors:
            merged.setdefault("errors", self.errors)
        super().__init__(message, details=merged)


class ConflictError(ClubifyError):
    """Raised when a resource with the same identity already exists."""
    pass


class SlugGenerationError(ClubifyError):
    """Raised when no free slug is found within the attempt limit."""
    pass


class ConfigurationError(ClubifyError):
    """Raised when the SDK is misconfigured."""
    pass


class ModuleNotInitializedError(ConfigurationError):
    """Raised when a module is used before initialize()."""
    pass
