"""Infrastructure exceptions for the transport and cache layers."""

from typing import Any, Dict, Optional

from .base import ClubifyError


class HttpError(ClubifyError):
    """Raised for non-2xx responses and transport failures.

    ``status_code`` is None when no response was received.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        merged = dict(details or {})
        merged.setdefault("status_code", status_code)
        super().__init__(message, details=merged)
        self.status_code = status_code
        self.response_data = response_data

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_client_error(self) -> bool:
        return self.status_code is not None and 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        return self.status_code is not None and self.status_code >= 500


# Cache Errors
class CacheError(ClubifyError):
    """Base class for cache-related errors."""
    pass


class CacheConnectionError(CacheError):
    """Raised when cache connection fails."""
    pass


class CacheSerializationError(CacheError):
    """Raised when cache value serialization/deserialization fails."""
    pass
