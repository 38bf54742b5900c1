"""Base exceptions for clubify-checkout.

Every exception raised by the SDK inherits from ClubifyError and carries an
error code and a details mapping for structured reporting.
"""

from typing import Any, Dict, Optional


class ClubifyError(Exception):
    """Base exception for all clubify-checkout errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


def create_error_response(exception: ClubifyError) -> Dict[str, Any]:
    """Create a structured error payload from an exception.

    Args:
        exception: The clubify-checkout exception

    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
