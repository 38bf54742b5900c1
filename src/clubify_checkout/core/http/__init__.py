"""HTTP transport."""

from .client import HttpClient, HttpResponse

__all__ = ["HttpClient", "HttpResponse"]
