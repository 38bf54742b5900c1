"""Async HTTP transport for the Clubify Checkout REST API."""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import httpx

from ...config.settings import ClubifySettings
from ..exceptions import HttpError

logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    """Decoded response of a successful request."""
    status_code: int
    data: Any = None
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def is_successful(self) -> bool:
        return 200 <= self.status_code < 300


class HttpClient:
    """Thin wrapper over ``httpx.AsyncClient``.

    Adds the tenant headers to every request, decodes JSON bodies and raises
    :class:`HttpError` for every non-2xx status so callers never inspect raw
    failures.
    """

    def __init__(
        self,
        settings: ClubifySettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings
        self._client = client or httpx.AsyncClient(
            base_url=settings.api_base_url,
            headers=settings.default_headers(),
            timeout=httpx.Timeout(settings.timeout, connect=settings.connect_timeout),
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    async def request(
        self,
        method: str,
        uri: str,
        json_body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> HttpResponse:
        """Send a request and return the decoded response.

        Raises:
            HttpError: on a non-2xx status, an undecodable body or a network failure
        """
        method = method.upper()
        logger.debug(f"HTTP {method} {uri}")

        try:
            response = await self._client.request(
                method,
                uri,
                json=json_body,
                params=_clean_params(params),
                headers=dict(headers) if headers else None,
            )
        except httpx.TimeoutException as e:
            logger.error(f"HTTP {method} {uri} timed out: {e}")
            raise HttpError(f"Request timed out: {method} {uri}", details={"error_type": "timeout"}) from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP {method} {uri} failed: {e}")
            raise HttpError(f"Request failed: {method} {uri}: {e}", details={"error_type": type(e).__name__}) from e

        data = _decode_body(response, method, uri)

        if not 200 <= response.status_code < 300:
            message = _error_message(data) or f"HTTP {response.status_code} for {method} {uri}"
            logger.warning(f"HTTP {method} {uri} returned {response.status_code}")
            raise HttpError(message, status_code=response.status_code, response_data=data)

        return HttpResponse(
            status_code=response.status_code,
            data=data,
            headers=dict(response.headers),
        )

    async def get(self, uri: str, params: Optional[Mapping[str, Any]] = None, **kwargs) -> HttpResponse:
        return await self.request("GET", uri, params=params, **kwargs)

    async def post(self, uri: str, json_body: Any = None, **kwargs) -> HttpResponse:
        return await self.request("POST", uri, json_body=json_body, **kwargs)

    async def put(self, uri: str, json_body: Any = None, **kwargs) -> HttpResponse:
        return await self.request("PUT", uri, json_body=json_body, **kwargs)

    async def patch(self, uri: str, json_body: Any = None, **kwargs) -> HttpResponse:
        return await self.request("PATCH", uri, json_body=json_body, **kwargs)

    async def delete(self, uri: str, **kwargs) -> HttpResponse:
        return await self.request("DELETE", uri, **kwargs)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def _clean_params(params: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    if not params:
        return None
    cleaned = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            value = ",".join(str(item) for item in value)
        cleaned[key] = value
    return cleaned


def _decode_body(response: httpx.Response, method: str, uri: str) -> Any:
    if response.status_code == 204 or not response.content:
        return None
    try:
        return response.json()
    except (json.JSONDecodeError, ValueError) as e:
        raise HttpError(
            f"Invalid JSON in response to {method} {uri}",
            status_code=response.status_code,
            response_data=response.text,
        ) from e


def _error_message(data: Any) -> Optional[str]:
    if isinstance(data, dict):
        for key in ("message", "error", "detail"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
    return None
