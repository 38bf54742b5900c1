"""Pytest configuration and fixtures for clubify-checkout tests."""

import json
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import httpx
import pytest

from clubify_checkout.config.settings import CacheBackend, ClubifySettings
from clubify_checkout.core.cache import CacheManager, MemoryAdapter
from clubify_checkout.core.events import EventDispatcher
from clubify_checkout.core.http import HttpClient
from clubify_checkout.core.metrics import MetricsCollector

BASE_URL = "https://api.test"

Handler = Callable[[httpx.Request], httpx.Response]
Route = Union[Handler, Tuple[int, Any]]


class FakeApi:
    """Scripted remote API served through ``httpx.MockTransport``.

    Routes are keyed by ``(METHOD, path)``. A route is either a
    ``(status, body)`` tuple or a callable receiving the request. Unknown
    routes answer 404.
    """

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Route] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        self.routes[(method.upper(), path)] = (status, body)

    def add_handler(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method.upper(), path)] = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not found"})
        if callable(route):
            return route(request)
        status, body = route
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def calls(self, method: Optional[str] = None, path: Optional[str] = None) -> List[httpx.Request]:
        return [
            request for request in self.requests
            if (method is None or request.method == method.upper())
            and (path is None or request.url.path == path)
        ]

    def count(self, method: str, path: str) -> int:
        return len(self.calls(method, path))

    def last_json(self, method: Optional[str] = None, path: Optional[str] = None) -> Any:
        request = self.calls(method, path)[-1]
        return json.loads(request.content) if request.content else None


@pytest.fixture
def settings():
    """Settings pointing at the fake API with an in-memory cache."""
    return ClubifySettings(
        _env_file=None,
        api_key="test-key",
        tenant_id="tenant-1",
        base_url=BASE_URL,
        cache_backend=CacheBackend.MEMORY,
    )


@pytest.fixture
def api():
    return FakeApi()


@pytest.fixture
def http_client(settings, api):
    return HttpClient(settings, transport=httpx.MockTransport(api.handle))


@pytest.fixture
def cache(settings):
    return CacheManager(MemoryAdapter(), namespace=settings.cache_namespace)


@pytest.fixture
def events():
    return EventDispatcher()


@pytest.fixture
def metrics():
    return MetricsCollector()


@pytest.fixture
def build_module(settings, http_client, cache, events, metrics):
    """Factory returning an initialized module wired to the fake API."""
    def build(module_class):
        module = module_class()
        module.set_dependencies(http_client, cache, events, metrics)
        module.initialize(settings)
        return module
    return build
