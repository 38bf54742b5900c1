"""Base class for domain services."""

import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional

from ..config.settings import ClubifySettings
from .cache import CacheManager
from .events import EventDispatcher
from .metrics import MetricsCollector, OperationContext
from .slug import SlugRules, resolve_unique_slug

logger = logging.getLogger(__name__)


class BaseService:
    """Shared plumbing for services: metrics envelope, cache and events."""

    service_name: str = "base"
    version: str = "1.0.0"

    def __init__(
        self,
        settings: ClubifySettings,
        cache: CacheManager,
        events: EventDispatcher,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.settings = settings
        self.cache = cache
        self.events = events
        self.metrics = metrics or MetricsCollector()
        self.metrics_prefix = self.service_name

    async def execute_with_metrics(self, operation: str, func: Callable[..., Awaitable[Any]], *args, **kwargs) -> Any:
        """Run ``func`` recording duration and failures under ``{service}.{operation}``."""
        async with OperationContext(f"{self.service_name}.{operation}", self.metrics):
            return await func(*args, **kwargs)

    def get_cache_key(self, key: str) -> str:
        return f"{self.service_name}:{key}"

    async def get_cached_or_execute(self, key: str, loader: Callable[[], Awaitable[Any]], ttl: Optional[int] = None) -> Any:
        return await self.cache.remember(self.get_cache_key(key), ttl, loader)

    async def dispatch(self, event_name: str, payload: Optional[Dict[str, Any]] = None) -> None:
        """Emit a service-level event stamped with the service name and time."""
        await self.events.emit(event_name, {
            **(payload or {}),
            "service": self.service_name,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })

    async def unique_slug(self, source: str, exists: Callable[[str], Awaitable[bool]]) -> str:
        """Slugify ``source`` and suffix it until ``exists`` reports it free."""
        return await resolve_unique_slug(
            SlugRules.generate(source),
            exists,
            max_attempts=self.settings.slug_max_attempts,
        )

    def get_metrics(self) -> Dict[str, Dict[str, Any]]:
        prefix = f"{self.service_name}."
        return {name: stats for name, stats in self.metrics.snapshot().items() if name.startswith(prefix)}


class RepositoryService(BaseService):
    """Service backed by a single repository."""

    def __init__(
        self,
        repository: Any,
        settings: ClubifySettings,
        cache: CacheManager,
        events: EventDispatcher,
        metrics: Optional[MetricsCollector] = None,
    ):
        super().__init__(settings, cache, events, metrics)
        self.repository = repository
