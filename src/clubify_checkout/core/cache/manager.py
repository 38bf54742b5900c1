"""Namespaced, failure-tolerant cache used by repositories and services."""

import json
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from ...config.settings import CacheBackend as CacheBackendType
from ...config.settings import ClubifySettings
from ..exceptions import CacheError, CacheSerializationError
from .memory_adapter import MemoryAdapter
from .protocols import CacheBackend

logger = logging.getLogger(__name__)


class CacheManager:
    """JSON cache on top of a byte backend.

    Every key is prefixed with ``namespace`` so tenants never share entries.
    Backend failures are logged and degrade to a miss: the cache never fails
    a request.
    """

    def __init__(
        self,
        backend: Optional[CacheBackend] = None,
        namespace: str = "clubify_checkout:default",
        default_ttl: int = 3600,
        enabled: bool = True,
    ):
        self.backend = backend or MemoryAdapter()
        self.namespace = namespace
        self.default_ttl = default_ttl
        self.enabled = enabled
        self._initialized = False
        self._stats = {"hits": 0, "misses": 0, "sets": 0, "deletes": 0, "errors": 0}

    @classmethod
    def from_settings(cls, settings: ClubifySettings) -> "CacheManager":
        if settings.cache_backend == CacheBackendType.REDIS:
            from .redis_adapter import RedisAdapter
            backend: CacheBackend = RedisAdapter(settings.redis_url)
        else:
            backend = MemoryAdapter(max_size=settings.cache_max_entries)
        return cls(
            backend=backend,
            namespace=settings.cache_namespace,
            default_ttl=settings.cache_ttl_entity,
            enabled=settings.cache_enabled,
        )

    async def initialize(self) -> None:
        """Connect the backend once."""
        if self._initialized:
            return
        await self.backend.connect()
        self._initialized = True
        logger.info(f"Cache initialized for namespace {self.namespace}")

    async def shutdown(self) -> None:
        if not self._initialized:
            return
        try:
            await self.backend.disconnect()
        except CacheError as e:
            logger.error(f"Error during cache shutdown: {e}")
        finally:
            self._initialized = False

    def make_key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    async def get(self, key: str, default: Any = None) -> Any:
        if not self.enabled:
            return default
        try:
            await self.initialize()
            raw = await self.backend.get(self.make_key(key))
            if raw is None:
                self._stats["misses"] += 1
                return default
            self._stats["hits"] += 1
            return self._deserialize(raw)
        except CacheError as e:
            self._stats["errors"] += 1
            logger.warning(f"Cache get failed for {key}: {e}")
            return default

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        if not self.enabled:
            return False
        try:
            await self.initialize()
            effective_ttl = self.default_ttl if ttl is None else ttl
            await self.backend.set(self.make_key(key), self._serialize(value), effective_ttl)
            self._stats["sets"] += 1
            return True
        except CacheError as e:
            self._stats["errors"] += 1
            logger.warning(f"Cache set failed for {key}: {e}")
            return False

    async def delete(self, key: str) -> bool:
        if not self.enabled:
            return False
        try:
            await self.initialize()
            deleted = await self.backend.delete(self.make_key(key))
            self._stats["deletes"] += int(deleted)
            return deleted
        except CacheError as e:
            self._stats["errors"] += 1
            logger.warning(f"Cache delete failed for {key}: {e}")
            return False

    async def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching a glob pattern inside the namespace."""
        if not self.enabled:
            return 0
        try:
            await self.initialize()
            deleted = await self.backend.delete_pattern(self.make_key(pattern))
            self._stats["deletes"] += deleted
            return deleted
        except CacheError as e:
            self._stats["errors"] += 1
            logger.warning(f"Cache pattern delete failed for {pattern}: {e}")
            return 0

    async def exists(self, key: str) -> bool:
        return await self.get(key) is not None

    async def remember(self, key: str, ttl: Optional[int], loader: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached value or load, store and return it.

        ``None`` results are not cached.
        """
        cached = await self.get(key)
        if cached is not None:
            return cached
        value = await loader()
        if value is not None:
            await self.set(key, value, ttl)
        return value

    async def clear(self) -> int:
        """Remove every entry of this namespace."""
        return await self.delete_pattern("*")

    async def health_check(self) -> Dict[str, Any]:
        try:
            await self.initialize()
            return {"healthy": await self.backend.health_check(), "enabled": self.enabled}
        except CacheError as e:
            logger.error(f"Cache health check failed: {e}")
            return {"healthy": False, "enabled": self.enabled, "error": str(e)}

    def stats(self) -> Dict[str, int]:
        return dict(self._stats)

    @staticmethod
    def _serialize(value: Any) -> bytes:
        try:
            return json.dumps(value, default=str).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise CacheSerializationError(f"Failed to serialize cache value: {e}") from e

    @staticmethod
    def _deserialize(raw: bytes) -> Any:
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            raise CacheSerializationError(f"Failed to deserialize cache value: {e}") from e
