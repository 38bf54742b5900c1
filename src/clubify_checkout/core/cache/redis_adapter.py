"""Redis cache backend built on ``redis.asyncio``."""

import logging
from typing import List, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from ..exceptions import CacheConnectionError, CacheError

logger = logging.getLogger(__name__)


class RedisAdapter:
    """Redis cache backend.

    Pattern deletion walks the keyspace with SCAN so large databases are not
    blocked the way KEYS would block them.
    """

    def __init__(self, url: str = "redis://localhost:6379/0", client: Optional[Redis] = None, scan_count: int = 500):
        self.url = url
        self.scan_count = scan_count
        self.redis_client: Optional[Redis] = client
        self._connected = client is not None

    async def connect(self) -> None:
        if self._connected:
            return
        try:
            self.redis_client = Redis.from_url(self.url)
            await self.redis_client.ping()
            self._connected = True
            logger.info("Connected to Redis cache")
        except (RedisError, OSError) as e:
            self.redis_client = None
            raise CacheConnectionError(f"Failed to connect to Redis: {e}") from e

    async def disconnect(self) -> None:
        if self.redis_client:
            try:
                await self.redis_client.aclose()
            except RedisError as e:
                logger.error(f"Error closing Redis connection: {e}")
            finally:
                self.redis_client = None
                self._connected = False

    async def get(self, key: str) -> Optional[bytes]:
        client = await self._client()
        try:
            return await client.get(key)
        except RedisError as e:
            raise CacheError(f"Redis get error for key {key}: {e}") from e

    async def set(self, key: str, value: bytes, ttl: Optional[int] = None) -> None:
        client = await self._client()
        try:
            await client.set(key, value, ex=ttl if ttl and ttl > 0 else None)
        except RedisError as e:
            raise CacheError(f"Redis set error for key {key}: {e}") from e

    async def delete(self, key: str) -> bool:
        client = await self._client()
        try:
            return await client.delete(key) > 0
        except RedisError as e:
            raise CacheError(f"Redis delete error for key {key}: {e}") from e

    async def delete_pattern(self, pattern: str) -> int:
        client = await self._client()
        deleted = 0
        batch: List = []
        try:
            async for key in client.scan_iter(match=pattern, count=self.scan_count):
                batch.append(key)
                if len(batch) >= self.scan_count:
                    deleted += await client.delete(*batch)
                    batch = []
            if batch:
                deleted += await client.delete(*batch)
        except RedisError as e:
            raise CacheError(f"Redis delete pattern error for {pattern}: {e}") from e
        return deleted

    async def exists(self, key: str) -> bool:
        client = await self._client()
        try:
            return await client.exists(key) > 0
        except RedisError as e:
            raise CacheError(f"Redis exists error for key {key}: {e}") from e

    async def keys(self, pattern: str = "*") -> List[str]:
        client = await self._client()
        try:
            found = [key async for key in client.scan_iter(match=pattern, count=self.scan_count)]
        except RedisError as e:
            raise CacheError(f"Redis scan error for {pattern}: {e}") from e
        return [key.decode() if isinstance(key, bytes) else key for key in found]

    async def clear(self) -> None:
        client = await self._client()
        try:
            await client.flushdb()
        except RedisError as e:
            raise CacheError(f"Redis flush error: {e}") from e

    async def health_check(self) -> bool:
        try:
            client = await self._client()
            return bool(await client.ping())
        except (CacheError, RedisError) as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    async def _client(self) -> Redis:
        if not self._connected or self.redis_client is None:
            await self.connect()
        return self.redis_client
