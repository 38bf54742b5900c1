"""In-process cache backend with TTL expiry and LRU eviction."""

import asyncio
import fnmatch
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class MemoryCacheEntry:
    """Memory cache entry with expiry metadata."""
    value: bytes
    expires_at: Optional[float] = None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class MemoryAdapter:
    """Memory cache backend.

    Keys are kept in access order so the least recently used entry is evicted
    once ``max_size`` is reached. Expired entries are dropped lazily on access.
    """

    def __init__(self, max_size: int = 1000, clock: Callable[[], float] = time.time):
        self.max_size = max_size
        self._clock = clock
        self._store: "OrderedDict[str, MemoryCacheEntry]" = OrderedDict()
        self._lock = asyncio.Lock()

    async def connect(self) -> None:
        logger.debug(f"Memory cache initialized with max_size={self.max_size}")

    async def disconnect(self) -> None:
        async with self._lock:
            self._store.clear()

    async def get(self, key: str) -> Optional[bytes]:
        async with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._store[key]
                return None
            self._store.move_to_end(key)
            return entry.value

    async def set(self, key: str, value: bytes, ttl: Optional[int] = None) -> None:
        async with self._lock:
            expires_at = self._clock() + ttl if ttl and ttl > 0 else None
            self._store.pop(key, None)
            while len(self._store) >= self.max_size:
                evicted, _ = self._store.popitem(last=False)
                logger.debug(f"Evicted cache key {evicted}")
            self._store[key] = MemoryCacheEntry(value=value, expires_at=expires_at)

    async def delete(self, key: str) -> bool:
        async with self._lock:
            return self._store.pop(key, None) is not None

    async def delete_pattern(self, pattern: str) -> int:
        async with self._lock:
            matched = [key for key in self._store if fnmatch.fnmatchcase(key, pattern)]
            for key in matched:
                del self._store[key]
            return len(matched)

    async def exists(self, key: str) -> bool:
        return await self.get(key) is not None

    async def keys(self, pattern: str = "*") -> List[str]:
        async with self._lock:
            self._cleanup_expired()
            return [key for key in self._store if fnmatch.fnmatchcase(key, pattern)]

    async def size(self) -> int:
        async with self._lock:
            self._cleanup_expired()
            return len(self._store)

    async def clear(self) -> None:
        async with self._lock:
            self._store.clear()

    async def health_check(self) -> bool:
        return True

    def _cleanup_expired(self) -> None:
        now = self._clock()
        for key in [key for key, entry in self._store.items() if entry.is_expired(now)]:
            del self._store[key]
