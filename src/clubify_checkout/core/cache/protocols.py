"""Cache backend protocol."""

from typing import List, Optional, Protocol, runtime_checkable


@runtime_checkable
class CacheBackend(Protocol):
    """Byte-oriented key/value store with TTL and glob deletion."""

    async def connect(self) -> None:
        ...

    async def disconnect(self) -> None:
        ...

    async def get(self, key: str) -> Optional[bytes]:
        ...

    async def set(self, key: str, value: bytes, ttl: Optional[int] = None) -> None:
        ...

    async def delete(self, key: str) -> bool:
        ...

    async def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching a glob pattern and return the count."""
        ...

    async def exists(self, key: str) -> bool:
        ...

    async def keys(self, pattern: str = "*") -> List[str]:
        ...

    async def clear(self) -> None:
        ...

    async def health_check(self) -> bool:
        ...
