"""Cache backends and the namespaced cache manager."""

from .manager import CacheManager
from .memory_adapter import MemoryAdapter
from .protocols import CacheBackend

__all__ = ["CacheBackend", "CacheManager", "MemoryAdapter"]
