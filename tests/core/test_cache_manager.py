"""Tests for the namespaced cache manager."""

from unittest.mock import AsyncMock

import pytest

from clubify_checkout.config.settings import CacheBackend, ClubifySettings
from clubify_checkout.core.cache import CacheManager, MemoryAdapter
from clubify_checkout.core.cache.redis_adapter import RedisAdapter
from clubify_checkout.core.exceptions import CacheError


class TestCacheManager:

    @pytest.fixture
    def backend(self):
        return MemoryAdapter()

    @pytest.fixture
    def manager(self, backend):
        return CacheManager(backend, namespace="clubify_checkout:tenant-1", default_ttl=60)

    @pytest.mark.asyncio
    async def test_values_round_trip_as_json(self, manager):
        await manager.set("offer:1", {"id": "1", "name": "Course"})

        assert await manager.get("offer:1") == {"id": "1", "name": "Course"}

    @pytest.mark.asyncio
    async def test_keys_are_namespaced(self, manager, backend):
        await manager.set("offer:1", {"id": "1"})

        assert await backend.keys() == ["clubify_checkout:tenant-1:offer:1"]

    @pytest.mark.asyncio
    async def test_tenants_do_not_share_entries(self, backend):
        first = CacheManager(backend, namespace="clubify_checkout:tenant-1")
        second = CacheManager(backend, namespace="clubify_checkout:tenant-2")

        await first.set("offer:1", {"id": "1"})

        assert await second.get("offer:1") is None

    @pytest.mark.asyncio
    async def test_remember_loads_once(self, manager):
        loader = AsyncMock(return_value={"id": "1"})

        first = await manager.remember("offer:1", 60, loader)
        second = await manager.remember("offer:1", 60, loader)

        assert first == second == {"id": "1"}
        loader.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_remember_does_not_cache_none(self, manager):
        loader = AsyncMock(return_value=None)

        await manager.remember("offer:missing", 60, loader)
        await manager.remember("offer:missing", 60, loader)

        assert loader.await_count == 2

    @pytest.mark.asyncio
    async def test_delete_pattern_stays_inside_namespace(self, backend, manager):
        other = CacheManager(backend, namespace="clubify_checkout:tenant-2")
        await manager.set("offer:all:100:0", [1])
        await manager.set("offer:1", {"id": "1"})
        await other.set("offer:all:100:0", [1])

        deleted = await manager.delete_pattern("offer:all:*")

        assert deleted == 1
        assert await manager.get("offer:1") == {"id": "1"}
        assert await other.get("offer:all:100:0") == [1]

    @pytest.mark.asyncio
    async def test_backend_failures_degrade_to_misses(self):
        backend = AsyncMock()
        backend.get.side_effect = CacheError("down")
        backend.set.side_effect = CacheError("down")
        manager = CacheManager(backend)

        assert await manager.get("offer:1", default="fallback") == "fallback"
        assert await manager.set("offer:1", {"id": "1"}) is False
        assert manager.stats()["errors"] == 2

    @pytest.mark.asyncio
    async def test_disabled_cache_is_bypassed(self, backend):
        manager = CacheManager(backend, enabled=False)
        loader = AsyncMock(return_value={"id": "1"})

        await manager.remember("offer:1", 60, loader)
        await manager.remember("offer:1", 60, loader)

        assert loader.await_count == 2
        assert await backend.size() == 0

    @pytest.mark.asyncio
    async def test_stats_count_hits_and_misses(self, manager):
        await manager.get("offer:1")
        await manager.set("offer:1", {"id": "1"})
        await manager.get("offer:1")

        stats = manager.stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["sets"] == 1

    def test_from_settings_picks_backend(self):
        memory = CacheManager.from_settings(ClubifySettings(_env_file=None, tenant_id="t1"))
        redis = CacheManager.from_settings(
            ClubifySettings(_env_file=None, cache_backend=CacheBackend.REDIS, redis_url="redis://cache:6379/1")
        )

        assert isinstance(memory.backend, MemoryAdapter)
        assert memory.namespace == "clubify_checkout:t1"
        assert isinstance(redis.backend, RedisAdapter)
        assert redis.backend.url == "redis://cache:6379/1"
