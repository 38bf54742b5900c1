"""Tests for the service base class."""

from unittest.mock import AsyncMock

import pytest

from clubify_checkout.core.exceptions import SlugGenerationError
from clubify_checkout.core.service import BaseService


class CouponService(BaseService):
    service_name = "coupon"


class TestBaseService:

    @pytest.fixture
    def service(self, settings, cache, events, metrics):
        return CouponService(settings, cache, events, metrics)

    @pytest.mark.asyncio
    async def test_execute_with_metrics_records_success_and_failure(self, service, metrics):
        assert await service.execute_with_metrics("apply", AsyncMock(return_value=42)) == 42

        with pytest.raises(RuntimeError):
            await service.execute_with_metrics("apply", AsyncMock(side_effect=RuntimeError("nope")))

        stats = metrics.get("coupon.apply")
        assert stats.calls == 2
        assert stats.errors == 1

    @pytest.mark.asyncio
    async def test_get_cached_or_execute(self, service, cache):
        loader = AsyncMock(return_value={"valid": True})

        await service.get_cached_or_execute("SUMMER", loader, ttl=60)
        await service.get_cached_or_execute("SUMMER", loader, ttl=60)

        loader.assert_awaited_once()
        assert await cache.get("coupon:SUMMER") == {"valid": True}

    @pytest.mark.asyncio
    async def test_dispatch_stamps_service_and_time(self, service, events):
        await service.dispatch("Coupon.Applied", {"code": "SUMMER"})

        payload = events.dispatched[-1].payload
        assert payload["code"] == "SUMMER"
        assert payload["service"] == "coupon"
        assert "timestamp" in payload

    @pytest.mark.asyncio
    async def test_unique_slug(self, service):
        taken = {"summer-sale", "summer-sale-1"}

        async def exists(slug):
            return slug in taken

        assert await service.unique_slug("Summer Sale", exists) == "summer-sale-2"

    @pytest.mark.asyncio
    async def test_unique_slug_respects_attempt_limit(self, settings, cache, events):
        service = CouponService(settings.model_copy(update={"slug_max_attempts": 2}), cache, events)

        with pytest.raises(SlugGenerationError):
            await service.unique_slug("Summer", AsyncMock(return_value=True))

    @pytest.mark.asyncio
    async def test_get_metrics_is_scoped_to_service(self, service, metrics):
        metrics.record("offer.create", 1.0)
        await service.execute_with_metrics("apply", AsyncMock())

        assert list(service.get_metrics()) == ["coupon.apply"]
