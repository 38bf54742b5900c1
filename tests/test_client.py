"""Tests for the client entry point."""

import pytest

from clubify_checkout import ClubifyCheckout, __version__
from clubify_checkout.core.http import HttpClient
from clubify_checkout.features import CartModule, OfferModule


class TestClubifyCheckout:

    @pytest.fixture
    def client(self, settings, http_client, cache, events, metrics):
        return ClubifyCheckout(settings, http_client=http_client, cache=cache, events=events, metrics=metrics)

    def test_modules_are_memoized(self, client):
        assert client.offer is client.offer
        assert client.module(OfferModule) is client.offer
        assert isinstance(client.cart, CartModule)
        assert client.cart.is_initialized()

    def test_modules_share_collaborators(self, client):
        assert client.orders.http_client is client.http_client
        assert client.customers.cache is client.cache
        assert client.analytics.events is client.events
        assert client.tracking.metrics is client.metrics

    @pytest.mark.asyncio
    async def test_listeners_receive_module_events(self, client, api):
        received = []
        client.on("Order.*", received.append)
        api.add("PATCH", "/orders/o1/status", body={})

        await client.orders.orders().update_status("o1", "processing")

        assert [event.name for event in received] == ["Order.StatusUpdated"]

    def test_status(self, client):
        client.products.products()

        status = client.get_status()

        assert status["version"] == __version__
        assert status["tenant_id"] == "tenant-1"
        assert status["base_url"] == "https://api.test"
        assert status["modules"]["products"]["components"] == {"repository": True, "product_service": True}

    @pytest.mark.asyncio
    async def test_health_check(self, client):
        client.offer

        health = await client.health_check()

        assert health["cache"]["healthy"]
        assert health["modules"] == {"offer": True}

    @pytest.mark.asyncio
    async def test_close_keeps_injected_transport(self, client, http_client, api):
        offer = client.offer
        api.add("GET", "/offers/o1", body={"id": "o1"})

        await client.close()

        assert not offer.is_initialized()
        assert client.get_status()["modules"] == {}
        assert (await http_client.get("offers/o1")).data == {"id": "o1"}

    @pytest.mark.asyncio
    async def test_context_manager_closes_owned_transport(self, settings):
        async with ClubifyCheckout(settings) as client:
            assert isinstance(client.http_client, HttpClient)
            transport = client.http_client

        with pytest.raises(RuntimeError):
            await transport.get("offers")

    @pytest.mark.asyncio
    async def test_modules_rebuild_after_close(self, client):
        first = client.cart
        await client.close()

        assert client.cart is not first
        assert client.cart.is_initialized()

    @pytest.mark.asyncio
    async def test_close_shuts_down_owned_cache(self, settings, http_client, mocker):
        client = ClubifyCheckout(settings, http_client=http_client)
        shutdown = mocker.spy(client.cache, "shutdown")

        await client.close()

        shutdown.assert_called_once()

    @pytest.mark.asyncio
    async def test_close_leaves_shared_cache_running(self, client, cache, mocker):
        shutdown = mocker.spy(cache, "shutdown")
        await cache.set("shared", {"alive": True})

        await client.close()

        shutdown.assert_not_called()
        assert await cache.get("shared") == {"alive": True}
