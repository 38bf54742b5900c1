"""Tests for domain events and the dispatcher."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from clubify_checkout.core.events import DomainEvent, EventDispatcher


class TestDomainEvent:

    def test_name_parts(self):
        event = DomainEvent(name="Offer.Created", payload={"id": "o1"})

        assert event.aggregate_type == "Offer"
        assert event.action == "Created"
        assert event.aggregate_id == "o1"

    def test_empty_name_is_rejected(self):
        with pytest.raises(ValueError):
            DomainEvent(name=" ")

    def test_to_dict(self):
        data = DomainEvent(name="Cart.ItemAdded", payload={"id": "c1"}).to_dict()

        assert data["name"] == "Cart.ItemAdded"
        assert data["payload"] == {"id": "c1"}
        assert data["source"] == "clubify_checkout"


class TestEventDispatcher:

    @pytest.fixture
    def dispatcher(self):
        return EventDispatcher(history_size=3)

    @pytest.mark.asyncio
    async def test_exact_and_glob_subscriptions(self, dispatcher):
        exact = MagicMock()
        wildcard = MagicMock()
        everything = MagicMock()
        dispatcher.subscribe("Offer.Created", exact)
        dispatcher.subscribe("Offer.*", wildcard)
        dispatcher.subscribe("*", everything)

        await dispatcher.emit("Offer.Created", {"id": "o1"})
        await dispatcher.emit("Product.Created", {"id": "p1"})

        assert exact.call_count == 1
        assert wildcard.call_count == 1
        assert everything.call_count == 2

    @pytest.mark.asyncio
    async def test_async_listeners_are_awaited(self, dispatcher):
        listener = AsyncMock()
        dispatcher.subscribe("Order.Cancelled", listener)

        event = await dispatcher.emit("Order.Cancelled", {"id": "1"})

        listener.assert_awaited_once_with(event)

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_stop_others(self, dispatcher):
        failing = MagicMock(side_effect=RuntimeError("boom"))
        healthy = MagicMock()
        dispatcher.subscribe("Offer.*", failing)
        dispatcher.subscribe("Offer.*", healthy)

        event = await dispatcher.emit("Offer.Updated")

        assert event is not None
        healthy.assert_called_once_with(event)

    @pytest.mark.asyncio
    async def test_disabled_dispatcher_emits_nothing(self):
        dispatcher = EventDispatcher(enabled=False)
        listener = MagicMock()
        dispatcher.subscribe("*", listener)

        assert await dispatcher.emit("Offer.Created") is None
        listener.assert_not_called()
        assert dispatcher.dispatched == []

    @pytest.mark.asyncio
    async def test_history_is_bounded(self, dispatcher):
        for index in range(5):
            await dispatcher.emit("Tracking.Event", {"id": index})

        assert [event.payload["id"] for event in dispatcher.dispatched] == [2, 3, 4]

        dispatcher.clear_history()
        assert dispatcher.dispatched == []

    def test_unsubscribe(self, dispatcher):
        listener = MagicMock()
        dispatcher.subscribe("Offer.*", listener)

        assert dispatcher.has_listeners("Offer.Created")
        assert dispatcher.unsubscribe("Offer.*", listener) is True
        assert dispatcher.unsubscribe("Offer.*", listener) is False
        assert not dispatcher.has_listeners("Offer.Created")
