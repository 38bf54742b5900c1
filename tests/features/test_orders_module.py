"""Tests for order lookups, status changes and cancellation."""

import pytest

from clubify_checkout.core.exceptions import ConflictError, HttpError, ValidationError
from clubify_checkout.features.orders import OrdersModule
from clubify_checkout.features.orders.entities import OrderData


class TestOrderData:

    def test_requires_items_and_totals(self):
        with pytest.raises(ValidationError) as exc_info:
            OrderData(customer_id="c1")

        assert set(exc_info.value.errors) == {"items", "subtotal", "total_amount"}

    def test_calculated_total(self):
        order = OrderData(
            customer_id="c1",
            items=[{"product_id": "p1", "quantity": 2}, {"product_id": "p2"}],
            subtotal=200,
            discount_amount=20,
            shipping_amount=15.5,
            tax_amount=4.5,
            total_amount=200,
        )

        assert order.calculated_total() == 200.0
        assert order.item_count() == 3
        assert order.get_formatted_total() == "R$ 200,00"

    def test_cancellable_statuses(self):
        assert OrderData.from_api({"status": "pending"}).can_be_cancelled()
        assert not OrderData.from_api({"status": "shipped"}).can_be_cancelled()


class TestOrdersModule:

    @pytest.fixture
    def module(self, build_module):
        return build_module(OrdersModule)

    @pytest.mark.asyncio
    async def test_list_posts_search(self, module, api):
        api.add("POST", "/orders/search", body={"data": [{"id": "o1"}, {"id": "o2"}], "total": 7})

        page = await module.orders().list({"status": "paid"}, limit=2)

        assert [order.id for order in page] == ["o1", "o2"]
        assert page.total == 7
        assert page.has_more
        body = api.last_json("POST", "/orders/search")
        assert body["filters"] == {"status": "paid"}
        assert body["sort"] == {"created_at": "desc"}

    @pytest.mark.asyncio
    async def test_list_by_customer(self, module, api):
        api.add("GET", "/orders", body=[{"id": "o1", "customer_id": "c1"}])

        page = await module.orders().list_by_customer("c1")

        assert page.items[0].customer_id == "c1"
        assert api.calls("GET", "/orders")[0].url.params["customer_id"] == "c1"

    @pytest.mark.asyncio
    async def test_update_status(self, module, api, events):
        api.add("PATCH", "/orders/o1/status", body={"id": "o1"})

        assert await module.orders().update_status("o1", "shipped")
        assert api.last_json("PATCH", "/orders/o1/status") == {"status": "shipped"}
        assert events.dispatched[-1].name == "Order.StatusUpdated"

    @pytest.mark.asyncio
    async def test_update_status_failure_is_not_fatal(self, module, api, events):
        api.add("PATCH", "/orders/o1/status", status=422, body={"message": "bad transition"})

        assert not await module.orders().update_status("o1", "delivered")
        assert events.dispatched == []

    @pytest.mark.asyncio
    async def test_unknown_status_is_rejected(self, module, api):
        with pytest.raises(ValidationError):
            await module.orders().update_status("o1", "lost")

        assert api.requests == []

    @pytest.mark.asyncio
    async def test_cancel(self, module, api, events):
        api.add("GET", "/orders/o1", body={"id": "o1", "status": "pending"})
        api.add("POST", "/orders/o1/cancel", body={"data": {"id": "o1", "status": "cancelled"}})

        order = await module.orders().cancel("o1", "customer request")

        assert order.status == "cancelled"
        assert api.last_json("POST", "/orders/o1/cancel") == {"reason": "customer request"}
        assert events.dispatched[-1].name == "Order.Cancelled"
        assert module.metrics.get("order.cancel").calls == 1

    @pytest.mark.asyncio
    async def test_cancel_missing_order(self, module):
        with pytest.raises(ValidationError):
            await module.orders().cancel("missing")

    @pytest.mark.asyncio
    async def test_cancel_shipped_order_conflicts(self, module, api):
        api.add("GET", "/orders/o1", body={"id": "o1", "status": "shipped"})

        with pytest.raises(ConflictError) as exc_info:
            await module.orders().cancel("o1")

        assert exc_info.value.details["status"] == "shipped"
        assert api.count("POST", "/orders/o1/cancel") == 0

    @pytest.mark.asyncio
    async def test_statistics_are_cached(self, module, api):
        api.add("GET", "/orders/statistics", body={"total_orders": 12})

        first = await module.orders().get_statistics({"period": "30d"})
        second = await module.orders().get_statistics({"period": "30d"})

        assert first == second == {"total_orders": 12}
        assert api.count("GET", "/orders/statistics") == 1

    @pytest.mark.asyncio
    async def test_server_error_propagates(self, module, api):
        api.add("GET", "/orders/o1", status=500, body={"message": "boom"})

        with pytest.raises(HttpError) as exc_info:
            await module.orders().get("o1")

        assert exc_info.value.status_code == 500
