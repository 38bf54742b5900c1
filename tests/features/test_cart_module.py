"""Tests for carts, items, promotions, navigation and one-click."""

import pytest

from clubify_checkout.core.exceptions import ValidationError
from clubify_checkout.features.cart import CartModule
from clubify_checkout.features.cart.entities import CartData, ItemData, NavigationData


class TestCartData:

    def test_totals_fall_back_to_items(self):
        cart = CartData.from_api({
            "items": [
                {"product_id": "p1", "price": 10.5, "quantity": 2},
                {"product_id": "p2", "price": 4, "quantity": 1},
            ],
            "currency": "BRL",
        })

        assert cart.item_count() == 3
        assert cart.get_subtotal() == 25.0
        assert cart.get_total() == 25.0
        assert cart.get_formatted_total() == "R$ 25,00"

    def test_totals_from_api_win(self):
        cart = CartData.from_api({"items": [{"price": 10, "quantity": 1}], "totals": {"subtotal": 10, "total": 8}})

        assert cart.get_total() == 8.0

    def test_flags(self):
        assert CartData.from_api({}).is_empty()
        assert CartData.from_api({"status": "abandoned"}).is_abandoned()
        assert CartData.from_api({"navigation_id": "n1"}).is_in_flow()
        assert CartData.from_api({"promotions": [{"code": "X"}]}).has_promotion()

    def test_item(self):
        item = ItemData(product_id="p1", name="Course", price=50, quantity=3, original_price=100)

        assert item.get_subtotal() == 150.0
        assert item.get_discount_percentage() == 50.0

    def test_item_requires_positive_quantity(self):
        with pytest.raises(ValidationError) as exc_info:
            ItemData(product_id="p1", name="Course", price=50, quantity=0)

        assert list(exc_info.value.errors) == ["quantity"]

    def test_navigation_progress(self):
        steps = [{"type": "cart"}, {"type": "payment"}, {"type": "confirmation"}, {"type": "upsell"}]

        assert NavigationData.from_api({"steps": steps, "current_step": 1}).get_progress_percentage() == 25.0
        assert NavigationData.from_api({"steps": steps, "status": "completed"}).get_progress_percentage() == 100.0


class TestCartModule:

    @pytest.fixture
    def module(self, build_module):
        return build_module(CartModule)

    @pytest.fixture
    def cart(self):
        return {"id": "c1", "session_id": "s1", "status": "active", "items": []}

    @pytest.mark.asyncio
    async def test_services_share_one_repository(self, module):
        repository = module.repository()

        assert module.carts().repository is repository
        assert module.items().repository is repository
        assert module.navigation().repository is repository
        assert module.promotions().repository is repository
        assert module.one_click().repository is repository

    @pytest.mark.asyncio
    async def test_get_by_session_is_cached(self, module, api, cart):
        api.add("GET", "/cart", body={"data": [cart]})

        first = await module.carts().get_by_session("s1")
        second = await module.carts().get_by_session("s1")

        assert first.id == second.id == "c1"
        assert api.count("GET", "/cart") == 1
        assert api.requests[0].url.params["session_id"] == "s1"

    @pytest.mark.asyncio
    async def test_add_to_cart_creates_cart_when_missing(self, module, api, events, cart):
        api.add("GET", "/cart", body={"data": []})
        api.add("POST", "/cart", status=201, body=cart)
        api.add("POST", "/cart/c1/items", status=201, body={**cart, "items": [{"product_id": "p1", "quantity": 1}]})

        result = await module.add_to_cart("s1", {"product_id": "p1", "name": "Course", "price": 97})

        assert result.item_count() == 1
        created = api.last_json("POST", "/cart")
        assert created["session_id"] == "s1"
        assert created["type"] == "standard"
        assert api.last_json("POST", "/cart/c1/items")["quantity"] == 1
        assert [event.name for event in events.dispatched] == ["Cart.Created", "Cart.ItemAdded", "Cart.ItemAdded"]
        assert events.dispatched[-1].payload["subtotal"] == 97.0

    @pytest.mark.asyncio
    async def test_add_to_cart_reuses_session_cart(self, module, api, cart):
        api.add("GET", "/cart", body=[cart])
        api.add("POST", "/cart/c1/items", body=cart)

        await module.add_to_cart("s1", {"product_id": "p1", "name": "Course", "price": 97})

        assert api.count("POST", "/cart") == 0

    @pytest.mark.asyncio
    async def test_item_mutation_invalidates_cart(self, module, api, cart):
        api.add("GET", "/cart/c1", body=cart)
        api.add("PUT", "/cart/c1/items/i1", body=cart)
        await module.carts().get("c1")

        await module.items().update_quantity("c1", "i1", 3)
        await module.carts().get("c1")

        assert api.last_json("PUT", "/cart/c1/items/i1") == {"quantity": 3}
        assert api.count("GET", "/cart/c1") == 2

    @pytest.mark.asyncio
    async def test_item_mutation_refreshes_session_lookup(self, module, api, cart):
        api.add("GET", "/cart", body=[cart])
        api.add("PUT", "/cart/c1/items/i1", body=cart)
        await module.carts().get_by_session("s1")

        await module.items().update_quantity("c1", "i1", 3)
        await module.carts().get_by_session("s1")

        assert api.count("GET", "/cart") == 2
        assert api.count("GET", "/cart/c1") == 0

    @pytest.mark.asyncio
    async def test_zero_quantity_removes_item(self, module, api, events, cart):
        api.add("DELETE", "/cart/c1/items/i1", body=cart)

        await module.items().update_quantity("c1", "i1", 0)

        assert events.dispatched[-1].name == "Cart.ItemRemoved"

    @pytest.mark.asyncio
    async def test_has_product(self, module, api):
        api.add("GET", "/cart/c1/items", body={"items": [{"product_id": "p1"}]})

        assert await module.items().has_product("c1", "p1")
        assert not await module.items().has_product("c1", "p2")

    @pytest.mark.asyncio
    async def test_promotion_codes_are_normalized(self, module, api, cart):
        api.add("POST", "/cart/c1/promotions", body=cart)
        api.add("POST", "/promotions/validate", body={"data": {"valid": True, "discount": 10}})

        await module.promotions().apply("c1", "  summer10 ")
        validation = await module.promotions().validate("c1", "summer10")

        assert api.last_json("POST", "/cart/c1/promotions") == {"code": "SUMMER10"}
        assert api.last_json("POST", "/promotions/validate") == {"code": "SUMMER10", "cart_id": "c1"}
        assert validation == {"valid": True, "discount": 10}

    @pytest.mark.asyncio
    async def test_blank_promotion_code_is_rejected(self, module):
        with pytest.raises(ValidationError):
            await module.promotions().apply("c1", "   ")

    @pytest.mark.asyncio
    async def test_navigation_flow(self, module, api, events):
        api.add("POST", "/navigation/flow/o1", body={"id": "n1", "offer_id": "o1", "current_step": 0})
        api.add("POST", "/navigation/flow/navigation/n1/continue", body={"id": "n1", "current_step": 1})
        api.add("GET", "/navigation/flow/navigation/n1", body={"id": "n1", "current_step": 1})
        api.add("POST", "/navigation/flow/navigation/n1/complete", body={"id": "n1", "status": "completed"})

        started = await module.navigation().start("o1", {"source": "landing"})
        advanced = await module.navigation().advance("n1", {"step": "identification"})
        current = await module.navigation().get("n1")
        completed = await module.navigation().complete("n1")

        assert started.id == "n1"
        assert advanced.current_step == 1
        assert current.current_step == 1
        assert completed.is_completed()
        assert [event.name for event in events.dispatched] == ["Cart.NavigationStarted", "Cart.NavigationCompleted"]

    @pytest.mark.asyncio
    async def test_missing_navigation(self, module):
        assert await module.navigation().get("missing") is None

    @pytest.mark.asyncio
    async def test_one_click_requires_payment_method(self, module, api):
        with pytest.raises(ValidationError) as exc_info:
            await module.one_click().process("c1", {})

        assert "payment_method_id" in exc_info.value.errors
        assert api.requests == []

    @pytest.mark.asyncio
    async def test_one_click(self, module, api, events):
        api.add("POST", "/cart/c1/one-click/validate", body={"eligible": True})
        api.add("POST", "/cart/c1/one-click", body={"data": {"order_id": "ord1"}})

        assert await module.one_click().validate("c1", {"payment_method_id": "pm1"}) == {"eligible": True}
        assert await module.one_click().process("c1", {"payment_method_id": "pm1"}) == {"order_id": "ord1"}
        assert events.dispatched[-1].name == "Cart.OneClickProcessed"

    @pytest.mark.asyncio
    async def test_convert_empty_cart_is_rejected(self, module, api, cart):
        api.add("GET", "/cart/c1", body=cart)

        with pytest.raises(ValidationError):
            await module.carts().convert_to_order("c1")

        assert api.count("POST", "/cart/c1/convert") == 0

    @pytest.mark.asyncio
    async def test_convert_to_order(self, module, api, events, cart):
        api.add("GET", "/cart/c1", body={**cart, "items": [{"product_id": "p1", "quantity": 1}]})
        api.add("POST", "/cart/c1/convert", body={"order_id": "ord1"})

        result = await module.carts().convert_to_order("c1")

        assert result == {"order_id": "ord1"}
        assert events.dispatched[-1].name == "Cart.Converted"
        assert events.dispatched[-1].payload == {"id": "c1", "order_id": "ord1"}

    @pytest.mark.asyncio
    async def test_abandoned_carts(self, module, api, cart):
        api.add("PUT", "/cart/c1/abandon", body={**cart, "status": "abandoned"})
        api.add("GET", "/cart/abandoned", body=[{**cart, "status": "abandoned"}])
        api.add("DELETE", "/cart/abandoned", body={"deleted_count": 4})

        abandoned = await module.carts().mark_as_abandoned("c1")
        found = await module.carts().find_abandoned(hours_ago=2)
        deleted = await module.carts().cleanup_abandoned(days_ago=7)

        assert abandoned.is_abandoned()
        assert [item.id for item in found] == ["c1"]
        assert deleted == 4
        assert api.calls("DELETE", "/cart/abandoned")[0].url.params["days_ago"] == "7"

    @pytest.mark.asyncio
    async def test_cleanup_failure_returns_zero(self, module, api):
        api.add("DELETE", "/cart/abandoned", status=500)

        assert await module.carts().cleanup_abandoned() == 0
