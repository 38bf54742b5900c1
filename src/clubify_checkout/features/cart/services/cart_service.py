"""Cart services.

All five services work on the same :class:`CartRepository` instance.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ....core.exceptions import ValidationError
from ....core.service import RepositoryService
from ..entities import CartData, ItemData, NavigationData
from ..repositories import CartRepository

logger = logging.getLogger(__name__)


class CartService(RepositoryService):
    service_name = "cart"
    repository: CartRepository

    async def create(self, session_id: str, data: Optional[Mapping[str, Any]] = None) -> CartData:
        payload = {
            "type": "standard",
            "status": "active",
            "currency": "BRL",
            "items": [],
            **dict(data or {}),
            "session_id": session_id,
        }
        if self.settings.organization_id:
            payload.setdefault("organization_id", self.settings.organization_id)
        cart = CartData.from_dict(payload)
        return await self.execute_with_metrics("create", self.repository.create, cart)

    async def get(self, cart_id: str) -> Optional[CartData]:
        return await self.repository.find(cart_id)

    async def get_by_session(self, session_id: str) -> Optional[CartData]:
        return await self.repository.find_by_session(session_id)

    async def get_by_customer(self, customer_id: str) -> Optional[CartData]:
        return await self.repository.find_by_customer(customer_id)

    async def get_or_create(self, session_id: str, data: Optional[Mapping[str, Any]] = None) -> CartData:
        cart = await self.repository.find_by_session(session_id)
        if cart is not None:
            return cart
        return await self.create(session_id, data)

    async def update(self, cart_id: str, changes: Mapping[str, Any]) -> CartData:
        CartData.validate_patch(changes)
        return await self.execute_with_metrics("update", self.repository.update, cart_id, dict(changes))

    async def delete(self, cart_id: str) -> bool:
        return await self.repository.delete(cart_id)

    async def update_shipping(self, cart_id: str, shipping: Mapping[str, Any]) -> CartData:
        return await self.repository.update_shipping(cart_id, shipping)

    async def update_billing(self, cart_id: str, billing: Mapping[str, Any]) -> CartData:
        return await self.repository.update_billing(cart_id, billing)

    async def get_totals(self, cart_id: str) -> Dict[str, Any]:
        return await self.repository.get_totals(cart_id)

    async def mark_as_abandoned(self, cart_id: str) -> CartData:
        return await self.repository.mark_as_abandoned(cart_id)

    async def convert_to_order(self, cart_id: str) -> Dict[str, Any]:
        """Convert a non-empty cart into an order."""
        cart = await self.repository.find(cart_id)
        if cart is None:
            raise ValidationError(f"Cart {cart_id} not found", errors={"cart_id": ["cart does not exist"]})
        if cart.is_empty():
            raise ValidationError("Cannot convert an empty cart", errors={"items": ["cart has no items"]})
        return await self.execute_with_metrics("convert", self.repository.convert_to_order, cart_id)

    async def find_abandoned(self, hours_ago: int = 24) -> List[CartData]:
        return await self.repository.find_abandoned(hours_ago)

    async def cleanup_abandoned(self, days_ago: int = 30) -> int:
        return await self.repository.cleanup_abandoned(days_ago)

    async def get_statistics(self, filters: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return await self.repository.get_statistics(filters)


class ItemService(RepositoryService):
    service_name = "cart_item"
    repository: CartRepository

    async def add(self, cart_id: str, data: Mapping[str, Any]) -> CartData:
        item = ItemData.from_dict({"quantity": 1, **data})
        cart = await self.execute_with_metrics("add", self.repository.add_item, cart_id, item)
        await self.dispatch("Cart.ItemAdded", {
            "cart_id": cart_id,
            "product_id": item.product_id,
            "quantity": item.quantity,
            "subtotal": item.get_subtotal(),
        })
        return cart

    async def remove(self, cart_id: str, item_id: str) -> CartData:
        return await self.repository.remove_item(cart_id, item_id)

    async def update(self, cart_id: str, item_id: str, changes: Mapping[str, Any]) -> CartData:
        ItemData.validate_patch(changes)
        return await self.repository.update_item(cart_id, item_id, changes)

    async def update_quantity(self, cart_id: str, item_id: str, quantity: int) -> CartData:
        """Set an item's quantity; zero or less removes it."""
        if quantity <= 0:
            return await self.remove(cart_id, item_id)
        return await self.repository.update_item(cart_id, item_id, {"quantity": quantity})

    async def list(self, cart_id: str) -> List[ItemData]:
        return await self.repository.get_items(cart_id)

    async def clear(self, cart_id: str) -> CartData:
        return await self.repository.clear_items(cart_id)

    async def has_product(self, cart_id: str, product_id: str) -> bool:
        return any(item.product_id == product_id for item in await self.list(cart_id))


class NavigationService(RepositoryService):
    service_name = "cart_navigation"
    repository: CartRepository

    async def start(self, offer_id: str, context: Optional[Mapping[str, Any]] = None) -> NavigationData:
        if not offer_id:
            raise ValidationError("Offer id is required", errors={"offer_id": ["The offer_id field is required"]})
        return await self.execute_with_metrics("start", self.repository.start_navigation, offer_id, context)

    async def advance(self, navigation_id: str, step_data: Mapping[str, Any]) -> NavigationData:
        return await self.repository.continue_navigation(navigation_id, step_data)

    async def get(self, navigation_id: str) -> Optional[NavigationData]:
        return await self.repository.get_navigation(navigation_id)

    async def complete(self, navigation_id: str) -> NavigationData:
        return await self.execute_with_metrics("complete", self.repository.complete_navigation, navigation_id)


class PromotionService(RepositoryService):
    service_name = "cart_promotion"
    repository: CartRepository

    @staticmethod
    def normalize_code(code: str) -> str:
        normalized = (code or "").strip().upper()
        if not normalized:
            raise ValidationError("Promotion code is required", errors={"code": ["The code field is required"]})
        return normalized

    async def apply(self, cart_id: str, code: str) -> CartData:
        return await self.repository.apply_promotion(cart_id, self.normalize_code(code))

    async def remove(self, cart_id: str) -> CartData:
        return await self.repository.remove_promotion(cart_id)

    async def validate(self, cart_id: str, code: str) -> Dict[str, Any]:
        return await self.repository.validate_promotion(self.normalize_code(code), cart_id)


class OneClickService(RepositoryService):
    service_name = "cart_one_click"
    repository: CartRepository

    REQUIRED_PAYMENT_FIELDS = ("payment_method_id",)

    def _check_payment(self, payment: Mapping[str, Any]) -> None:
        errors = {
            name: [f"The {name} field is required"]
            for name in self.REQUIRED_PAYMENT_FIELDS
            if not payment.get(name)
        }
        if errors:
            raise ValidationError("Invalid one-click payment data", errors=errors)

    async def validate(self, cart_id: str, payment: Mapping[str, Any]) -> Dict[str, Any]:
        self._check_payment(payment)
        return await self.repository.validate_one_click(cart_id, payment)

    async def process(self, cart_id: str, payment: Mapping[str, Any]) -> Dict[str, Any]:
        self._check_payment(payment)
        result = await self.execute_with_metrics("process", self.repository.process_one_click, cart_id, payment)
        logger.info(f"One-click purchase processed for cart {cart_id}")
        return result
