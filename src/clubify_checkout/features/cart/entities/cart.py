"""Cart, cart item and flow navigation records."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ....core.data import BaseData
from ....core.formatting import format_currency, percentage, to_float

CART_TYPES = ["standard", "one_click", "subscription", "recurring", "flow"]
CART_STATUSES = ["active", "processing", "completed", "abandoned", "expired", "converting"]
CURRENCIES = ["BRL", "USD", "EUR", "ARS", "CLP", "PEN", "COP", "MXN"]
NAVIGATION_STATUSES = ["active", "completed", "abandoned"]


@dataclass
class ItemData(BaseData):
    RULES = {
        "product_id": ["required", "string", ["min", 1]],
        "name": ["required", "string", ["min", 1]],
        "price": ["required", "numeric", ["min", 0]],
        "quantity": ["required", "integer", ["min", 1]],
        "cart_id": ["string"],
        "variant_id": ["string"],
        "sku": ["string"],
        "original_price": ["numeric", ["min", 0]],
        "currency": ["string", ["in", CURRENCIES]],
        "is_digital": ["boolean"],
        "requires_shipping": ["boolean"],
        "metadata": ["array"],
    }

    product_id: Optional[str] = None
    name: Optional[str] = None
    price: Optional[float] = None
    quantity: Optional[int] = None
    cart_id: Optional[str] = None
    variant_id: Optional[str] = None
    sku: Optional[str] = None
    original_price: Optional[float] = None
    currency: Optional[str] = None
    is_digital: Optional[bool] = None
    requires_shipping: Optional[bool] = None
    metadata: Optional[Dict[str, Any]] = None

    def get_subtotal(self) -> float:
        return round(to_float(self.price) * (self.quantity or 0), 2)

    def get_formatted_subtotal(self) -> str:
        return format_currency(self.get_subtotal(), self.currency or "BRL")

    def get_discount_percentage(self) -> float:
        original = to_float(self.original_price)
        if original <= to_float(self.price):
            return 0.0
        return percentage(original - to_float(self.price), original)


@dataclass
class CartData(BaseData):
    RULES = {
        "session_id": ["required", "string", ["min", 1]],
        "customer_id": ["string"],
        "organization_id": ["string"],
        "type": ["string", ["in", CART_TYPES]],
        "status": ["string", ["in", CART_STATUSES]],
        "items": ["list"],
        "totals": ["array"],
        "promotions": ["array"],
        "currency": ["string", ["in", CURRENCIES]],
        "offer_id": ["string"],
        "navigation_id": ["string"],
        "one_click_eligible": ["boolean"],
        "metadata": ["array"],
        "expires_at": ["date"],
    }

    session_id: Optional[str] = None
    customer_id: Optional[str] = None
    organization_id: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    items: Optional[List[Dict[str, Any]]] = None
    totals: Optional[Dict[str, Any]] = None
    promotions: Optional[List[Any]] = None
    currency: Optional[str] = None
    offer_id: Optional[str] = None
    navigation_id: Optional[str] = None
    one_click_eligible: Optional[bool] = None
    metadata: Optional[Dict[str, Any]] = None
    expires_at: Optional[str] = None

    def get_items(self) -> List[ItemData]:
        return [ItemData.from_api(item) for item in self.items or []]

    def is_empty(self) -> bool:
        return not self.items

    def item_count(self) -> int:
        return sum(int(item.get("quantity") or 0) for item in self.items or [])

    def get_subtotal(self) -> float:
        totals = self.totals or {}
        if "subtotal" in totals:
            return to_float(totals["subtotal"])
        return round(sum(item.get_subtotal() for item in self.get_items()), 2)

    def get_total(self) -> float:
        totals = self.totals or {}
        return to_float(totals.get("total"), self.get_subtotal())

    def get_formatted_total(self) -> str:
        return format_currency(self.get_total(), self.currency or "BRL")

    def has_promotion(self) -> bool:
        return bool(self.promotions)

    def is_abandoned(self) -> bool:
        return self.status == "abandoned"

    def is_in_flow(self) -> bool:
        return self.type == "flow" or bool(self.navigation_id)


@dataclass
class NavigationData(BaseData):
    """Progress of a shopper through an offer's checkout flow."""

    RULES = {
        "offer_id": ["required", "string"],
        "cart_id": ["string"],
        "current_step": ["integer", ["min", 0]],
        "steps": ["list"],
        "status": ["string", ["in", NAVIGATION_STATUSES]],
        "context": ["array"],
    }

    offer_id: Optional[str] = None
    cart_id: Optional[str] = None
    current_step: Optional[int] = None
    steps: Optional[List[Dict[str, Any]]] = None
    status: Optional[str] = None
    context: Optional[Dict[str, Any]] = None

    def is_completed(self) -> bool:
        return self.status == "completed"

    def get_progress_percentage(self) -> float:
        total = len(self.steps or [])
        if self.is_completed():
            return 100.0
        return percentage(self.current_step or 0, total)
