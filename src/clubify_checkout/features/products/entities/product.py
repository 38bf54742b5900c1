"""Product and checkout-flow records."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ....core.data import BaseData
from ....core.formatting import format_currency, percentage, to_float

PRODUCT_TYPES = ["physical", "digital", "service", "subscription"]
PRODUCT_STATUSES = ["active", "inactive", "draft", "archived"]
FLOW_STATUSES = ["draft", "active", "inactive"]
FLOW_STEP_TYPES = ["cart", "identification", "shipping", "payment", "upsell", "confirmation", "custom"]


@dataclass
class ProductData(BaseData):
    RULES = {
        "organization_id": ["string"],
        "name": ["required", "string", ["min", 2], ["max", 255]],
        "slug": ["string", ["min", 2], ["max", 100]],
        "sku": ["string", ["min", 2], ["max", 50]],
        "description": ["string", ["max", 5000]],
        "price": ["required", "numeric", ["min", 0]],
        "compare_at_price": ["numeric", ["min", 0]],
        "currency": ["string", ["in", ["BRL", "USD", "EUR", "GBP"]]],
        "type": ["required", "string", ["in", PRODUCT_TYPES]],
        "status": ["string", ["in", PRODUCT_STATUSES]],
        "stock_quantity": ["integer", ["min", 0]],
        "track_inventory": ["boolean"],
        "allow_backorders": ["boolean"],
        "category_id": ["string"],
        "tags": ["array"],
        "images": ["array"],
        "variants": ["array"],
        "metadata": ["array"],
    }

    organization_id: Optional[str] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    sku: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    compare_at_price: Optional[float] = None
    currency: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    stock_quantity: Optional[int] = None
    track_inventory: Optional[bool] = None
    allow_backorders: Optional[bool] = None
    category_id: Optional[str] = None
    tags: Optional[List[str]] = None
    images: Optional[List[Any]] = None
    variants: Optional[List[Any]] = None
    metadata: Optional[Dict[str, Any]] = None

    def get_formatted_price(self) -> str:
        return format_currency(self.price, self.currency or "BRL")

    def has_discount(self) -> bool:
        return to_float(self.compare_at_price) > to_float(self.price)

    def get_discount_percentage(self) -> float:
        if not self.has_discount():
            return 0.0
        return percentage(to_float(self.compare_at_price) - to_float(self.price), self.compare_at_price)

    def is_in_stock(self) -> bool:
        if not self.track_inventory:
            return True
        return (self.stock_quantity or 0) > 0 or bool(self.allow_backorders)

    def is_digital(self) -> bool:
        return self.type == "digital"


@dataclass
class FlowData(BaseData):
    """Ordered checkout steps bound to an offer."""

    RULES = {
        "name": ["required", "string", ["min", 2], ["max", 255]],
        "slug": ["string", ["max", 100]],
        "offer_id": ["string"],
        "status": ["string", ["in", FLOW_STATUSES]],
        "steps": ["list"],
        "settings": ["array"],
    }

    name: Optional[str] = None
    slug: Optional[str] = None
    offer_id: Optional[str] = None
    status: Optional[str] = None
    steps: Optional[List[Dict[str, Any]]] = None
    settings: Optional[Dict[str, Any]] = None

    def step_count(self) -> int:
        return len(self.steps or [])

    def get_step(self, step_type: str) -> Optional[Dict[str, Any]]:
        for step in self.steps or []:
            if step.get("type") == step_type:
                return step
        return None
