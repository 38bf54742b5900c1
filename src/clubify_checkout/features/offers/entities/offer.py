"""Offer and upsell records."""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from ....core.data import BaseData
from ....core.formatting import format_currency, percentage, to_float

OFFER_STATUSES = ["draft", "active", "paused", "archived"]
OFFER_TYPES = ["single_product", "bundle", "subscription", "funnel"]
UPSELL_TYPES = ["upsell", "downsell", "cross_sell", "order_bump"]


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class OfferData(BaseData):
    """A sellable offer: one or more products with pricing and checkout setup."""

    RULES = {
        "name": ["required", "string", ["min", 2], ["max", 255]],
        "slug": ["string", ["max", 255]],
        "description": ["string", ["max", 2000]],
        "type": ["required", "string", ["in", OFFER_TYPES]],
        "status": ["string", ["in", OFFER_STATUSES]],
        "organization_id": ["string"],
        "products": ["array"],
        "pricing": ["array"],
        "configuration": ["array"],
        "metadata": ["array"],
        "currency": ["string", ["min", 3], ["max", 3]],
        "active": ["boolean"],
        "start_date": ["date"],
        "end_date": ["date"],
    }

    name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    organization_id: Optional[str] = None
    products: Optional[List[Any]] = None
    pricing: Optional[Dict[str, Any]] = None
    configuration: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, Any]] = None
    currency: Optional[str] = None
    active: Optional[bool] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    def get_total_price(self) -> float:
        return to_float((self.pricing or {}).get("total_price"))

    def get_original_price(self) -> float:
        pricing = self.pricing or {}
        return to_float(pricing.get("original_price"), self.get_total_price())

    def get_discount_percentage(self) -> float:
        original = self.get_original_price()
        if original <= 0:
            return 0.0
        return percentage(original - self.get_total_price(), original)

    def is_on_sale(self) -> bool:
        return self.get_total_price() < self.get_original_price()

    def get_formatted_price(self) -> str:
        return format_currency(self.get_total_price(), self.currency or "BRL")

    def is_active(self, now: Optional[datetime] = None) -> bool:
        """Active flag set, status active and ``now`` inside the date window."""
        if self.active is False or self.status != "active":
            return False
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        start = _parse_datetime(self.start_date)
        end = _parse_datetime(self.end_date)
        if start and now < start:
            return False
        if end and now > end:
            return False
        return True


@dataclass
class UpsellData(BaseData):
    """Post-purchase or in-checkout add-on attached to an offer."""

    RULES = {
        "offer_id": ["string"],
        "product_id": ["required", "string"],
        "type": ["required", "string", ["in", UPSELL_TYPES]],
        "title": ["string", ["max", 255]],
        "price": ["required", "numeric", ["min", 0]],
        "position": ["integer", ["min", 0]],
    }

    offer_id: Optional[str] = None
    product_id: Optional[str] = None
    type: Optional[str] = None
    title: Optional[str] = None
    price: Optional[float] = None
    position: Optional[int] = None
