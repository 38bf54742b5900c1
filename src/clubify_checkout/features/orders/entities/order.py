"""Order record."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ....core.data import BaseData
from ....core.formatting import format_currency, to_float

ORDER_STATUSES = ["pending", "processing", "shipped", "delivered", "cancelled", "refunded"]
PAYMENT_STATUSES = ["pending", "authorized", "paid", "partially_paid", "failed", "cancelled", "refunded"]
CANCELLABLE_STATUSES = ["pending", "processing"]


@dataclass
class OrderData(BaseData):
    RULES = {
        "organization_id": ["string"],
        "customer_id": ["required", "string", ["min", 1]],
        "items": ["required", "list", ["min", 1]],
        "subtotal": ["required", "numeric", ["min", 0]],
        "discount_amount": ["numeric", ["min", 0]],
        "shipping_amount": ["numeric", ["min", 0]],
        "tax_amount": ["numeric", ["min", 0]],
        "total_amount": ["required", "numeric", ["min", 0]],
        "currency": ["string", ["in", ["BRL", "USD", "EUR", "GBP"]]],
        "status": ["string", ["in", ORDER_STATUSES]],
        "payment_status": ["string", ["in", PAYMENT_STATUSES]],
        "source": ["string", ["in", ["web", "mobile", "api", "admin"]]],
        "shipping_address": ["array"],
        "billing_address": ["array"],
        "metadata": ["array"],
    }

    organization_id: Optional[str] = None
    customer_id: Optional[str] = None
    items: Optional[List[Dict[str, Any]]] = None
    subtotal: Optional[float] = None
    discount_amount: Optional[float] = None
    shipping_amount: Optional[float] = None
    tax_amount: Optional[float] = None
    total_amount: Optional[float] = None
    currency: Optional[str] = None
    status: Optional[str] = None
    payment_status: Optional[str] = None
    source: Optional[str] = None
    shipping_address: Optional[Dict[str, Any]] = None
    billing_address: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, Any]] = None

    def get_formatted_total(self) -> str:
        return format_currency(self.total_amount, self.currency or "BRL")

    def item_count(self) -> int:
        return sum(int(item.get("quantity") or 1) for item in self.items or [])

    def is_paid(self) -> bool:
        return self.payment_status == "paid"

    def can_be_cancelled(self) -> bool:
        return self.status in CANCELLABLE_STATUSES

    def calculated_total(self) -> float:
        return round(
            to_float(self.subtotal)
            - to_float(self.discount_amount)
            + to_float(self.shipping_amount)
            + to_float(self.tax_amount),
            2,
        )
