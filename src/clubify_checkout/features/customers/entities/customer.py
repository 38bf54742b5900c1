"""Customer record."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ....core.data import BaseData
from ....core.formatting import format_currency, to_float

CUSTOMER_STATUSES = ["active", "inactive", "suspended", "deleted"]
DOCUMENT_TYPES = ["cpf", "cnpj"]


@dataclass
class CustomerData(BaseData):
    RULES = {
        "name": ["required", "string", ["min", 2], ["max", 100]],
        "email": ["required", "email", ["max", 255]],
        "phone": ["string", ["max", 20]],
        "document": ["string", ["max", 20]],
        "document_type": [["in", DOCUMENT_TYPES]],
        "birth_date": ["date"],
        "status": [["in", CUSTOMER_STATUSES]],
        "address": ["array"],
        "tags": ["array"],
        "total_spent": ["numeric", ["min", 0]],
        "total_orders": ["integer", ["min", 0]],
        "organization_id": ["string"],
        "metadata": ["array"],
    }

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    document: Optional[str] = None
    document_type: Optional[str] = None
    birth_date: Optional[str] = None
    status: Optional[str] = None
    address: Optional[Dict[str, Any]] = None
    tags: Optional[List[str]] = None
    total_spent: Optional[float] = None
    total_orders: Optional[int] = None
    organization_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    def full_name(self) -> str:
        """``name``, or first and last name when the API splits them."""
        if self.name:
            return self.name.strip()
        parts = [self.extra.get("first_name"), self.extra.get("last_name")]
        return " ".join(str(part).strip() for part in parts if part)

    def first_name(self) -> str:
        return self.full_name().split(" ")[0]

    def is_active(self) -> bool:
        return self.status in (None, "active")

    def average_order_value(self) -> float:
        if not self.total_orders:
            return 0.0
        return round(to_float(self.total_spent) / self.total_orders, 2)

    def get_formatted_total_spent(self, currency: str = "BRL") -> str:
        return format_currency(self.total_spent, currency)

    def has_tag(self, tag: str) -> bool:
        return tag in (self.tags or [])
