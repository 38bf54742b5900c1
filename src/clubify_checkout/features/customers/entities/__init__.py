"""Customer entities."""

from .customer import CUSTOMER_STATUSES, DOCUMENT_TYPES, CustomerData

__all__ = ["CUSTOMER_STATUSES", "DOCUMENT_TYPES", "CustomerData"]
