"""Product entities."""

from .product import (
    FLOW_STATUSES,
    FLOW_STEP_TYPES,
    PRODUCT_STATUSES,
    PRODUCT_TYPES,
    FlowData,
    ProductData,
)

__all__ = [
    "FLOW_STATUSES",
    "FLOW_STEP_TYPES",
    "PRODUCT_STATUSES",
    "PRODUCT_TYPES",
    "FlowData",
    "ProductData",
]
