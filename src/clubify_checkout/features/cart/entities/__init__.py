"""Cart entities."""

from .cart import (
    CART_STATUSES,
    CART_TYPES,
    CURRENCIES,
    NAVIGATION_STATUSES,
    CartData,
    ItemData,
    NavigationData,
)

__all__ = [
    "CART_STATUSES",
    "CART_TYPES",
    "CURRENCIES",
    "NAVIGATION_STATUSES",
    "CartData",
    "ItemData",
    "NavigationData",
]
