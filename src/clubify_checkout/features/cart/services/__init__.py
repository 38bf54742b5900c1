"""Cart services."""

from .cart_service import (
    CartService,
    ItemService,
    NavigationService,
    OneClickService,
    PromotionService,
)

__all__ = ["CartService", "ItemService", "NavigationService", "OneClickService", "PromotionService"]
