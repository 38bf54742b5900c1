"""Shopping carts, items, promotions, flow navigation and one-click purchase."""

from .entities import CartData, ItemData, NavigationData
from .module import CartModule
from .repositories import CartRepository
from .services import CartService, ItemService, NavigationService, OneClickService, PromotionService

__all__ = [
    "CartData",
    "ItemData",
    "NavigationData",
    "CartModule",
    "CartRepository",
    "CartService",
    "ItemService",
    "NavigationService",
    "OneClickService",
    "PromotionService",
]
