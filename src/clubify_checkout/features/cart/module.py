"""Cart module façade."""

from typing import Any, Mapping

from ...core.module import BaseModule
from .entities import CartData
from .repositories import CartRepository
from .services import CartService, ItemService, NavigationService, OneClickService, PromotionService


class CartModule(BaseModule):
    name = "cart"

    def repository(self) -> CartRepository:
        return self._component("repository", lambda: self._build_repository(CartRepository))

    def carts(self) -> CartService:
        return self._component("cart_service", lambda: self._build_service(CartService, self.repository()))

    def items(self) -> ItemService:
        return self._component("item_service", lambda: self._build_service(ItemService, self.repository()))

    def navigation(self) -> NavigationService:
        return self._component("navigation_service", lambda: self._build_service(NavigationService, self.repository()))

    def promotions(self) -> PromotionService:
        return self._component("promotion_service", lambda: self._build_service(PromotionService, self.repository()))

    def one_click(self) -> OneClickService:
        return self._component("one_click_service", lambda: self._build_service(OneClickService, self.repository()))

    async def add_to_cart(self, session_id: str, item: Mapping[str, Any]) -> CartData:
        """Add an item to the session's cart, creating the cart when needed."""
        cart = await self.carts().get_or_create(session_id)
        return await self.items().add(cart.id, item)
