"""Orders module façade."""

from ...core.module import BaseModule
from .repositories import OrderRepository
from .services import OrderService


class OrdersModule(BaseModule):
    name = "orders"

    def repository(self) -> OrderRepository:
        return self._component("repository", lambda: self._build_repository(OrderRepository))

    def orders(self) -> OrderService:
        return self._component("order_service", lambda: self._build_service(OrderService, self.repository()))
