"""Orders placed through the checkout."""

from .entities import OrderData
from .module import OrdersModule
from .repositories import OrderRepository
from .services import OrderService

__all__ = ["OrderData", "OrdersModule", "OrderRepository", "OrderService"]
