"""Order entities."""

from .order import CANCELLABLE_STATUSES, ORDER_STATUSES, PAYMENT_STATUSES, OrderData

__all__ = ["CANCELLABLE_STATUSES", "ORDER_STATUSES", "PAYMENT_STATUSES", "OrderData"]
