"""Order service."""

from typing import Any, Dict, Mapping, Optional

from ....core.data import ResultPage
from ....core.exceptions import ConflictError, ValidationError
from ....core.service import RepositoryService
from ..entities import ORDER_STATUSES, OrderData
from ..repositories import OrderRepository


class OrderService(RepositoryService):
    service_name = "order"
    repository: OrderRepository

    async def get(self, order_id: str) -> Optional[OrderData]:
        return await self.repository.find(order_id)

    async def list(self, filters: Optional[Mapping[str, Any]] = None, limit: int = 50, offset: int = 0) -> ResultPage[OrderData]:
        return await self.repository.search(filters, {"created_at": "desc"}, limit=limit, offset=offset)

    async def list_by_customer(self, customer_id: str, limit: int = 50, offset: int = 0) -> ResultPage[OrderData]:
        return await self.repository.find_by_customer(customer_id, limit=limit, offset=offset)

    async def update_status(self, order_id: str, status: str) -> bool:
        if status not in ORDER_STATUSES:
            raise ValidationError(
                f"Invalid order status: {status}",
                errors={"status": [f"must be one of: {', '.join(ORDER_STATUSES)}"]},
            )
        return await self.repository.update_status(order_id, status)

    async def cancel(self, order_id: str, reason: Optional[str] = None) -> OrderData:
        order = await self.repository.find(order_id)
        if order is None:
            raise ValidationError(f"Order {order_id} not found", errors={"order_id": ["order does not exist"]})
        if not order.can_be_cancelled():
            raise ConflictError(
                f"Order {order_id} cannot be cancelled in status {order.status}",
                details={"order_id": order_id, "status": order.status},
            )
        return await self.execute_with_metrics("cancel", self.repository.cancel, order_id, reason)

    async def get_statistics(self, filters: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return await self.repository.get_statistics(filters)
