"""Order repository."""

from typing import Any, Dict, Mapping, Optional

from ....core.data import ResultPage, extract_entity
from ....core.repository import CacheAsideRepository, hash_params
from ..entities import OrderData


class OrderRepository(CacheAsideRepository[OrderData]):
    endpoint = "orders"
    resource_name = "order"
    entity_name = "Order"
    entity_class = OrderData
    identifying_fields = ("customer_id", "total_amount", "status")

    async def find_by_customer(self, customer_id: str, limit: int = 50, offset: int = 0) -> ResultPage[OrderData]:
        return await self.find_by({"customer_id": customer_id}, limit=limit, offset=offset)

    async def cancel(self, order_id: str, reason: Optional[str] = None) -> OrderData:
        response = await self.http.post(f"{self.endpoint}/{order_id}/cancel", json_body={"reason": reason})
        await self.invalidate_cache(order_id)
        await self._emit("Cancelled", {"id": order_id, "reason": reason})
        return OrderData.from_api(extract_entity(response.data) or {"id": order_id, "status": "cancelled"})

    async def get_statistics(self, filters: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        params = dict(filters or {})
        data = await self._cached_fetch(
            self.cache_key("stats", hash_params(params)),
            self.settings.cache_ttl_stats,
            f"{self.endpoint}/statistics",
            params=params,
        )
        return data if isinstance(data, dict) else {}
