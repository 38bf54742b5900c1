"""Product and flow repositories."""

from typing import Any, Dict, Mapping, Optional

from ....core.data import ResultPage, extract_entity
from ....core.repository import CacheAsideRepository
from ..entities import FlowData, ProductData


class ProductRepository(CacheAsideRepository[ProductData]):
    endpoint = "products"
    resource_name = "product"
    entity_name = "Product"
    entity_class = ProductData
    identifying_fields = ("name", "slug", "type")
    lookup_fields = ("slug",)

    async def find_by_slug(self, slug: str) -> Optional[ProductData]:
        return await self.find_by_lookup("slug", slug, f"{self.endpoint}/slug/{slug}")

    async def slug_exists(self, slug: str) -> bool:
        return await self.find_by_slug(slug) is not None

    async def find_by_category(self, category_id: str, limit: int = 100, offset: int = 0) -> ResultPage[ProductData]:
        return await self.find_by({"category_id": category_id}, limit=limit, offset=offset)

    async def update_stock(self, product_id: str, quantity: int, operation: str = "set") -> Dict[str, Any]:
        """Set, increase or decrease the stock level."""
        response = await self.http.patch(
            f"{self.endpoint}/{product_id}/stock",
            json_body={"quantity": quantity, "operation": operation},
        )
        await self.invalidate_cache(product_id)
        await self._emit("StockUpdated", {"id": product_id, "quantity": quantity, "operation": operation})
        return extract_entity(response.data) or {}


class FlowRepository(CacheAsideRepository[FlowData]):
    endpoint = "flows"
    resource_name = "flow"
    entity_name = "Flow"
    entity_class = FlowData
    identifying_fields = ("name", "slug", "offer_id")
    lookup_fields = ("slug",)

    async def find_by_slug(self, slug: str) -> Optional[FlowData]:
        return await self.find_by_lookup("slug", slug, f"{self.endpoint}/slug/{slug}")

    async def slug_exists(self, slug: str) -> bool:
        return await self.find_by_slug(slug) is not None

    async def find_by_offer(self, offer_id: str) -> ResultPage[FlowData]:
        return await self.find_by({"offer_id": offer_id})

    async def add_step(self, flow_id: str, step: Mapping[str, Any]) -> FlowData:
        response = await self.http.post(f"{self.endpoint}/{flow_id}/steps", json_body=dict(step))
        await self.invalidate_cache(flow_id)
        await self._emit("StepAdded", {"id": flow_id, "type": step.get("type")})
        return FlowData.from_api(extract_entity(response.data) or {"id": flow_id})
