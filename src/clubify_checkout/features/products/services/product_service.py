"""Product and flow services."""

import logging
from typing import Any, Dict, Mapping, Optional

from ....core.exceptions import ValidationError
from ....core.service import RepositoryService
from ..entities import FLOW_STEP_TYPES, FlowData, ProductData
from ..repositories import FlowRepository, ProductRepository

logger = logging.getLogger(__name__)


class ProductService(RepositoryService):
    service_name = "product"
    repository: ProductRepository

    async def create(self, data: Mapping[str, Any]) -> ProductData:
        return await self.execute_with_metrics("create", self._create, data)

    async def _create(self, data: Mapping[str, Any]) -> ProductData:
        product = ProductData.from_dict(data)
        slug = await self.unique_slug(product.slug or product.name, self.repository.slug_exists)
        payload = {**product.to_payload(), "slug": slug}
        payload.setdefault("status", "draft")
        payload.setdefault("currency", "BRL")
        if self.settings.organization_id:
            payload.setdefault("organization_id", self.settings.organization_id)
        return await self.repository.create(payload)

    async def get(self, product_id: str) -> Optional[ProductData]:
        return await self.repository.find(product_id)

    async def get_by_slug(self, slug: str) -> Optional[ProductData]:
        return await self.repository.find_by_slug(slug)

    async def update(self, product_id: str, changes: Mapping[str, Any]) -> ProductData:
        ProductData.validate_patch(changes)
        return await self.execute_with_metrics("update", self.repository.update, product_id, dict(changes))

    async def delete(self, product_id: str) -> bool:
        return await self.repository.delete(product_id)

    async def duplicate(self, product_id: str, name: Optional[str] = None) -> Optional[ProductData]:
        """Copy a product as a draft under a fresh slug."""
        source = await self.repository.find(product_id)
        if source is None:
            return None
        copy = {k: v for k, v in source.to_payload().items() if k not in ("slug", "sku")}
        copy["name"] = name or f"{source.name} (copy)"
        copy["status"] = "draft"
        return await self.create(copy)

    async def adjust_stock(self, product_id: str, delta: int) -> Dict[str, Any]:
        if delta == 0:
            raise ValidationError("Stock adjustment cannot be zero", errors={"quantity": ["must not be zero"]})
        operation = "increase" if delta > 0 else "decrease"
        return await self.repository.update_stock(product_id, abs(delta), operation)

    async def set_stock(self, product_id: str, quantity: int) -> Dict[str, Any]:
        if quantity < 0:
            raise ValidationError("Stock cannot be negative", errors={"quantity": ["must be at least 0"]})
        return await self.repository.update_stock(product_id, quantity, "set")


class FlowService(RepositoryService):
    """Checkout flows with unique slugs."""

    service_name = "flow"
    repository: FlowRepository

    async def create(self, data: Mapping[str, Any]) -> FlowData:
        flow = FlowData.from_dict(data)
        slug = await self.unique_slug(flow.slug or flow.name, self.repository.slug_exists)
        payload = {**flow.to_payload(), "slug": slug}
        payload.setdefault("status", "draft")
        payload.setdefault("steps", [])
        return await self.execute_with_metrics("create", self.repository.create, payload)

    async def get_by_slug(self, slug: str) -> Optional[FlowData]:
        return await self.repository.find_by_slug(slug)

    async def add_step(self, flow_id: str, step: Mapping[str, Any]) -> FlowData:
        if step.get("type") not in FLOW_STEP_TYPES:
            raise ValidationError(
                f"Invalid flow step type: {step.get('type')}",
                errors={"type": [f"must be one of: {', '.join(FLOW_STEP_TYPES)}"]},
            )
        return await self.repository.add_step(flow_id, step)
