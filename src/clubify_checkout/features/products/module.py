"""Products module façade."""

from typing import Any, Mapping

from ...core.module import BaseModule
from .entities import FlowData, ProductData
from .repositories import FlowRepository, ProductRepository
from .services import FlowService, ProductService


class ProductsModule(BaseModule):
    name = "products"

    def repository(self) -> ProductRepository:
        return self._component("repository", lambda: self._build_repository(ProductRepository))

    def flow_repository(self) -> FlowRepository:
        return self._component("flow_repository", lambda: self._build_repository(FlowRepository))

    def products(self) -> ProductService:
        return self._component("product_service", lambda: self._build_service(ProductService, self.repository()))

    def flows(self) -> FlowService:
        return self._component("flow_service", lambda: self._build_service(FlowService, self.flow_repository()))

    async def create_product(self, data: Mapping[str, Any]) -> ProductData:
        return await self.products().create(data)

    async def create_flow(self, data: Mapping[str, Any]) -> FlowData:
        return await self.flows().create(data)
