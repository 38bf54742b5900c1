"""Organization module façade."""

from typing import Any, Mapping

from ...core.module import BaseModule
from .entities import OrganizationData
from .repositories import OrganizationRepository, TenantRepository
from .services import OrganizationService, TenantService


class OrganizationModule(BaseModule):
    name = "organization"

    def repository(self) -> OrganizationRepository:
        return self._component("repository", lambda: self._build_repository(OrganizationRepository))

    def tenant_repository(self) -> TenantRepository:
        return self._component("tenant_repository", lambda: self._build_repository(TenantRepository))

    def organizations(self) -> OrganizationService:
        return self._component(
            "organization_service", lambda: self._build_service(OrganizationService, self.repository())
        )

    def tenants(self) -> TenantService:
        return self._component("tenant_service", lambda: self._build_service(TenantService, self.tenant_repository()))

    async def setup_organization(self, data: Mapping[str, Any]) -> OrganizationData:
        return await self.organizations().setup(data)
