"""Organization and tenant services."""

import logging
from typing import Any, Dict, Mapping, Optional

from ....core.data import ResultPage
from ....core.exceptions import ValidationError
from ....core.service import RepositoryService
from ..entities import OrganizationData, TenantData
from ..repositories import OrganizationRepository, TenantRepository

logger = logging.getLogger(__name__)


class OrganizationService(RepositoryService):
    service_name = "organization"
    repository: OrganizationRepository

    async def setup(self, data: Mapping[str, Any]) -> OrganizationData:
        """Create an organization under a free slug, defaulting to the free plan."""
        return await self.execute_with_metrics("setup", self._setup, data)

    async def _setup(self, data: Mapping[str, Any]) -> OrganizationData:
        organization = OrganizationData.from_dict({"status": "active", "plan": "free", **data})
        slug = await self.unique_slug(organization.slug or organization.name, self.repository.slug_exists)
        payload = {**organization.to_payload(), "slug": slug}
        if organization.domain:
            payload["domain"] = organization.domain.strip().lower()

        created = await self.repository.create(payload)
        await self.dispatch("Organization.SetupCompleted", {"id": created.id, "slug": slug})
        logger.info(f"Organization set up: {created.id} ({slug})")
        return created

    async def get(self, organization_id: str) -> Optional[OrganizationData]:
        return await self.repository.find(organization_id)

    async def get_by_slug(self, slug: str) -> Optional[OrganizationData]:
        return await self.repository.find_by_slug(slug)

    async def get_by_domain(self, domain: str) -> Optional[OrganizationData]:
        return await self.repository.find_by_domain(domain)

    async def get_current(self) -> Optional[OrganizationData]:
        """The organization configured on the client, if any."""
        if not self.settings.organization_id:
            return None
        return await self.repository.find(self.settings.organization_id)

    async def update(self, organization_id: str, changes: Mapping[str, Any]) -> OrganizationData:
        OrganizationData.validate_patch(changes)
        return await self.execute_with_metrics("update", self.repository.update, organization_id, dict(changes))

    async def change_plan(self, organization_id: str, plan: str) -> OrganizationData:
        return await self.update(organization_id, {"plan": plan})


class TenantService(RepositoryService):
    service_name = "tenant"
    repository: TenantRepository

    async def create(self, data: Mapping[str, Any]) -> TenantData:
        payload = dict(data)
        if self.settings.organization_id:
            payload.setdefault("organization_id", self.settings.organization_id)
        tenant = TenantData.from_dict({"status": "active", **payload})
        slug = await self.unique_slug(tenant.slug or tenant.name, self.repository.slug_exists)
        return await self.execute_with_metrics(
            "create", self.repository.create, {**tenant.to_payload(), "slug": slug}
        )

    async def get(self, tenant_id: str) -> Optional[TenantData]:
        return await self.repository.find(tenant_id)

    async def get_by_slug(self, slug: str) -> Optional[TenantData]:
        return await self.repository.find_by_slug(slug)

    async def get_by_domain(self, domain: str) -> Optional[TenantData]:
        return await self.repository.find_by_domain(domain)

    async def list_for_organization(self, organization_id: str, limit: int = 100, offset: int = 0) -> ResultPage[TenantData]:
        return await self.repository.find_by_organization(organization_id, limit=limit, offset=offset)

    async def update(self, tenant_id: str, changes: Mapping[str, Any]) -> TenantData:
        TenantData.validate_patch(changes)
        return await self.execute_with_metrics("update", self.repository.update, tenant_id, dict(changes))

    async def suspend(self, tenant_id: str, reason: Optional[str] = None) -> bool:
        suspended = await self.repository.update_status(tenant_id, "suspended")
        if suspended:
            await self.dispatch("Tenant.Suspended", {"id": tenant_id, "reason": reason})
        return suspended

    async def activate(self, tenant_id: str) -> bool:
        return await self.repository.update_status(tenant_id, "active")

    async def check_limits(self, tenant_id: str) -> Dict[str, float]:
        """Usage ratio per limited resource."""
        tenant = await self.repository.find(tenant_id)
        if tenant is None:
            raise ValidationError(f"Tenant {tenant_id} not found", errors={"tenant_id": ["tenant does not exist"]})
        return {name: tenant.usage_ratio(name) for name in (tenant.resource_limits or {})}
