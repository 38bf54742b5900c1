"""Organization and tenant repositories."""

from typing import Optional

from ....core.data import ResultPage
from ....core.repository import CacheAsideRepository
from ..entities import OrganizationData, TenantData


class OrganizationRepository(CacheAsideRepository[OrganizationData]):
    endpoint = "organizations"
    resource_name = "organization"
    entity_name = "Organization"
    entity_class = OrganizationData
    identifying_fields = ("name", "slug", "plan")
    lookup_fields = ("slug", "domain")

    async def find_by_slug(self, slug: str) -> Optional[OrganizationData]:
        return await self.find_by_lookup("slug", slug, f"{self.endpoint}/slug/{slug}")

    async def find_by_domain(self, domain: str) -> Optional[OrganizationData]:
        domain = domain.strip().lower()
        return await self.find_by_lookup("domain", domain, f"{self.endpoint}/domain/{domain}")

    async def slug_exists(self, slug: str) -> bool:
        return await self.find_by_slug(slug) is not None


class TenantRepository(CacheAsideRepository[TenantData]):
    endpoint = "tenants"
    resource_name = "tenant"
    entity_name = "Tenant"
    entity_class = TenantData
    identifying_fields = ("name", "slug", "organization_id")
    lookup_fields = ("slug", "domain")

    async def find_by_slug(self, slug: str) -> Optional[TenantData]:
        return await self.find_by_lookup("slug", slug, f"{self.endpoint}/slug/{slug}")

    async def find_by_domain(self, domain: str) -> Optional[TenantData]:
        domain = domain.strip().lower()
        return await self.find_by_lookup("domain", domain, f"{self.endpoint}/domain/{domain}")

    async def slug_exists(self, slug: str) -> bool:
        return await self.find_by_slug(slug) is not None

    async def find_by_organization(self, organization_id: str, limit: int = 100, offset: int = 0) -> ResultPage[TenantData]:
        return await self.find_by({"organization_id": organization_id}, limit=limit, offset=offset)
