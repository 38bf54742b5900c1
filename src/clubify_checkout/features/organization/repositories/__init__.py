"""Organization repositories."""

from .organization_repository import OrganizationRepository, TenantRepository

__all__ = ["OrganizationRepository", "TenantRepository"]
