"""Organization services."""

from .organization_service import OrganizationService, TenantService

__all__ = ["OrganizationService", "TenantService"]
