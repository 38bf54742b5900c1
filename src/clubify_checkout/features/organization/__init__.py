"""Organizations and their tenants."""

from .entities import OrganizationData, TenantData
from .module import OrganizationModule
from .repositories import OrganizationRepository, TenantRepository
from .services import OrganizationService, TenantService

__all__ = [
    "OrganizationData",
    "TenantData",
    "OrganizationModule",
    "OrganizationRepository",
    "TenantRepository",
    "OrganizationService",
    "TenantService",
]
