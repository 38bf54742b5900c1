"""Organization entities."""

from .organization import (
    ORGANIZATION_PLANS,
    ORGANIZATION_STATUSES,
    TENANT_STATUSES,
    OrganizationData,
    TenantData,
)

__all__ = [
    "ORGANIZATION_PLANS",
    "ORGANIZATION_STATUSES",
    "TENANT_STATUSES",
    "OrganizationData",
    "TenantData",
]
