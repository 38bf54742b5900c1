"""Organization and tenant records."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ....core.data import BaseData

ORGANIZATION_STATUSES = ["active", "inactive", "suspended", "pending"]
ORGANIZATION_PLANS = ["free", "starter", "professional", "enterprise"]
TENANT_STATUSES = ["active", "inactive", "suspended", "pending"]


@dataclass
class OrganizationData(BaseData):
    """A merchant account; owns tenants, offers and users."""

    RULES = {
        "name": ["required", "string", ["min", 2], ["max", 255]],
        "slug": ["string", ["max", 255]],
        "domain": ["string", ["max", 255]],
        "description": ["string", ["max", 1000]],
        "email": ["email"],
        "phone": ["string", ["max", 20]],
        "status": [["in", ORGANIZATION_STATUSES]],
        "plan": [["in", ORGANIZATION_PLANS]],
        "currency": ["string", ["min", 3], ["max", 3]],
        "timezone": ["string"],
        "language": ["string", ["max", 10]],
        "settings": ["array"],
        "features": ["array"],
        "limits": ["array"],
    }

    name: Optional[str] = None
    slug: Optional[str] = None
    domain: Optional[str] = None
    description: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[str] = None
    plan: Optional[str] = None
    currency: Optional[str] = None
    timezone: Optional[str] = None
    language: Optional[str] = None
    settings: Optional[Dict[str, Any]] = None
    features: Optional[List[str]] = None
    limits: Optional[Dict[str, Any]] = None

    def is_active(self) -> bool:
        return self.status == "active"

    def has_feature(self, feature: str) -> bool:
        return feature in (self.features or [])

    def get_limit(self, name: str, default: Any = None) -> Any:
        return (self.limits or {}).get(name, default)


@dataclass
class TenantData(BaseData):
    RULES = {
        "organization_id": ["required", "string"],
        "name": ["required", "string", ["min", 2], ["max", 100]],
        "slug": ["string", ["max", 100]],
        "subdomain": ["string", ["min", 3], ["max", 63]],
        "domain": ["string", ["max", 255]],
        "status": [["in", TENANT_STATUSES]],
        "settings": ["array"],
        "resource_limits": ["array"],
        "usage_stats": ["array"],
        "configuration": ["array"],
    }

    organization_id: Optional[str] = None
    name: Optional[str] = None
    slug: Optional[str] = None
    subdomain: Optional[str] = None
    domain: Optional[str] = None
    status: Optional[str] = None
    settings: Optional[Dict[str, Any]] = None
    resource_limits: Optional[Dict[str, Any]] = None
    usage_stats: Optional[Dict[str, Any]] = None
    configuration: Optional[Dict[str, Any]] = None

    def is_active(self) -> bool:
        return self.status == "active"

    def usage_ratio(self, resource: str) -> float:
        """Fraction of a resource limit already used; 0 when unlimited."""
        limit = (self.resource_limits or {}).get(resource)
        used = (self.usage_stats or {}).get(resource, 0)
        if not limit:
            return 0.0
        return round(float(used) / float(limit), 4)

    def is_over_limit(self, resource: str) -> bool:
        return self.usage_ratio(resource) >= 1.0
