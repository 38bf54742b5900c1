"""User record."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ....core.data import BaseData

USER_STATUSES = ["active", "inactive", "suspended", "pending"]
USER_ROLES = ["owner", "admin", "manager", "editor", "viewer", "support"]


@dataclass
class UserData(BaseData):
    RULES = {
        "email": ["required", "email", ["max", 255]],
        "name": ["required", "string", ["min", 2], ["max", 100]],
        "first_name": ["string", ["max", 50]],
        "last_name": ["string", ["max", 50]],
        "status": [["in", USER_STATUSES]],
        "roles": ["list"],
        "permissions": ["list"],
        "tenant_id": ["string"],
        "organization_id": ["string"],
        "mfa_enabled": ["boolean"],
        "timezone": ["string"],
        "language": ["string", ["max", 10]],
        "last_login_at": ["date"],
        "metadata": ["array"],
    }

    email: Optional[str] = None
    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    status: Optional[str] = None
    roles: Optional[List[str]] = None
    permissions: Optional[List[str]] = None
    tenant_id: Optional[str] = None
    organization_id: Optional[str] = None
    mfa_enabled: Optional[bool] = None
    timezone: Optional[str] = None
    language: Optional[str] = None
    last_login_at: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    def full_name(self) -> str:
        parts = [self.first_name, self.last_name]
        if any(parts):
            return " ".join(part.strip() for part in parts if part)
        return (self.name or "").strip()

    def has_role(self, role: str) -> bool:
        return role in (self.roles or [])

    def has_permission(self, permission: str) -> bool:
        """Exact match, or a ``resource:*`` wildcard grant."""
        granted = self.permissions or []
        if permission in granted:
            return True
        resource = permission.split(":", 1)[0]
        return f"{resource}:*" in granted

    def is_active(self) -> bool:
        return self.status == "active"
