"""User management entities."""

from .user import USER_ROLES, USER_STATUSES, UserData

__all__ = ["USER_ROLES", "USER_STATUSES", "UserData"]
