"""Organization users and their roles."""

from .entities import UserData
from .module import UserManagementModule
from .repositories import UserRepository
from .services import UserService

__all__ = ["UserData", "UserManagementModule", "UserRepository", "UserService"]
