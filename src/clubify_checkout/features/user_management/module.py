"""User management module façade."""

from ...core.module import BaseModule
from .repositories import UserRepository
from .services import UserService


class UserManagementModule(BaseModule):
    name = "user_management"

    def repository(self) -> UserRepository:
        return self._component("repository", lambda: self._build_repository(UserRepository))

    def users(self) -> UserService:
        return self._component("user_service", lambda: self._build_service(UserService, self.repository()))
