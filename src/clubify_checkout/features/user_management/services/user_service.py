"""User service."""

from typing import Any, Dict, List, Mapping, Optional

from ....core.data import ResultPage
from ....core.exceptions import ConflictError, ValidationError
from ....core.service import RepositoryService
from ..entities import USER_ROLES, UserData
from ..repositories import UserRepository

MIN_PASSWORD_LENGTH = 8


class UserService(RepositoryService):
    """Users of an organization: accounts, profiles and roles."""

    service_name = "user"
    repository: UserRepository

    async def create(self, data: Mapping[str, Any]) -> UserData:
        payload = dict(data)
        if isinstance(payload.get("email"), str):
            payload["email"] = payload["email"].strip().lower()
        if self.settings.tenant_id:
            payload.setdefault("tenant_id", self.settings.tenant_id)
        user = UserData.from_dict({"status": "pending", "roles": ["viewer"], **payload})
        if await self.repository.email_exists(user.email):
            raise ConflictError(f"User with email {user.email} already exists", details={"email": user.email})
        return await self.execute_with_metrics("create", self.repository.create, user)

    async def get(self, user_id: str) -> Optional[UserData]:
        return await self.repository.find(user_id)

    async def get_by_email(self, email: str) -> Optional[UserData]:
        return await self.repository.find_by_email(email)

    async def list_by_role(self, role: str, limit: int = 100, offset: int = 0) -> ResultPage[UserData]:
        return await self.repository.find_by_role(role, limit=limit, offset=offset)

    async def update(self, user_id: str, changes: Mapping[str, Any]) -> UserData:
        UserData.validate_patch(changes)
        return await self.execute_with_metrics("update", self.repository.update, user_id, dict(changes))

    async def update_profile(self, user_id: str, profile: Mapping[str, Any]) -> UserData:
        UserData.validate_patch(profile)
        return await self.execute_with_metrics("update_profile", self.repository.update_profile, user_id, profile)

    async def change_password(self, user_id: str, current_password: str, new_password: str) -> bool:
        if len(new_password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                "Password too short",
                errors={"new_password": [f"must be at least {MIN_PASSWORD_LENGTH} characters"]},
            )
        if new_password == current_password:
            raise ValidationError(
                "New password must differ from the current one",
                errors={"new_password": ["must differ from the current password"]},
            )
        return await self.repository.change_password(user_id, current_password, new_password)

    async def assign_role(self, user_id: str, role: str) -> bool:
        self._check_role(role)
        return await self.repository.assign_role(user_id, role)

    async def remove_role(self, user_id: str, role: str) -> bool:
        self._check_role(role)
        return await self.repository.remove_role(user_id, role)

    async def get_roles(self, user_id: str) -> List[str]:
        return await self.repository.get_roles(user_id)

    async def activate(self, user_id: str) -> bool:
        return await self.repository.update_status(user_id, "active")

    async def suspend(self, user_id: str) -> bool:
        return await self.repository.update_status(user_id, "suspended")

    async def delete(self, user_id: str) -> bool:
        return await self.execute_with_metrics("delete", self.repository.delete, user_id)

    async def get_stats(self, filters: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return await self.repository.get_stats(filters)

    @staticmethod
    def _check_role(role: str) -> None:
        if role not in USER_ROLES:
            raise ValidationError(
                f"Unknown role: {role}",
                errors={"role": [f"must be one of: {', '.join(USER_ROLES)}"]},
            )
