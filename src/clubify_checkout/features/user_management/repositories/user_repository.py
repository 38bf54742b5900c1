"""User repository."""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ....core.data import ResultPage, extract_entity, extract_items
from ....core.exceptions import HttpError
from ....core.repository import CacheAsideRepository, hash_params
from ..entities import UserData

logger = logging.getLogger(__name__)


class UserRepository(CacheAsideRepository[UserData]):
    endpoint = "users"
    resource_name = "user"
    entity_name = "User"
    entity_class = UserData
    identifying_fields = ("email", "name")
    lookup_fields = ("email",)

    async def find_by_email(self, email: str) -> Optional[UserData]:
        email = email.strip().lower()

        async def load():
            data = await self._fetch_raw(f"{self.endpoint}/search/advanced", params={"email": email})
            rows = extract_items(data)
            return rows[0] if rows else None

        data = await self._remember_lookup(self.lookup_key("email", email), load)
        return self._to_entity(data)

    async def email_exists(self, email: str) -> bool:
        return await self.find_by_email(email) is not None

    async def find_by_role(self, role: str, limit: int = 100, offset: int = 0) -> ResultPage[UserData]:
        params = {"role": role, "limit": limit, "offset": offset}
        data = await self._cached_fetch(
            self.cache_key("by", hash_params(params)),
            self.list_ttl,
            f"{self.endpoint}/by-role",
            params=params,
        )
        return ResultPage.from_api(data, UserData, limit=limit, offset=offset)

    async def update_profile(self, user_id: str, profile: Mapping[str, Any]) -> UserData:
        response = await self.http.patch(f"{self.endpoint}/{user_id}/profile", json_body=dict(profile))
        await self.invalidate_cache(user_id)
        await self._emit("ProfileUpdated", {"id": user_id, "changes": sorted(profile.keys())})
        return UserData.from_api(extract_entity(response.data) or {**profile, "id": user_id})

    async def change_password(self, user_id: str, current_password: str, new_password: str) -> bool:
        try:
            await self.http.patch(
                f"{self.endpoint}/{user_id}/password",
                json_body={"current_password": current_password, "new_password": new_password},
            )
        except HttpError as e:
            logger.error(f"Failed to change password for user {user_id}: {e.message}")
            return False
        await self._emit("PasswordChanged", {"id": user_id})
        return True

    async def get_roles(self, user_id: str) -> List[str]:
        data = await self._cached_fetch(self.cache_key(user_id, "roles"), self.find_ttl, f"{self.endpoint}/{user_id}/roles")
        if isinstance(data, dict) and isinstance(data.get("roles"), list):
            return list(data["roles"])
        return [row if isinstance(row, str) else row.get("name") for row in extract_items(data)]

    async def assign_role(self, user_id: str, role: str) -> bool:
        try:
            await self.http.post(f"{self.endpoint}/{user_id}/roles", json_body={"role": role})
        except HttpError as e:
            logger.error(f"Failed to assign role {role} to user {user_id}: {e.message}")
            return False
        await self.invalidate_cache(user_id)
        await self._emit("RoleAssigned", {"id": user_id, "role": role})
        return True

    async def remove_role(self, user_id: str, role: str) -> bool:
        try:
            await self.http.delete(f"{self.endpoint}/{user_id}/roles/{role}")
        except HttpError as e:
            logger.error(f"Failed to remove role {role} from user {user_id}: {e.message}")
            return False
        await self.invalidate_cache(user_id)
        await self._emit("RoleRemoved", {"id": user_id, "role": role})
        return True

    async def get_stats(self, filters: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        params = dict(filters or {})
        data = await self._cached_fetch(
            self.cache_key("stats", hash_params(params)),
            self.settings.cache_ttl_stats,
            f"{self.endpoint}/stats",
            params=params,
        )
        return data if isinstance(data, dict) else {}
