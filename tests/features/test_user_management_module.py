"""Tests for user accounts, profiles and roles."""

import pytest

from clubify_checkout.core.exceptions import ConflictError, ValidationError
from clubify_checkout.features.user_management import UserManagementModule
from clubify_checkout.features.user_management.entities import UserData


class TestUserData:

    def test_permissions(self):
        user = UserData.from_api({"permissions": ["offers:*", "orders:read"]})

        assert user.has_permission("offers:delete")
        assert user.has_permission("orders:read")
        assert not user.has_permission("orders:write")

    def test_full_name(self):
        assert UserData.from_api({"first_name": "Ana", "last_name": "Souza", "name": "x"}).full_name() == "Ana Souza"
        assert UserData.from_api({"name": " Ana "}).full_name() == "Ana"


class TestUserManagementModule:

    @pytest.fixture
    def module(self, build_module):
        return build_module(UserManagementModule)

    @pytest.mark.asyncio
    async def test_create_user_defaults(self, module, api, events):
        api.add("POST", "/users", status=201, body={"id": "u1", "email": "ana@example.com", "name": "Ana"})

        user = await module.users().create({"email": " Ana@Example.com", "name": "Ana"})

        assert user.id == "u1"
        body = api.last_json("POST", "/users")
        assert body["email"] == "ana@example.com"
        assert body["status"] == "pending"
        assert body["roles"] == ["viewer"]
        assert body["tenant_id"] == "tenant-1"
        assert events.dispatched[-1].name == "User.Created"

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, module, api):
        api.add("GET", "/users/search/advanced", body={"data": [{"id": "u9", "email": "ana@example.com"}]})

        with pytest.raises(ConflictError):
            await module.users().create({"email": "ana@example.com", "name": "Ana"})

        assert api.count("POST", "/users") == 0

    @pytest.mark.asyncio
    async def test_list_by_role_is_cached(self, module, api):
        api.add("GET", "/users/by-role", body=[{"id": "u1", "roles": ["admin"]}])

        first = await module.users().list_by_role("admin")
        await module.users().list_by_role("admin")

        assert first.items[0].has_role("admin")
        assert api.count("GET", "/users/by-role") == 1

    @pytest.mark.asyncio
    async def test_update_profile(self, module, api, events):
        api.add("PATCH", "/users/u1/profile", body={"data": {"id": "u1", "timezone": "America/Sao_Paulo"}})

        user = await module.users().update_profile("u1", {"timezone": "America/Sao_Paulo"})

        assert user.timezone == "America/Sao_Paulo"
        assert events.dispatched[-1].name == "User.ProfileUpdated"
        assert events.dispatched[-1].payload["changes"] == ["timezone"]

    @pytest.mark.asyncio
    async def test_password_rules(self, module, api):
        with pytest.raises(ValidationError):
            await module.users().change_password("u1", "old-secret", "short")
        with pytest.raises(ValidationError):
            await module.users().change_password("u1", "same-secret", "same-secret")

        assert api.requests == []

    @pytest.mark.asyncio
    async def test_change_password(self, module, api, events):
        api.add("PATCH", "/users/u1/password", status=204)

        assert await module.users().change_password("u1", "old-secret", "new-secret")
        assert api.last_json("PATCH", "/users/u1/password") == {
            "current_password": "old-secret",
            "new_password": "new-secret",
        }
        assert events.dispatched[-1].name == "User.PasswordChanged"

    @pytest.mark.asyncio
    async def test_rejected_password_change(self, module, api, events):
        api.add("PATCH", "/users/u1/password", status=401, body={"message": "wrong password"})

        assert not await module.users().change_password("u1", "bad-secret", "new-secret")
        assert events.dispatched == []

    @pytest.mark.asyncio
    async def test_assign_role_refreshes_cached_roles(self, module, api, events):
        api.add("GET", "/users/u1/roles", body={"roles": ["viewer"]})
        api.add("POST", "/users/u1/roles", status=201, body={})

        assert await module.users().get_roles("u1") == ["viewer"]
        assert await module.users().assign_role("u1", "editor")
        await module.users().get_roles("u1")

        assert api.count("GET", "/users/u1/roles") == 2
        assert api.last_json("POST", "/users/u1/roles") == {"role": "editor"}
        assert events.dispatched[-1].payload == {"id": "u1", "role": "editor"}

    @pytest.mark.asyncio
    async def test_roles_from_item_list(self, module, api):
        api.add("GET", "/users/u1/roles", body={"data": [{"name": "admin"}, "support"]})

        assert await module.users().get_roles("u1") == ["admin", "support"]

    @pytest.mark.asyncio
    async def test_unknown_role_is_rejected(self, module, api):
        with pytest.raises(ValidationError):
            await module.users().assign_role("u1", "superuser")

        assert api.requests == []

    @pytest.mark.asyncio
    async def test_remove_role_failure(self, module):
        assert not await module.users().remove_role("u1", "admin")

    @pytest.mark.asyncio
    async def test_activate_and_suspend(self, module, api):
        api.add("PATCH", "/users/u1/status", body={})

        assert await module.users().activate("u1")
        assert await module.users().suspend("u1")
        assert api.last_json("PATCH", "/users/u1/status") == {"status": "suspended"}

    @pytest.mark.asyncio
    async def test_delete(self, module, api):
        api.add("DELETE", "/users/u1", status=204)
        api.add("DELETE", "/users/u2", status=200, body={"deleted": True})

        assert await module.users().delete("u1")
        assert not await module.users().delete("u2")
