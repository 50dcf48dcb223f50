"""Tests for auth command and query handlers."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from bastion.domain.auth.command.change_role import ChangeRole, ChangeRoleHandler
from bastion.domain.auth.command.update_permissions import (
    UpdatePermissions,
    UpdatePermissionsHandler,
)
from bastion.domain.auth.model.principal import Principal
from bastion.domain.auth.model.role import Role
from bastion.domain.auth.model.user import UserRecord
from bastion.domain.auth.model.value import UserId
from bastion.domain.auth.query.get_current_user import GetCurrentUser, GetCurrentUserHandler
from bastion.domain.auth.query.list_permissions import ListPermissions, ListPermissionsHandler
from bastion.domain.auth.query.list_roles import ListRoles, ListRolesHandler
from bastion.domain.shared.authorization.catalog import DEFAULT_CATALOG
from bastion.domain.shared.authorization.guard import AuthContext
from bastion.domain.shared.authorization.hierarchy import DEFAULT_HIERARCHY
from bastion.domain.shared.authorization.resolver import PermissionResolver
from bastion.domain.shared.error import AuthorizationError, ValidationError


def make_auth(role: Role, *custom: str, user_id: str = "caller") -> AuthContext:
    principal = Principal(user_id=UserId(user_id), role=role, custom_permissions=tuple(custom))
    return AuthContext(principal=principal, permissions=PermissionResolver().resolve(principal))


class TestChangeRoleHandler:
    @pytest.mark.asyncio
    async def test_passes_parsed_role_to_service(self) -> None:
        service = AsyncMock()
        service.change_role.return_value = UserRecord(
            id=UserId("target"), email="t@example.com", role=Role.STAFF
        )
        auth = make_auth(Role.SUPER_ADMIN)
        handler = ChangeRoleHandler(auth=auth, authorization_service=service)

        result = await handler.run(ChangeRole(user_id="target", role="staff"))

        service.change_role.assert_awaited_once_with(
            actor=auth.principal, user_id=UserId("target"), role=Role.STAFF
        )
        assert result.user.role == "STAFF"
        assert result.user.level == 20

    @pytest.mark.asyncio
    async def test_unknown_role_is_validation_error(self) -> None:
        handler = ChangeRoleHandler(
            auth=make_auth(Role.SUPER_ADMIN), authorization_service=AsyncMock()
        )
        with pytest.raises(ValidationError) as exc_info:
            await handler.run(ChangeRole(user_id="target", role="owner"))
        assert exc_info.value.field == "role"

    @pytest.mark.asyncio
    async def test_admin_lacks_manage_roles_by_default(self) -> None:
        service = AsyncMock()
        handler = ChangeRoleHandler(auth=make_auth(Role.ADMIN), authorization_service=service)
        with pytest.raises(AuthorizationError) as exc_info:
            await handler.run(ChangeRole(user_id="target", role="VIEWER"))
        assert exc_info.value.missing_permissions == ("users.manage_roles",)
        service.change_role.assert_not_called()

    @pytest.mark.asyncio
    async def test_custom_grant_enables_manage_roles(self) -> None:
        service = AsyncMock()
        service.change_role.return_value = UserRecord(
            id=UserId("target"), email="t@example.com", role=Role.VIEWER
        )
        handler = ChangeRoleHandler(
            auth=make_auth(Role.ADMIN, "users.*"), authorization_service=service
        )
        await handler.run(ChangeRole(user_id="target", role="VIEWER"))
        service.change_role.assert_awaited_once()


class TestUpdatePermissionsHandler:
    @pytest.mark.asyncio
    async def test_requires_edit_permissions(self) -> None:
        handler = UpdatePermissionsHandler(
            auth=make_auth(Role.STAFF), authorization_service=AsyncMock()
        )
        with pytest.raises(AuthorizationError) as exc_info:
            await handler.run(UpdatePermissions(user_id="x", permissions=[]))
        assert exc_info.value.code == "access_denied"

    @pytest.mark.asyncio
    async def test_delegates_to_service(self) -> None:
        service = AsyncMock()
        service.update_permissions.return_value = UserRecord(
            id=UserId("x"), email="x@example.com", permissions=["media.view"]
        )
        handler = UpdatePermissionsHandler(
            auth=make_auth(Role.SUPER_ADMIN), authorization_service=service
        )
        result = await handler.run(UpdatePermissions(user_id="x", permissions=["media.view"]))
        assert result.user.permissions == ["media.view"]


class TestQueryHandlers:
    @pytest.mark.asyncio
    async def test_current_user_reports_effective_and_expanded(self) -> None:
        handler = GetCurrentUserHandler(
            auth=make_auth(Role.VIEWER, "media.*"), catalog=DEFAULT_CATALOG
        )
        result = await handler.run(GetCurrentUser())
        assert result.role == "VIEWER"
        assert result.has_custom_permissions
        assert result.permissions == ["media.*"]
        assert set(result.expanded_permissions) == {"media.view", "media.upload", "media.delete"}

    @pytest.mark.asyncio
    async def test_list_roles(self) -> None:
        service = MagicMock()
        service.role_catalog.return_value = [
            (DEFAULT_HIERARCHY.describe(Role.ADMIN), False),
            (DEFAULT_HIERARCHY.describe(Role.VIEWER), True),
        ]
        handler = ListRolesHandler(auth=make_auth(Role.STAFF), authorization_service=service)
        result = await handler.run(ListRoles())
        assert [(r.name, r.assignable) for r in result.roles] == [
            ("ADMIN", False),
            ("VIEWER", True),
        ]

    @pytest.mark.asyncio
    async def test_list_permissions_is_public_and_grouped(self) -> None:
        handler = ListPermissionsHandler(catalog=DEFAULT_CATALOG)
        result = await handler.run(ListPermissions())
        by_resource = {r.resource: r.permissions for r in result.resources}
        assert by_resource["media"]["media.upload"] == "Upload new media files"
        assert "media.*" in by_resource["media"]
        assert "products.view" not in by_resource["media"]
