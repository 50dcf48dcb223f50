"""Admin routes for role and permission management."""

from dishka import FromDishka
from dishka.integrations.fastapi import DishkaRoute
from fastapi import APIRouter, Query
from pydantic import BaseModel

from bastion.domain.auth.command.change_role import ChangeRole, ChangeRoleHandler
from bastion.domain.auth.command.update_permissions import (
    UpdatePermissions,
    UpdatePermissionsHandler,
)
from bastion.domain.auth.query.get_audit_log import (
    GetAuditLog,
    GetAuditLogHandler,
    GetAuditLogResult,
)
from bastion.domain.auth.query.list_permissions import (
    ListPermissions,
    ListPermissionsHandler,
    ListPermissionsResult,
)
from bastion.domain.auth.query.list_recent_changes import (
    ListRecentChanges,
    ListRecentChangesHandler,
)
from bastion.domain.auth.query.list_roles import ListRoles, ListRolesHandler, ListRolesResult
from bastion.domain.auth.query.list_users import (
    ListManageableUsers,
    ListManageableUsersHandler,
    ListManageableUsersResult,
    UserDTO,
)

router = APIRouter(prefix="/admin", tags=["Admin"], route_class=DishkaRoute)


class ChangeRoleRequest(BaseModel):
    """Request body for changing a user's role."""

    role: str


class UpdatePermissionsRequest(BaseModel):
    """Request body for replacing a user's custom permissions."""

    permissions: list[str]


@router.get("/roles", response_model=ListRolesResult)
async def list_roles(handler: FromDishka[ListRolesHandler]) -> ListRolesResult:
    """Every role with its level, defaults and whether the caller may assign it."""
    return await handler.run(ListRoles())


@router.get("/permissions", response_model=ListPermissionsResult)
async def list_permissions(handler: FromDishka[ListPermissionsHandler]) -> ListPermissionsResult:
    """The permission catalog, grouped by resource, with descriptions."""
    return await handler.run(ListPermissions())


@router.get("/users", response_model=ListManageableUsersResult)
async def list_users(
    handler: FromDishka[ListManageableUsersHandler],
) -> ListManageableUsersResult:
    """Users the caller outranks. Requires users.view."""
    return await handler.run(ListManageableUsers())


@router.patch("/users/{user_id}/role", response_model=UserDTO)
async def change_role(
    user_id: str,
    body: ChangeRoleRequest,
    handler: FromDishka[ChangeRoleHandler],
) -> UserDTO:
    """Change a user's role and reset their permissions to its defaults.

    Requires users.manage_roles.
    """
    result = await handler.run(ChangeRole(user_id=user_id, role=body.role))
    return result.user


@router.patch("/users/{user_id}/permissions", response_model=UserDTO)
async def update_permissions(
    user_id: str,
    body: UpdatePermissionsRequest,
    handler: FromDishka[UpdatePermissionsHandler],
) -> UserDTO:
    """Replace a user's custom permissions. Requires users.edit_permissions."""
    result = await handler.run(UpdatePermissions(user_id=user_id, permissions=body.permissions))
    return result.user


@router.get("/users/{user_id}/audit", response_model=GetAuditLogResult)
async def get_audit_log(
    user_id: str,
    handler: FromDishka[GetAuditLogHandler],
    limit: int = Query(default=50, ge=1, le=500),
) -> GetAuditLogResult:
    """RBAC changes made by or to a user, newest first. Requires users.view."""
    return await handler.run(GetAuditLog(user_id=user_id, limit=limit))


@router.get("/audit", response_model=GetAuditLogResult)
async def list_recent_changes(
    handler: FromDishka[ListRecentChangesHandler],
    limit: int = Query(default=100, ge=1, le=500),
) -> GetAuditLogResult:
    """Most recent RBAC changes across all users. Requires the top role."""
    return await handler.run(ListRecentChanges(limit=limit))
