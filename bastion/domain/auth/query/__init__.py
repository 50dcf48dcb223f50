"""Auth domain queries."""

from .get_audit_log import GetAuditLog, GetAuditLogHandler, GetAuditLogResult
from .get_current_user import GetCurrentUser, GetCurrentUserHandler, GetCurrentUserResult
from .list_permissions import ListPermissions, ListPermissionsHandler, ListPermissionsResult
from .list_recent_changes import ListRecentChanges, ListRecentChangesHandler
from .list_roles import ListRoles, ListRolesHandler, ListRolesResult
from .list_users import (
    ListManageableUsers,
    ListManageableUsersHandler,
    ListManageableUsersResult,
    UserDTO,
)

__all__ = [
    "GetAuditLog",
    "GetAuditLogHandler",
    "GetAuditLogResult",
    "GetCurrentUser",
    "GetCurrentUserHandler",
    "GetCurrentUserResult",
    "ListManageableUsers",
    "ListManageableUsersHandler",
    "ListManageableUsersResult",
    "ListPermissions",
    "ListPermissionsHandler",
    "ListPermissionsResult",
    "ListRecentChanges",
    "ListRecentChangesHandler",
    "ListRoles",
    "ListRolesHandler",
    "ListRolesResult",
    "UserDTO",
]
