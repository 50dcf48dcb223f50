"""Auth domain commands."""

from .change_role import ChangeRole, ChangeRoleHandler, ChangeRoleResult
from .update_permissions import (
    UpdatePermissions,
    UpdatePermissionsHandler,
    UpdatePermissionsResult,
)

__all__ = [
    "ChangeRole",
    "ChangeRoleHandler",
    "ChangeRoleResult",
    "UpdatePermissions",
    "UpdatePermissionsHandler",
    "UpdatePermissionsResult",
]
