"""Authorization engine: catalog, hierarchy, resolver, checks, management rules and guard."""

from .catalog import DEFAULT_CATALOG, PermissionCatalog
from .checks import (
    EffectivePermissions,
    has_all_permissions,
    has_any_permission,
    has_permission,
    missing_permissions,
)
from .gate import AtLeast, Gate, Permitted, Public, at_least, authenticated, permitted, public
from .guard import Allowed, AuthContext, Forbidden, RequestGuard, Unauthenticated
from .hierarchy import DEFAULT_HIERARCHY, RoleHierarchy, RoleInfo
from .management import assignable_roles, can_assign_role, can_manage_user, filter_manageable
from .permission import Action, Permission, Resource
from .policy import Policy, requires, requires_all, requires_any
from .resolver import PermissionResolver

__all__ = [
    "DEFAULT_CATALOG",
    "DEFAULT_HIERARCHY",
    "Action",
    "Allowed",
    "AtLeast",
    "AuthContext",
    "EffectivePermissions",
    "Forbidden",
    "Gate",
    "Permission",
    "PermissionCatalog",
    "PermissionResolver",
    "Permitted",
    "Policy",
    "Public",
    "RequestGuard",
    "Resource",
    "RoleHierarchy",
    "RoleInfo",
    "Unauthenticated",
    "assignable_roles",
    "at_least",
    "authenticated",
    "can_assign_role",
    "can_manage_user",
    "filter_manageable",
    "has_all_permissions",
    "has_any_permission",
    "has_permission",
    "missing_permissions",
    "permitted",
    "public",
    "requires",
    "requires_all",
    "requires_any",
]
