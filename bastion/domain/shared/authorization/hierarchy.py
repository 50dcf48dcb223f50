"""RoleHierarchy: role levels and the default permission set of each role.

The role-permission map is configuration: built once at startup, immutable
afterwards, and injected wherever it is needed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from bastion.domain.auth.model.role import Role
from bastion.domain.shared.authorization.catalog import DEFAULT_CATALOG, PermissionCatalog
from bastion.domain.shared.authorization.permission import Action, Permission, Resource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoleInfo:
    """Read-only description of a role for management UIs."""

    role: Role
    level: int
    default_permissions: tuple[str, ...]


class RoleHierarchy:
    """Total order over roles plus each role's default grant."""

    def __init__(self, role_permissions: Mapping[Role, Iterable[Permission]]) -> None:
        self._defaults = MappingProxyType(
            {role: frozenset(perms) for role, perms in role_permissions.items()}
        )

    @classmethod
    def from_config(
        cls,
        role_permissions: Mapping[str, Iterable[str]],
        catalog: PermissionCatalog = DEFAULT_CATALOG,
    ) -> RoleHierarchy:
        """Build a hierarchy from role names and permission strings.

        Misconfiguration fails closed: unknown roles and permission strings
        the catalog does not contain are skipped and logged, so they can never
        grant anything.
        """
        parsed: dict[Role, set[Permission]] = {}
        for role_name, values in role_permissions.items():
            try:
                role = Role.parse(role_name)
            except ValueError:
                logger.error("Ignoring permissions for unknown role %r", role_name)
                continue
            granted = parsed.setdefault(role, set())
            for value in values:
                permission = catalog.parse(value)
                if permission is None:
                    logger.error(
                        "Ignoring uncatalogued permission %r in defaults for role %s",
                        value,
                        role.name,
                    )
                    continue
                granted.add(permission)
        return cls(parsed)

    def level(self, role: Role) -> int:
        return role.level

    def default_permissions(self, role: Role) -> frozenset[Permission]:
        """The role's default grant; empty for a role the map does not mention."""
        return self._defaults.get(role, frozenset())

    def has_defaults(self, role: Role) -> bool:
        return role in self._defaults

    def roles(self) -> tuple[Role, ...]:
        """All roles, highest level first."""
        return tuple(sorted(Role, reverse=True))

    @property
    def top_role(self) -> Role:
        return Role.top()

    def outranks(self, role: Role, other: Role) -> bool:
        """Strict comparison: equal levels never outrank each other."""
        return self.level(role) > self.level(other)

    def describe(self, role: Role) -> RoleInfo:
        return RoleInfo(
            role=role,
            level=self.level(role),
            default_permissions=tuple(sorted(str(p) for p in self.default_permissions(role))),
        )

    def validate(self, catalog: PermissionCatalog) -> list[str]:
        """Problems with this map against a catalog (empty when consistent).

        Startup code logs these; they never raise on the request path.
        """
        problems: list[str] = []
        for role in self.roles():
            if not self.has_defaults(role):
                problems.append(f"Role {role.name} has no default permissions (denies everything)")
                continue
            for permission in sorted(self.default_permissions(role)):
                if permission not in catalog:
                    problems.append(f"Role {role.name} grants uncatalogued permission {permission}")
        return problems


def _all(resource: Resource) -> Permission:
    return Permission.wildcard(resource)


def _p(resource: Resource, action: Action) -> Permission:
    return Permission(resource, action)


DEFAULT_ROLE_PERMISSIONS: Mapping[Role, frozenset[Permission]] = MappingProxyType(
    {
        Role.SUPER_ADMIN: frozenset({_all(resource) for resource in Resource}),
        Role.ADMIN: frozenset(
            {
                _all(Resource.PRODUCTS),
                _all(Resource.CATEGORIES),
                _all(Resource.PAGES),
                _all(Resource.MENU),
                _all(Resource.MEDIA),
                # users.* minus role and permission management
                _p(Resource.USERS, Action.VIEW),
                _p(Resource.USERS, Action.CREATE),
                _p(Resource.USERS, Action.EDIT),
                _p(Resource.USERS, Action.DELETE),
                _all(Resource.MESSAGES),
                _all(Resource.COLLECTIONS),
                _all(Resource.HOMEPAGE),
                _p(Resource.DASHBOARD, Action.VIEW),
                _p(Resource.DASHBOARD, Action.MESSAGE_CENTER),
                _p(Resource.DASHBOARD, Action.ENGAGEMENT_OVERVIEW),
                _p(Resource.DASHBOARD, Action.PRODUCT_INSIGHTS),
                _p(Resource.DASHBOARD, Action.SEARCH_ANALYTICS),
                _p(Resource.DASHBOARD, Action.STATISTICS),
                _p(Resource.DASHBOARD, Action.RECENT_ACTIVITY),
            }
        ),
        Role.STAFF: frozenset(
            {
                _p(Resource.PRODUCTS, Action.VIEW),
                _p(Resource.PRODUCTS, Action.EDIT),
                _p(Resource.CATEGORIES, Action.VIEW),
                _p(Resource.PAGES, Action.VIEW),
                _p(Resource.PAGES, Action.EDIT),
                _p(Resource.MENU, Action.VIEW),
                _p(Resource.MEDIA, Action.VIEW),
                _p(Resource.MEDIA, Action.UPLOAD),
                _p(Resource.USERS, Action.VIEW),
                _p(Resource.USERS, Action.EDIT),
                _p(Resource.MESSAGES, Action.VIEW),
                _p(Resource.HOMEPAGE, Action.VIEW),
                _p(Resource.HOMEPAGE, Action.EDIT),
                _p(Resource.DASHBOARD, Action.VIEW),
                _p(Resource.DASHBOARD, Action.MESSAGE_CENTER),
                _p(Resource.DASHBOARD, Action.STATISTICS),
                _p(Resource.DASHBOARD, Action.RECENT_ACTIVITY),
            }
        ),
        Role.CONTENT_EDITOR: frozenset(
            {
                _p(Resource.PRODUCTS, Action.VIEW),
                _p(Resource.PRODUCTS, Action.CREATE),
                _p(Resource.PRODUCTS, Action.EDIT),
                _p(Resource.CATEGORIES, Action.VIEW),
                _p(Resource.PAGES, Action.VIEW),
                _p(Resource.PAGES, Action.CREATE),
                _p(Resource.PAGES, Action.EDIT),
                _p(Resource.MENU, Action.VIEW),
                _p(Resource.MEDIA, Action.VIEW),
                _p(Resource.MEDIA, Action.UPLOAD),
                _p(Resource.MESSAGES, Action.VIEW),
                _p(Resource.HOMEPAGE, Action.VIEW),
                _p(Resource.HOMEPAGE, Action.EDIT),
                _p(Resource.DASHBOARD, Action.VIEW),
                _p(Resource.DASHBOARD, Action.MESSAGE_CENTER),
                _p(Resource.DASHBOARD, Action.RECENT_ACTIVITY),
            }
        ),
        Role.VIEWER: frozenset(
            {
                _p(Resource.PRODUCTS, Action.VIEW),
                _p(Resource.CATEGORIES, Action.VIEW),
                _p(Resource.PAGES, Action.VIEW),
                _p(Resource.MENU, Action.VIEW),
                _p(Resource.MEDIA, Action.VIEW),
                _p(Resource.MESSAGES, Action.VIEW),
                _p(Resource.HOMEPAGE, Action.VIEW),
                _p(Resource.DASHBOARD, Action.VIEW),
                _p(Resource.DASHBOARD, Action.STATISTICS),
                _p(Resource.COLLECTIONS, Action.VIEW),
            }
        ),
    }
)

DEFAULT_HIERARCHY = RoleHierarchy(DEFAULT_ROLE_PERMISSIONS)
