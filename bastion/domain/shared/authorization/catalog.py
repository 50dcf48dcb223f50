"""PermissionCatalog: the registry of every valid resource/action pair.

Nothing outside the catalog may hold authoritative permission strings: role
maps, custom permission lists and guard requirements are all checked against
it. Descriptions are display text for management UIs, never used in logic.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from bastion.domain.shared.authorization.permission import Action, Permission, Resource


class PermissionCatalog:
    """Immutable registry of resources, their actions and descriptions."""

    def __init__(
        self,
        entries: Mapping[Resource, Mapping[Action, str]],
        wildcard_descriptions: Mapping[Resource, str] | None = None,
    ) -> None:
        actions: dict[Resource, MappingProxyType[Action, str]] = {}
        for resource, described in entries.items():
            if Action.ALL in described:
                raise ValueError(f"Wildcard cannot be catalogued as an action of {resource}")
            actions[resource] = MappingProxyType(dict(described))
        self._actions = MappingProxyType(actions)
        self._wildcards = MappingProxyType(dict(wildcard_descriptions or {}))

    def resources(self) -> tuple[Resource, ...]:
        return tuple(self._actions)

    def actions(self, resource: Resource) -> tuple[Action, ...]:
        """Concrete actions defined for a resource (empty if uncatalogued)."""
        return tuple(self._actions.get(resource, {}))

    def permissions(self, resource: Resource | None = None) -> tuple[Permission, ...]:
        """Concrete permissions, for one resource or the whole catalog."""
        resources = (resource,) if resource is not None else self.resources()
        return tuple(Permission(r, a) for r in resources for a in self.actions(r))

    def __contains__(self, permission: object) -> bool:
        if not isinstance(permission, Permission):
            return False
        if permission.resource not in self._actions:
            return False
        return permission.is_wildcard or permission.action in self._actions[permission.resource]

    def __iter__(self) -> Iterator[Permission]:
        return iter(self.permissions())

    def __len__(self) -> int:
        return sum(len(described) for described in self._actions.values())

    def parse(self, value: str) -> Permission | None:
        """Parse a permission string, returning None if the catalog does not know it."""
        try:
            permission = Permission.of(value)
        except ValueError:
            return None
        return permission if permission in self else None

    def invalid(self, values: Iterable[str]) -> list[str]:
        """The subset of ``values`` that are not catalogued permissions."""
        return [v for v in values if self.parse(v) is None]

    def expand(self, permission: Permission) -> tuple[Permission, ...]:
        """Concrete permissions granted by ``permission``.

        A wildcard expands to every action the catalog currently defines for
        its resource; a concrete permission expands to itself.
        """
        if permission not in self:
            return ()
        if permission.is_wildcard:
            return self.permissions(permission.resource)
        return (permission,)

    def describe(self, permission: Permission) -> str:
        if permission.is_wildcard:
            return self._wildcards.get(
                permission.resource, f"All {permission.resource.value} permissions"
            )
        return self._actions.get(permission.resource, {}).get(permission.action, str(permission))

    def descriptions(self) -> dict[str, str]:
        """``{"resource.action": description}`` for every concrete and wildcard permission."""
        described: dict[str, str] = {}
        for resource in self.resources():
            for permission in self.permissions(resource):
                described[str(permission)] = self.describe(permission)
            wildcard = Permission.wildcard(resource)
            described[str(wildcard)] = self.describe(wildcard)
        return described


DEFAULT_CATALOG = PermissionCatalog(
    {
        Resource.PRODUCTS: {
            Action.VIEW: "View products list and details",
            Action.CREATE: "Create new products",
            Action.EDIT: "Edit existing products",
            Action.DELETE: "Delete products permanently",
            Action.PUBLISH: "Publish or unpublish products",
        },
        Resource.CATEGORIES: {
            Action.VIEW: "View product categories",
            Action.CREATE: "Create new categories",
            Action.EDIT: "Edit existing categories",
            Action.DELETE: "Delete categories",
        },
        Resource.PAGES: {
            Action.VIEW: "View CMS pages",
            Action.CREATE: "Create new pages",
            Action.EDIT: "Edit existing pages",
            Action.DELETE: "Delete pages",
            Action.PUBLISH: "Publish or unpublish pages",
        },
        Resource.MENU: {
            Action.VIEW: "View menu items",
            Action.CREATE: "Create new menu items",
            Action.EDIT: "Edit menu items",
            Action.DELETE: "Delete menu items",
        },
        Resource.MEDIA: {
            Action.VIEW: "View media library",
            Action.UPLOAD: "Upload new media files",
            Action.DELETE: "Delete media files",
        },
        Resource.USERS: {
            Action.VIEW: "View user list",
            Action.CREATE: "Create new users",
            Action.EDIT: "Edit user accounts",
            Action.DELETE: "Delete users",
            Action.MANAGE_ROLES: "Assign and change user roles",
            Action.EDIT_PERMISSIONS: "Edit user permissions",
        },
        Resource.SETTINGS: {
            Action.VIEW: "View system settings",
            Action.EDIT: "Modify system settings",
        },
        Resource.MESSAGES: {
            Action.VIEW: "View customer messages",
            Action.DELETE: "Delete messages",
        },
        Resource.COLLECTIONS: {
            Action.VIEW: "View product collections",
            Action.CREATE: "Create new collections",
            Action.EDIT: "Edit collections",
            Action.DELETE: "Delete collections",
        },
        Resource.HOMEPAGE: {
            Action.VIEW: "View homepage content and sections",
            Action.EDIT: "Edit homepage content and layout",
        },
        Resource.DASHBOARD: {
            Action.VIEW: "Access admin dashboard and overview",
            Action.MESSAGE_CENTER: "View and manage message center on dashboard",
            Action.ENGAGEMENT_OVERVIEW: "View engagement analytics and charts",
            Action.PRODUCT_INSIGHTS: "View top products and performance insights",
            Action.SEARCH_ANALYTICS: "View search analytics and trends",
            Action.STATISTICS: "View statistics cards (users, products, categories)",
            Action.RECENT_ACTIVITY: "View recent activity and products",
        },
    },
    wildcard_descriptions={
        Resource.PRODUCTS: "All product permissions",
        Resource.CATEGORIES: "All category permissions",
        Resource.PAGES: "All page permissions",
        Resource.MENU: "All menu permissions",
        Resource.MEDIA: "All media permissions",
        Resource.USERS: "All user management permissions",
        Resource.SETTINGS: "All settings permissions",
        Resource.MESSAGES: "All message permissions",
        Resource.COLLECTIONS: "All collection permissions",
        Resource.HOMEPAGE: "All homepage CMS permissions",
        Resource.DASHBOARD: "All dashboard permissions",
    },
)
