"""Permission identifiers: typed resources and actions with a ``resource.action`` projection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

SEPARATOR = "."


class Resource(StrEnum):
    """Every resource the storefront admin exposes to access control."""

    PRODUCTS = "products"
    CATEGORIES = "categories"
    PAGES = "pages"
    MENU = "menu"
    MEDIA = "media"
    USERS = "users"
    SETTINGS = "settings"
    MESSAGES = "messages"
    COLLECTIONS = "collections"
    HOMEPAGE = "homepage"
    DASHBOARD = "dashboard"


class Action(StrEnum):
    """Every action name used by any resource.

    ``ALL`` is the wildcard variant: it stands for every action the catalog
    defines for a resource, now or later.
    """

    ALL = "*"

    VIEW = "view"
    CREATE = "create"
    EDIT = "edit"
    DELETE = "delete"
    PUBLISH = "publish"
    UPLOAD = "upload"
    MANAGE_ROLES = "manage_roles"
    EDIT_PERMISSIONS = "edit_permissions"

    # Dashboard widgets
    MESSAGE_CENTER = "message_center"
    ENGAGEMENT_OVERVIEW = "engagement_overview"
    PRODUCT_INSIGHTS = "product_insights"
    SEARCH_ANALYTICS = "search_analytics"
    STATISTICS = "statistics"
    RECENT_ACTIVITY = "recent_activity"


@dataclass(frozen=True, order=True)
class Permission:
    """One grantable capability: an action on a resource, or every action on it."""

    resource: Resource
    action: Action

    @classmethod
    def of(cls, value: str) -> Permission:
        """Parse ``"resource.action"`` or ``"resource.*"``.

        The string is split on the first ``.``. Raises ValueError for unknown
        resources or actions and for a bare ``*``.
        """
        resource, sep, action = value.strip().partition(SEPARATOR)
        if not sep or not resource or not action:
            raise ValueError(f"Invalid permission: {value!r} (expected 'resource.action')")
        try:
            return cls(Resource(resource), Action(action))
        except ValueError:
            raise ValueError(f"Unknown permission: {value!r}") from None

    @classmethod
    def wildcard(cls, resource: Resource) -> Permission:
        return cls(resource, Action.ALL)

    @property
    def is_wildcard(self) -> bool:
        return self.action is Action.ALL

    def covering_wildcard(self) -> Permission:
        """The ``resource.*`` permission that would grant this one."""
        return Permission.wildcard(self.resource)

    def __str__(self) -> str:
        return f"{self.resource.value}{SEPARATOR}{self.action.value}"
