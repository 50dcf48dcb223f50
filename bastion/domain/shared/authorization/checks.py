"""Pure permission predicates over a resolved permission set.

Matching is two-level only: the exact ``resource.action`` is granted, or
``resource.*`` is. A wildcard never reaches across resources and there is no
prefix matching beyond that.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from bastion.domain.shared.authorization.catalog import DEFAULT_CATALOG, PermissionCatalog
from bastion.domain.shared.authorization.permission import Permission

logger = logging.getLogger("bastion.authz")

PermissionLike = Permission | str


@dataclass(frozen=True)
class EffectivePermissions:
    """The resolved permissions of one principal for one check. Never cached.

    ``catalog`` is the catalog the set was resolved against; checks deny any
    requirement it does not list, even under a granted wildcard.
    """

    granted: frozenset[Permission] = frozenset()
    catalog: PermissionCatalog = field(default=DEFAULT_CATALOG, compare=False, repr=False)

    @classmethod
    def of(
        cls, permissions: Iterable[Permission], catalog: PermissionCatalog = DEFAULT_CATALOG
    ) -> EffectivePermissions:
        return cls(frozenset(permissions), catalog)

    def __contains__(self, permission: object) -> bool:
        return permission in self.granted

    def __iter__(self) -> Iterator[Permission]:
        return iter(sorted(self.granted))

    def __len__(self) -> int:
        return len(self.granted)

    def __bool__(self) -> bool:
        return bool(self.granted)

    def to_strings(self) -> list[str]:
        return [str(p) for p in self]

    def expand(self, catalog: PermissionCatalog) -> list[str]:
        """Concrete permissions after resolving wildcards against the catalog."""
        concrete = {p for granted in self.granted for p in catalog.expand(granted)}
        return [str(p) for p in sorted(concrete)]


def _coerce(permission: PermissionLike) -> Permission | None:
    if isinstance(permission, Permission):
        return permission
    try:
        return Permission.of(permission)
    except ValueError:
        logger.warning("Denying check for unparsable permission %r", permission)
        return None


def has_permission(granted: EffectivePermissions, required: PermissionLike) -> bool:
    """True if ``required`` is catalogued and granted exactly or through its resource wildcard."""
    permission = _coerce(required)
    if permission is None:
        return False
    if permission not in granted.catalog:
        logger.warning("Denying check for uncatalogued permission %s", permission)
        return False
    if permission in granted:
        return True
    return permission.covering_wildcard() in granted


def has_any_permission(
    granted: EffectivePermissions, required: Iterable[PermissionLike]
) -> bool:
    """True if at least one of ``required`` is granted. False for an empty list."""
    return any(has_permission(granted, p) for p in required)


def has_all_permissions(
    granted: EffectivePermissions, required: Iterable[PermissionLike]
) -> bool:
    """True only if every one of ``required`` is granted."""
    return all(has_permission(granted, p) for p in required)


def missing_permissions(
    granted: EffectivePermissions, required: Iterable[PermissionLike]
) -> tuple[str, ...]:
    """The members of ``required`` that are not granted, as strings."""
    return tuple(str(p) for p in required if not has_permission(granted, p))
