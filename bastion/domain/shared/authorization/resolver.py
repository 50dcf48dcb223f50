"""PermissionResolver: computes a principal's effective permission set."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bastion.domain.shared.authorization.catalog import DEFAULT_CATALOG, PermissionCatalog
from bastion.domain.shared.authorization.checks import EffectivePermissions
from bastion.domain.shared.authorization.hierarchy import DEFAULT_HIERARCHY, RoleHierarchy
from bastion.domain.shared.authorization.permission import Permission

if TYPE_CHECKING:
    from bastion.domain.auth.model.principal import Principal
    from bastion.domain.auth.model.user import UserRecord

logger = logging.getLogger(__name__)


class PermissionResolver:
    """Resolves principals against an injected hierarchy and catalog.

    Override semantics: a non-empty custom permission list *is* the effective
    set, regardless of role. Only an empty list falls back to the role
    default. The two are never merged.
    """

    def __init__(
        self,
        hierarchy: RoleHierarchy = DEFAULT_HIERARCHY,
        catalog: PermissionCatalog = DEFAULT_CATALOG,
    ) -> None:
        self.hierarchy = hierarchy
        self.catalog = catalog

    def resolve(self, principal: Principal) -> EffectivePermissions:
        if principal.has_custom_permissions:
            return EffectivePermissions.of(self._parse_custom(principal), self.catalog)

        if not self.hierarchy.has_defaults(principal.role):
            logger.warning(
                "Role %s has no default permissions; user %s resolves to an empty set",
                principal.role.name,
                principal.user_id,
            )
        return EffectivePermissions.of(
            self.hierarchy.default_permissions(principal.role), self.catalog
        )

    def resolve_record(self, record: UserRecord) -> EffectivePermissions:
        return self.resolve(record.to_principal())

    def expanded(self, principal: Principal) -> list[str]:
        """Concrete permissions with wildcards resolved, for UI collaborators."""
        return self.resolve(principal).expand(self.catalog)

    def _parse_custom(self, principal: Principal) -> list[Permission]:
        parsed: list[Permission] = []
        for value in principal.custom_permissions:
            permission = self.catalog.parse(value)
            if permission is None:
                # Fails closed: an unknown string grants nothing
                logger.warning(
                    "Dropping uncatalogued custom permission %r for user %s",
                    value,
                    principal.user_id,
                )
                continue
            parsed.append(permission)
        return parsed
