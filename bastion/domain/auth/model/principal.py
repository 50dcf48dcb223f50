"""Principal: the narrow shape the engine authorizes, resolved per-request."""

from dataclasses import dataclass

from bastion.domain.auth.model.role import Role
from bastion.domain.auth.model.value import UserId


@dataclass(frozen=True)
class Principal:
    """The user being authorized: identifier, role and optional custom permissions.

    A non-empty ``custom_permissions`` replaces the role's default grant
    entirely; it is never merged with it. Strings are kept as stored and
    validated against the catalog during resolution.
    """

    user_id: UserId
    role: Role
    custom_permissions: tuple[str, ...] = ()

    @property
    def level(self) -> int:
        return self.role.level

    @property
    def has_custom_permissions(self) -> bool:
        return len(self.custom_permissions) > 0

    def is_same_user(self, other: "Principal") -> bool:
        return self.user_id == other.user_id

    def has_minimum_role(self, role: Role) -> bool:
        """Check the principal's role is at least ``role`` (hierarchy comparison)."""
        return self.role >= role
