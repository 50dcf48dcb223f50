"""Composable permission policies evaluated against a resolved permission set."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from bastion.domain.shared.authorization.checks import (
    EffectivePermissions,
    has_permission,
    missing_permissions,
)
from bastion.domain.shared.authorization.permission import Permission


class Policy(ABC):
    """Base class for composable authorization policies.

    Policies only look at the effective permission set; rank rules live in
    ``management``.
    """

    @abstractmethod
    def evaluate(self, permissions: EffectivePermissions) -> bool:
        """Return True if the permission set satisfies this policy."""
        ...

    @abstractmethod
    def missing(self, permissions: EffectivePermissions) -> tuple[str, ...]:
        """Permissions to name in a Forbidden outcome when evaluation fails."""
        ...

    @abstractmethod
    def describe(self) -> str: ...

    def __and__(self, other: Policy) -> AllOf:
        return AllOf(policies=(self, other))

    def __or__(self, other: Policy) -> AnyOf:
        return AnyOf(policies=(self, other))


@dataclass(frozen=True)
class RequiresPermission(Policy):
    """Policy that checks a single permission (exact or via resource wildcard)."""

    permission: Permission

    def evaluate(self, permissions: EffectivePermissions) -> bool:
        return has_permission(permissions, self.permission)

    def missing(self, permissions: EffectivePermissions) -> tuple[str, ...]:
        return missing_permissions(permissions, [self.permission])

    def describe(self) -> str:
        return str(self.permission)


@dataclass(frozen=True)
class AllOf(Policy):
    """Policy that requires ALL sub-policies to pass."""

    policies: tuple[Policy, ...]

    def evaluate(self, permissions: EffectivePermissions) -> bool:
        return all(p.evaluate(permissions) for p in self.policies)

    def missing(self, permissions: EffectivePermissions) -> tuple[str, ...]:
        missing: list[str] = []
        for policy in self.policies:
            if not policy.evaluate(permissions):
                missing.extend(m for m in policy.missing(permissions) if m not in missing)
        return tuple(missing)

    def describe(self) -> str:
        return " and ".join(p.describe() for p in self.policies)

    def __and__(self, other: Policy) -> AllOf:
        return AllOf(policies=(*self.policies, other))


@dataclass(frozen=True)
class AnyOf(Policy):
    """Policy that requires at least ONE sub-policy to pass."""

    policies: tuple[Policy, ...]

    def evaluate(self, permissions: EffectivePermissions) -> bool:
        return any(p.evaluate(permissions) for p in self.policies)

    def missing(self, permissions: EffectivePermissions) -> tuple[str, ...]:
        # Nothing matched, so every alternative is reported
        missing: list[str] = []
        for policy in self.policies:
            missing.extend(m for m in policy.missing(permissions) if m not in missing)
        return tuple(missing)

    def describe(self) -> str:
        return "one of: " + ", ".join(p.describe() for p in self.policies)

    def __or__(self, other: Policy) -> AnyOf:
        return AnyOf(policies=(*self.policies, other))


def requires(permission: Permission) -> RequiresPermission:
    """Factory: policy requiring a single permission."""
    return RequiresPermission(permission=permission)


def requires_all(*permissions: Permission) -> AllOf:
    """Factory: policy requiring every one of the given permissions."""
    return AllOf(policies=tuple(RequiresPermission(permission=p) for p in permissions))


def requires_any(*permissions: Permission) -> AnyOf:
    """Factory: policy requiring at least one of the given permissions."""
    return AnyOf(policies=tuple(RequiresPermission(permission=p) for p in permissions))
