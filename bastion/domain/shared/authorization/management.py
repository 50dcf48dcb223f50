"""Rank rules for managing other users and assigning roles.

Strict inequality is the point: equal-ranked principals can never change each
other's role or permissions, so privileges cannot move sideways. Violations
are ordinary ``False`` results, surfaced to callers as Forbidden.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

from bastion.domain.auth.model.principal import Principal
from bastion.domain.auth.model.role import Role
from bastion.domain.shared.authorization.hierarchy import DEFAULT_HIERARCHY, RoleHierarchy

T = TypeVar("T")


def can_manage_user(
    actor: Principal,
    target: Principal,
    hierarchy: RoleHierarchy = DEFAULT_HIERARCHY,
) -> bool:
    """Can ``actor`` change ``target``'s role or permissions?

    Never for themselves. The top role may manage any other principal,
    including other top-role holders; everyone else needs a strictly higher
    level than the target.
    """
    if actor.is_same_user(target):
        return False
    if actor.role == hierarchy.top_role:
        return True
    return hierarchy.outranks(actor.role, target.role)


def can_assign_role(
    actor: Principal,
    role: Role,
    hierarchy: RoleHierarchy = DEFAULT_HIERARCHY,
) -> bool:
    """Can ``actor`` hand out ``role``? Top role: any role. Others: strictly lower only."""
    if actor.role == hierarchy.top_role:
        return True
    return hierarchy.outranks(actor.role, role)


def assignable_roles(
    actor: Principal,
    hierarchy: RoleHierarchy = DEFAULT_HIERARCHY,
) -> tuple[Role, ...]:
    """Roles ``actor`` may assign, highest first (for role pickers)."""
    return tuple(r for r in hierarchy.roles() if can_assign_role(actor, r, hierarchy))


def filter_manageable(
    actor: Principal,
    candidates: Iterable[T],
    to_principal: Callable[[T], Principal],
    hierarchy: RoleHierarchy = DEFAULT_HIERARCHY,
) -> list[T]:
    """Keep only the candidates ``actor`` may manage.

    Lower roles never see higher (or equal) roles in management listings.
    """
    return [c for c in candidates if can_manage_user(actor, to_principal(c), hierarchy)]
