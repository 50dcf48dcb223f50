"""Handler-level authorization gates: public(), permitted(...) and at_least(Role)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from bastion.domain.shared.authorization.permission import Permission
from bastion.domain.shared.authorization.policy import Policy, requires

if TYPE_CHECKING:
    from bastion.domain.auth.model.role import Role

logger = logging.getLogger("bastion.authz")


class Gate:
    """Base for handler-level authorization gates.

    Every CommandHandler/QueryHandler must declare ``__auth__: ClassVar[Gate]``.
    """


@dataclass(frozen=True)
class Public(Gate):
    """No authentication required."""


@dataclass(frozen=True)
class Permitted(Gate):
    """Requires an authenticated principal satisfying ``policy`` (None: any principal)."""

    policy: Policy | None = None


@dataclass(frozen=True)
class AtLeast(Gate):
    """Requires an authenticated principal holding at least ``role``."""

    role: Role


_PUBLIC = Public()


def public() -> Public:
    """Mark a handler as publicly accessible (no auth required)."""
    return _PUBLIC


def authenticated() -> Permitted:
    """Mark a handler as requiring any authenticated principal."""
    return Permitted()


def permitted(policy: Policy | Permission) -> Permitted:
    """Mark a handler as requiring a policy, or a single permission."""
    if isinstance(policy, Permission):
        policy = requires(policy)
    return Permitted(policy=policy)


def at_least(role: Role) -> AtLeast:
    """Mark a handler as requiring at least the given role."""
    return AtLeast(role=role)


def enforce(handler: Any) -> None:
    """Evaluate ``handler.__auth__`` against the handler's ``auth`` context.

    Raises:
        ConfigurationError: If the handler declares no gate
        AuthorizationError: If the gate denies
    """
    from bastion.domain.shared.authorization.guard import AuthContext, Forbidden, evaluate
    from bastion.domain.shared.error import AuthorizationError, ConfigurationError

    gate = getattr(type(handler), "__auth__", None)
    if not isinstance(gate, Gate):
        raise ConfigurationError(f"Handler {type(handler).__name__} has no __auth__ declaration")

    if isinstance(gate, Public):
        return

    context = getattr(handler, "auth", None)
    if not isinstance(context, AuthContext):
        raise AuthorizationError("Authentication required", code="missing_token")

    if isinstance(gate, AtLeast):
        if not context.principal.has_minimum_role(gate.role):
            logger.info(
                "Forbidden: user_id=%s role=%s below %s",
                context.user_id,
                context.principal.role.name,
                gate.role.name,
            )
            raise AuthorizationError(
                f"Requires role {gate.role.name} or higher", code="access_denied"
            )
        return

    if isinstance(gate, Permitted):
        outcome = evaluate(context, gate.policy)
        if isinstance(outcome, Forbidden):
            raise outcome.to_error()
        return

    raise ConfigurationError(
        f"Handler {type(handler).__name__} has unhandled __auth__ type: {type(gate).__name__}"
    )
