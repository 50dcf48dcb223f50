"""Request guard: Authenticate -> Load -> Resolve -> Authorize.

The single entry point route handlers use to turn raw credentials into an
authorization verdict. Nothing is cached: every call re-reads the stored user
and re-resolves its permissions, so a demotion is visible on the next request.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from bastion.domain.auth.model.principal import Principal
from bastion.domain.auth.model.value import UserId
from bastion.domain.auth.port.identity_provider import IdentityProvider
from bastion.domain.auth.port.repository import UserRepository
from bastion.domain.shared.authorization.checks import (
    EffectivePermissions,
    PermissionLike,
    has_all_permissions,
    has_any_permission,
    has_permission,
)
from bastion.domain.shared.authorization.policy import Policy
from bastion.domain.shared.authorization.resolver import PermissionResolver
from bastion.domain.shared.error import AuthorizationError

logger = logging.getLogger("bastion.authz")


@dataclass(frozen=True)
class AuthContext:
    """An authenticated principal and the permissions resolved for this request."""

    principal: Principal
    permissions: EffectivePermissions

    @property
    def user_id(self) -> UserId:
        return self.principal.user_id

    def can(self, permission: PermissionLike) -> bool:
        return has_permission(self.permissions, permission)

    def can_any(self, permissions: Iterable[PermissionLike]) -> bool:
        return has_any_permission(self.permissions, permissions)

    def can_all(self, permissions: Iterable[PermissionLike]) -> bool:
        return has_all_permissions(self.permissions, permissions)


@dataclass(frozen=True)
class Allowed:
    context: AuthContext


@dataclass(frozen=True)
class Unauthenticated:
    """No principal could be established. Maps to 401."""

    reason: str
    code: str = "missing_token"

    def to_error(self) -> AuthorizationError:
        return AuthorizationError(self.reason, code=self.code)


@dataclass(frozen=True)
class Forbidden:
    """The principal lacks what the policy requires. Maps to 403."""

    context: AuthContext
    missing: tuple[str, ...]

    @property
    def message(self) -> str:
        if len(self.missing) == 1:
            return f"Missing permission: {self.missing[0]}"
        return "Missing permissions: " + ", ".join(self.missing)

    def to_error(self) -> AuthorizationError:
        return AuthorizationError(
            self.message,
            code="access_denied",
            missing_permissions=self.missing,
        )


GuardOutcome = Allowed | Unauthenticated | Forbidden


def evaluate(context: AuthContext, policy: Policy | None) -> Allowed | Forbidden:
    """Authorize an already-resolved context against ``policy``.

    ``None`` means "any authenticated principal".
    """
    if policy is None or policy.evaluate(context.permissions):
        logger.debug(
            "Allowed: user_id=%s role=%s policy=%s",
            context.user_id,
            context.principal.role.name,
            policy.describe() if policy else "<authenticated>",
        )
        return Allowed(context)

    missing = policy.missing(context.permissions)
    logger.info(
        "Forbidden: user_id=%s role=%s missing=%s",
        context.user_id,
        context.principal.role.name,
        ",".join(missing),
    )
    return Forbidden(context, missing)


@dataclass
class RequestGuard:
    """Runs the authorization pipeline for one inbound operation."""

    _identity_provider: IdentityProvider
    _user_repo: UserRepository
    _resolver: PermissionResolver

    async def authenticate(self, credentials: str | None) -> AuthContext | Unauthenticated:
        """Authenticate, load the stored user and resolve its permissions."""
        if not credentials:
            return Unauthenticated("Authentication required")

        identity = await self._identity_provider.authenticate(credentials)
        if identity is None:
            logger.info(
                "Unauthenticated: credentials rejected by %s",
                self._identity_provider.provider_name,
            )
            return Unauthenticated("Invalid or expired credentials", code="invalid_token")

        record = await self._user_repo.get_by_identity(identity)
        if record is None:
            logger.info(
                "Unauthenticated: no stored user for %s:%s",
                identity.provider,
                identity.external_id,
            )
            return Unauthenticated("Unknown user", code="unknown_user")

        principal = record.to_principal()
        return AuthContext(principal=principal, permissions=self._resolver.resolve(principal))

    async def authorize(
        self, credentials: str | None, policy: Policy | None = None
    ) -> GuardOutcome:
        result = await self.authenticate(credentials)
        if isinstance(result, Unauthenticated):
            return result
        return evaluate(result, policy)

    async def require(self, credentials: str | None, policy: Policy | None = None) -> AuthContext:
        """Like ``authorize`` but raises AuthorizationError on any denial."""
        outcome = await self.authorize(credentials, policy)
        if isinstance(outcome, Allowed):
            return outcome.context
        raise outcome.to_error()
