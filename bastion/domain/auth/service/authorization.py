"""Authorization service: role changes, permission edits and management listings."""

import logging
from dataclasses import dataclass

from bastion.domain.auth.model.audit import RbacChange, RbacChangeKind
from bastion.domain.auth.model.principal import Principal
from bastion.domain.auth.model.role import Role
from bastion.domain.auth.model.user import UserRecord
from bastion.domain.auth.model.value import UserId
from bastion.domain.auth.port.repository import AuditLog, UserRepository
from bastion.domain.shared.authorization.catalog import PermissionCatalog
from bastion.domain.shared.authorization.hierarchy import RoleHierarchy, RoleInfo
from bastion.domain.shared.authorization.management import (
    can_assign_role,
    can_manage_user,
    filter_manageable,
)
from bastion.domain.shared.error import (
    AuthorizationError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


@dataclass
class AuthorizationService:
    """Applies the management rules to edits of other users' roles and permissions.

    The rank checks here are the same pure predicates the UI uses; a rank
    violation becomes an ``access_denied`` AuthorizationError (403).
    """

    _user_repo: UserRepository
    _audit_log: AuditLog
    _hierarchy: RoleHierarchy
    _catalog: PermissionCatalog

    async def get_user(self, user_id: UserId) -> UserRecord:
        user = await self._user_repo.get(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found", code="user_not_found")
        return user

    async def change_role(self, actor: Principal, user_id: UserId, role: Role) -> UserRecord:
        """Move a user to ``role`` and clear their custom permissions.

        Only a top-role actor can demote a top-role target, so the last-holder
        check trips only when the actor's own record is no longer stored, i.e.
        it was removed from the user store after the request authenticated.

        Raises:
            NotFoundError: If the user does not exist
            AuthorizationError: On self-change or a rank violation
            InvalidStateError: If this would demote the last top-role holder
        """
        target = await self.get_user(user_id)
        self._ensure_can_manage(actor, target)

        if not can_assign_role(actor, role, self._hierarchy):
            raise AuthorizationError(
                f"Cannot assign role {role.name}: it must rank below your own",
                code="access_denied",
            )

        if target.role == role:
            return target

        top = self._hierarchy.top_role
        if target.role == top and await self._user_repo.count_by_role(top) <= 1:
            raise InvalidStateError(
                f"Cannot demote the last {top.name}",
                code="last_top_role",
            )

        old_value = {"role": target.role.name, "permissions": list(target.permissions)}
        target.change_role(role)
        await self._user_repo.save(target)

        logger.info(
            "Role changed: user_id=%s %s -> %s by %s",
            target.id,
            old_value["role"],
            role.name,
            actor.user_id,
        )
        await self._record(
            RbacChange.create(
                kind=RbacChangeKind.ROLE_CHANGE,
                actor_id=actor.user_id,
                target_id=target.id,
                old_value=old_value,
                new_value={"role": role.name, "permissions": []},
            )
        )
        return target

    async def update_permissions(
        self, actor: Principal, user_id: UserId, permissions: list[str]
    ) -> UserRecord:
        """Replace a user's custom permission list.

        The list overrides the role defaults entirely; an empty list restores
        them. Every entry must be catalogued (``resource.*`` is accepted for
        any catalogued resource); entries are validated only once the actor
        is known to manage the target.
        """
        target = await self.get_user(user_id)
        self._ensure_can_manage(actor, target)

        invalid = self._catalog.invalid(permissions)
        if invalid:
            raise ValidationError(
                "Invalid permissions: " + ", ".join(invalid),
                field="permissions",
                invalid=invalid,
            )

        old_value = {"permissions": list(target.permissions)}
        target.replace_permissions([p.strip() for p in permissions])
        await self._user_repo.save(target)

        logger.info(
            "Permissions updated: user_id=%s count=%d by %s",
            target.id,
            len(target.permissions),
            actor.user_id,
        )
        await self._record(
            RbacChange.create(
                kind=RbacChangeKind.PERMISSION_CHANGE,
                actor_id=actor.user_id,
                target_id=target.id,
                old_value=old_value,
                new_value={"permissions": list(target.permissions)},
            )
        )
        return target

    async def list_manageable_users(self, actor: Principal) -> list[UserRecord]:
        """Users ``actor`` outranks, for management listings."""
        users = await self._user_repo.list_all()
        return filter_manageable(actor, users, UserRecord.to_principal, self._hierarchy)

    async def get_audit_log(
        self, actor: Principal, user_id: UserId, limit: int = 50
    ) -> list[RbacChange]:
        """RBAC changes made by or to ``user_id``, newest first.

        Callers may read their own history, or that of a user they outrank.
        """
        if actor.user_id != user_id:
            target = await self.get_user(user_id)
            if not can_manage_user(actor, target.to_principal(), self._hierarchy):
                raise AuthorizationError(
                    "Cannot view the audit log of a user of equal or higher role",
                    code="access_denied",
                )
        return await self._audit_log.get_by_user(user_id, limit=limit)

    async def list_recent_changes(self, limit: int = 100) -> list[RbacChange]:
        return await self._audit_log.list_recent(limit=limit)

    def role_catalog(self, actor: Principal) -> list[tuple[RoleInfo, bool]]:
        """Every role with its level and defaults, plus whether ``actor`` may assign it."""
        return [
            (self._hierarchy.describe(role), can_assign_role(actor, role, self._hierarchy))
            for role in self._hierarchy.roles()
        ]

    def _ensure_can_manage(self, actor: Principal, target: UserRecord) -> None:
        if actor.user_id == target.id:
            raise AuthorizationError(
                "You cannot change your own role or permissions",
                code="access_denied",
            )
        if not can_manage_user(actor, target.to_principal(), self._hierarchy):
            raise AuthorizationError(
                "Cannot manage a user of equal or higher role",
                code="access_denied",
            )

    async def _record(self, change: RbacChange) -> None:
        # Audit writes never fail the change they describe
        try:
            await self._audit_log.record(change)
        except Exception:
            logger.exception("Failed to write audit entry %s for %s", change.kind, change.target_id)
