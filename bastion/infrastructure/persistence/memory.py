"""In-memory user store and audit log adapters."""

import logging

from bastion.domain.auth.model.audit import RbacChange
from bastion.domain.auth.model.role import Role
from bastion.domain.auth.model.user import UserRecord
from bastion.domain.auth.model.value import ProviderIdentity, UserId
from bastion.domain.auth.port.repository import AuditLog, UserRepository

logger = logging.getLogger(__name__)


class InMemoryUserRepository(UserRepository):
    """Dict-backed user store.

    Records are copied in and out, so edits are only visible after ``save``,
    as with any external store.
    """

    def __init__(self, users: list[UserRecord] | None = None) -> None:
        self._users: dict[UserId, UserRecord] = {}
        for user in users or []:
            self._users[user.id] = user.model_copy(deep=True)

    async def get(self, user_id: UserId) -> UserRecord | None:
        user = self._users.get(user_id)
        return user.model_copy(deep=True) if user else None

    async def get_by_identity(self, identity: ProviderIdentity) -> UserRecord | None:
        """Match the identity's external id against user id or email."""
        external_id = identity.external_id.strip()
        for user in self._users.values():
            if str(user.id) == external_id or user.email.lower() == external_id.lower():
                return user.model_copy(deep=True)
        return None

    async def list_all(self) -> list[UserRecord]:
        users = sorted(self._users.values(), key=lambda u: (-u.role.level, u.email))
        return [u.model_copy(deep=True) for u in users]

    async def count_by_role(self, role: Role) -> int:
        return sum(1 for u in self._users.values() if u.role == role)

    async def save(self, user: UserRecord) -> None:
        self._users[user.id] = user.model_copy(deep=True)


class InMemoryAuditLog(AuditLog):
    """Append-only list of RBAC changes, mirrored to the log."""

    def __init__(self) -> None:
        self._entries: list[RbacChange] = []

    async def record(self, change: RbacChange) -> None:
        self._entries.append(change)
        logger.info(
            "RBAC audit: kind=%s actor=%s target=%s old=%s new=%s",
            change.kind.value,
            change.actor_id,
            change.target_id,
            change.old_value,
            change.new_value,
        )

    async def get_by_user(self, user_id: UserId, limit: int = 50) -> list[RbacChange]:
        matching = [c for c in reversed(self._entries) if c.involves(user_id)]
        return matching[:limit]

    async def list_recent(self, limit: int = 100) -> list[RbacChange]:
        return list(reversed(self._entries))[:limit]
