"""Repository ports for the auth domain."""

from abc import abstractmethod
from typing import Protocol

from bastion.domain.auth.model.audit import RbacChange
from bastion.domain.auth.model.role import Role
from bastion.domain.auth.model.user import UserRecord
from bastion.domain.auth.model.value import ProviderIdentity, UserId
from bastion.domain.shared.port import Port


class UserRepository(Port, Protocol):
    """The external user store. Owns roles and custom permission lists."""

    @abstractmethod
    async def get(self, user_id: UserId) -> UserRecord | None:
        """Get a user by ID."""
        ...

    @abstractmethod
    async def get_by_identity(self, identity: ProviderIdentity) -> UserRecord | None:
        """Get the user an identity provider identity belongs to."""
        ...

    @abstractmethod
    async def list_all(self) -> list[UserRecord]:
        """All users."""
        ...

    @abstractmethod
    async def count_by_role(self, role: Role) -> int:
        """Number of users currently holding ``role``."""
        ...

    @abstractmethod
    async def save(self, user: UserRecord) -> None:
        """Save a user (create or update)."""
        ...


class AuditLog(Port, Protocol):
    """Append-only record of RBAC changes."""

    @abstractmethod
    async def record(self, change: RbacChange) -> None:
        """Append a change. Must not fail the operation that produced it."""
        ...

    @abstractmethod
    async def get_by_user(self, user_id: UserId, limit: int = 50) -> list[RbacChange]:
        """Changes where the user was actor or target, newest first."""
        ...

    @abstractmethod
    async def list_recent(self, limit: int = 100) -> list[RbacChange]:
        """All changes across users, newest first."""
        ...
