"""RbacChange entity: audit trail of role and permission edits."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, RootModel

from bastion.domain.auth.model.value import UserId


class RbacChangeId(RootModel[UUID]):
    """Unique identifier for an RbacChange."""

    @classmethod
    def generate(cls) -> "RbacChangeId":
        return cls(uuid4())

    def __str__(self) -> str:
        return str(self.root)

    def __hash__(self) -> int:
        return hash(self.root)


class RbacChangeKind(StrEnum):
    ROLE_CHANGE = "ROLE_CHANGE"
    PERMISSION_CHANGE = "PERMISSION_CHANGE"


class RbacChange(BaseModel):
    """One role or permission change, with the values before and after."""

    id: RbacChangeId
    kind: RbacChangeKind
    actor_id: UserId
    target_id: UserId
    old_value: dict[str, Any]
    new_value: dict[str, Any]
    created_at: datetime

    @classmethod
    def create(
        cls,
        kind: RbacChangeKind,
        actor_id: UserId,
        target_id: UserId,
        old_value: dict[str, Any],
        new_value: dict[str, Any],
    ) -> "RbacChange":
        return cls(
            id=RbacChangeId.generate(),
            kind=kind,
            actor_id=actor_id,
            target_id=target_id,
            old_value=old_value,
            new_value=new_value,
            created_at=datetime.now(UTC),
        )

    def involves(self, user_id: UserId) -> bool:
        return self.actor_id == user_id or self.target_id == user_id
