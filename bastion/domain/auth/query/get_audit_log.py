"""GetAuditLog query and handler."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from bastion.domain.auth.model.audit import RbacChange
from bastion.domain.auth.model.value import UserId
from bastion.domain.auth.service.authorization import AuthorizationService
from bastion.domain.shared.authorization.guard import AuthContext
from bastion.domain.shared.authorization.gate import permitted
from bastion.domain.shared.authorization.permission import Action, Permission, Resource
from bastion.domain.shared.query import Query, QueryHandler, Result


class GetAuditLog(Query):
    """Query for RBAC changes where a user was actor or target."""

    user_id: str
    limit: int = Field(default=50, ge=1, le=500)


class RbacChangeDTO(BaseModel):
    id: str
    kind: str
    actor_id: str
    target_id: str
    old_value: dict[str, Any]
    new_value: dict[str, Any]
    created_at: datetime

    @classmethod
    def from_change(cls, change: RbacChange) -> "RbacChangeDTO":
        return cls(
            id=str(change.id),
            kind=change.kind.value,
            actor_id=str(change.actor_id),
            target_id=str(change.target_id),
            old_value=change.old_value,
            new_value=change.new_value,
            created_at=change.created_at,
        )


class GetAuditLogResult(Result):
    entries: list[RbacChangeDTO]


class GetAuditLogHandler(QueryHandler[GetAuditLog, GetAuditLogResult]):
    """Subject to the same rank rule as management: only your own or a lower role's history."""

    __auth__ = permitted(Permission(Resource.USERS, Action.VIEW))
    auth: AuthContext
    authorization_service: AuthorizationService

    async def run(self, query: GetAuditLog) -> GetAuditLogResult:
        changes = await self.authorization_service.get_audit_log(
            self.auth.principal, UserId(query.user_id), limit=query.limit
        )
        return GetAuditLogResult(entries=[RbacChangeDTO.from_change(c) for c in changes])
