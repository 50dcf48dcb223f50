"""ListRecentChanges query and handler."""

from pydantic import Field

from bastion.domain.auth.model.role import Role
from bastion.domain.auth.query.get_audit_log import GetAuditLogResult, RbacChangeDTO
from bastion.domain.auth.service.authorization import AuthorizationService
from bastion.domain.shared.authorization.guard import AuthContext
from bastion.domain.shared.authorization.gate import at_least
from bastion.domain.shared.query import Query, QueryHandler


class ListRecentChanges(Query):
    """Query for the most recent RBAC changes across all users."""

    limit: int = Field(default=100, ge=1, le=500)


class ListRecentChangesHandler(QueryHandler[ListRecentChanges, GetAuditLogResult]):
    __auth__ = at_least(Role.SUPER_ADMIN)
    auth: AuthContext
    authorization_service: AuthorizationService

    async def run(self, query: ListRecentChanges) -> GetAuditLogResult:
        changes = await self.authorization_service.list_recent_changes(limit=query.limit)
        return GetAuditLogResult(entries=[RbacChangeDTO.from_change(c) for c in changes])
