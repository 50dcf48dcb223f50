"""ListManageableUsers query and handler."""

from datetime import datetime

from pydantic import BaseModel

from bastion.domain.auth.model.user import UserRecord
from bastion.domain.auth.service.authorization import AuthorizationService
from bastion.domain.shared.authorization.guard import AuthContext
from bastion.domain.shared.authorization.gate import permitted
from bastion.domain.shared.authorization.permission import Action, Permission, Resource
from bastion.domain.shared.query import Query, QueryHandler, Result


class ListManageableUsers(Query):
    """Query for the users the caller may manage."""


class UserDTO(BaseModel):
    id: str
    email: str
    name: str | None
    role: str
    level: int
    permissions: list[str]
    updated_at: datetime | None

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserDTO":
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            role=user.role.name,
            level=user.role.level,
            permissions=list(user.permissions),
            updated_at=user.updated_at,
        )


class ListManageableUsersResult(Result):
    users: list[UserDTO]


class ListManageableUsersHandler(QueryHandler[ListManageableUsers, ListManageableUsersResult]):
    __auth__ = permitted(Permission(Resource.USERS, Action.VIEW))
    auth: AuthContext
    authorization_service: AuthorizationService

    async def run(self, query: ListManageableUsers) -> ListManageableUsersResult:
        users = await self.authorization_service.list_manageable_users(self.auth.principal)
        return ListManageableUsersResult(users=[UserDTO.from_record(u) for u in users])
