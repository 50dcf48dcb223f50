"""ListRoles query and handler."""

from pydantic import BaseModel

from bastion.domain.auth.service.authorization import AuthorizationService
from bastion.domain.shared.authorization.guard import AuthContext
from bastion.domain.shared.authorization.gate import authenticated
from bastion.domain.shared.query import Query, QueryHandler, Result


class ListRoles(Query):
    """Query for role introspection (level, defaults, assignability)."""


class RoleDTO(BaseModel):
    name: str
    level: int
    default_permissions: list[str]
    assignable: bool


class ListRolesResult(Result):
    roles: list[RoleDTO]


class ListRolesHandler(QueryHandler[ListRoles, ListRolesResult]):
    __auth__ = authenticated()
    auth: AuthContext
    authorization_service: AuthorizationService

    async def run(self, query: ListRoles) -> ListRolesResult:
        return ListRolesResult(
            roles=[
                RoleDTO(
                    name=info.role.name,
                    level=info.level,
                    default_permissions=list(info.default_permissions),
                    assignable=assignable,
                )
                for info, assignable in self.authorization_service.role_catalog(
                    self.auth.principal
                )
            ]
        )
