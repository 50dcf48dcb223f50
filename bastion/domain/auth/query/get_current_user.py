"""GetCurrentUser query and handler."""

from bastion.domain.shared.authorization.catalog import PermissionCatalog
from bastion.domain.shared.authorization.guard import AuthContext
from bastion.domain.shared.authorization.gate import authenticated
from bastion.domain.shared.query import Query, QueryHandler, Result


class GetCurrentUser(Query):
    """Query for the caller's own role and resolved permissions."""


class GetCurrentUserResult(Result):
    user_id: str
    role: str
    level: int
    has_custom_permissions: bool
    permissions: list[str]
    expanded_permissions: list[str]


class GetCurrentUserHandler(QueryHandler[GetCurrentUser, GetCurrentUserResult]):
    """Exposes the effective permission set so UIs can disable controls up front."""

    __auth__ = authenticated()
    auth: AuthContext
    catalog: PermissionCatalog

    async def run(self, query: GetCurrentUser) -> GetCurrentUserResult:
        principal = self.auth.principal
        return GetCurrentUserResult(
            user_id=str(principal.user_id),
            role=principal.role.name,
            level=principal.level,
            has_custom_permissions=principal.has_custom_permissions,
            permissions=self.auth.permissions.to_strings(),
            expanded_permissions=self.auth.permissions.expand(self.catalog),
        )
