"""DI provider for the auth domain."""

import logging

from dishka import from_context, provide
from starlette.requests import Request

from bastion.config import Config
from bastion.domain.auth.command.change_role import ChangeRoleHandler
from bastion.domain.auth.command.update_permissions import UpdatePermissionsHandler
from bastion.domain.auth.query.get_audit_log import GetAuditLogHandler
from bastion.domain.auth.query.get_current_user import GetCurrentUserHandler
from bastion.domain.auth.query.list_permissions import ListPermissionsHandler
from bastion.domain.auth.query.list_recent_changes import ListRecentChangesHandler
from bastion.domain.auth.query.list_roles import ListRolesHandler
from bastion.domain.auth.query.list_users import ListManageableUsersHandler
from bastion.domain.auth.service.authorization import AuthorizationService
from bastion.domain.shared.authorization.catalog import DEFAULT_CATALOG, PermissionCatalog
from bastion.domain.shared.authorization.guard import AuthContext, RequestGuard
from bastion.domain.shared.authorization.hierarchy import DEFAULT_HIERARCHY, RoleHierarchy
from bastion.domain.shared.authorization.resolver import PermissionResolver
from bastion.util.di.base import Provider
from bastion.util.di.scope import Scope

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "Bearer "


def bearer_token(request: Request) -> str | None:
    """The bearer token from the Authorization header, if any."""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith(_BEARER_PREFIX):
        return None
    return auth_header[len(_BEARER_PREFIX) :].strip() or None


class AuthProvider(Provider):
    """DI provider for the authorization engine, services and handlers."""

    request = from_context(provides=Request, scope=Scope.UOW)

    # Command Handlers
    change_role_handler = provide(ChangeRoleHandler, scope=Scope.UOW)
    update_permissions_handler = provide(UpdatePermissionsHandler, scope=Scope.UOW)

    # Query Handlers
    get_current_user_handler = provide(GetCurrentUserHandler, scope=Scope.UOW)
    list_roles_handler = provide(ListRolesHandler, scope=Scope.UOW)
    list_permissions_handler = provide(ListPermissionsHandler, scope=Scope.UOW)
    list_users_handler = provide(ListManageableUsersHandler, scope=Scope.UOW)
    get_audit_log_handler = provide(GetAuditLogHandler, scope=Scope.UOW)
    list_recent_changes_handler = provide(ListRecentChangesHandler, scope=Scope.UOW)

    # Services
    authorization_service = provide(AuthorizationService, scope=Scope.UOW)
    request_guard = provide(RequestGuard, scope=Scope.UOW)

    @provide(scope=Scope.APP)
    def get_catalog(self) -> PermissionCatalog:
        return DEFAULT_CATALOG

    @provide(scope=Scope.APP)
    def get_hierarchy(self, config: Config, catalog: PermissionCatalog) -> RoleHierarchy:
        """Built-in role map, or the configured override. Built once per process."""
        if config.rbac.role_permissions is None:
            hierarchy = DEFAULT_HIERARCHY
        else:
            logger.info("Using configured role-permission map")
            hierarchy = RoleHierarchy.from_config(config.rbac.role_permissions, catalog)

        for problem in hierarchy.validate(catalog):
            logger.error("RBAC configuration: %s", problem)
        return hierarchy

    @provide(scope=Scope.APP)
    def get_resolver(
        self, hierarchy: RoleHierarchy, catalog: PermissionCatalog
    ) -> PermissionResolver:
        return PermissionResolver(hierarchy=hierarchy, catalog=catalog)

    @provide(scope=Scope.UOW)
    async def get_auth_context(self, request: Request, guard: RequestGuard) -> AuthContext:
        """Authenticate the request and resolve its permissions.

        Raises:
            AuthorizationError: If no principal can be established (401)
        """
        return await guard.require(bearer_token(request))
