"""UpdatePermissions command and handler."""

from bastion.domain.auth.model.value import UserId
from bastion.domain.auth.query.list_users import UserDTO
from bastion.domain.auth.service.authorization import AuthorizationService
from bastion.domain.shared.authorization.guard import AuthContext
from bastion.domain.shared.authorization.gate import permitted
from bastion.domain.shared.authorization.permission import Action, Permission, Resource
from bastion.domain.shared.command import Command, CommandHandler, Result


class UpdatePermissions(Command):
    """Command to replace a user's custom permission list.

    An empty list restores the role defaults.
    """

    user_id: str
    permissions: list[str]


class UpdatePermissionsResult(Result):
    user: UserDTO


class UpdatePermissionsHandler(CommandHandler[UpdatePermissions, UpdatePermissionsResult]):
    __auth__ = permitted(Permission(Resource.USERS, Action.EDIT_PERMISSIONS))
    auth: AuthContext
    authorization_service: AuthorizationService

    async def run(self, cmd: UpdatePermissions) -> UpdatePermissionsResult:
        user = await self.authorization_service.update_permissions(
            actor=self.auth.principal,
            user_id=UserId(cmd.user_id),
            permissions=cmd.permissions,
        )
        return UpdatePermissionsResult(user=UserDTO.from_record(user))
