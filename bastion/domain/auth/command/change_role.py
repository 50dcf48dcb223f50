"""ChangeRole command and handler."""

from bastion.domain.auth.model.role import Role
from bastion.domain.auth.model.value import UserId
from bastion.domain.auth.query.list_users import UserDTO
from bastion.domain.auth.service.authorization import AuthorizationService
from bastion.domain.shared.authorization.guard import AuthContext
from bastion.domain.shared.authorization.gate import permitted
from bastion.domain.shared.authorization.permission import Action, Permission, Resource
from bastion.domain.shared.command import Command, CommandHandler, Result
from bastion.domain.shared.error import ValidationError


class ChangeRole(Command):
    """Command to move a user to another role."""

    user_id: str
    role: str  # Role name from API, case-insensitive


class ChangeRoleResult(Result):
    user: UserDTO


class ChangeRoleHandler(CommandHandler[ChangeRole, ChangeRoleResult]):
    __auth__ = permitted(Permission(Resource.USERS, Action.MANAGE_ROLES))
    auth: AuthContext
    authorization_service: AuthorizationService

    async def run(self, cmd: ChangeRole) -> ChangeRoleResult:
        try:
            role = Role.parse(cmd.role)
        except ValueError as e:
            raise ValidationError(str(e), field="role") from e

        user = await self.authorization_service.change_role(
            actor=self.auth.principal,
            user_id=UserId(cmd.user_id),
            role=role,
        )
        return ChangeRoleResult(user=UserDTO.from_record(user))
