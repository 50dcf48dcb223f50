"""UserRecord: the stored user as supplied by the user store collaborator."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from bastion.domain.auth.model.principal import Principal
from bastion.domain.auth.model.role import Role
from bastion.domain.auth.model.value import UserId


class UserRecord(BaseModel):
    """A user as persisted by the external user store.

    The engine only reads these; role and permission edits go through
    AuthorizationService, which hands the updated record back to the store.

    Invariants:
    - `id` is immutable after creation
    - `permissions` empty means "use the role's defaults"
    """

    id: UserId
    email: str
    name: str | None = None
    role: Role = Role.VIEWER
    permissions: list[str] = Field(default_factory=list)
    updated_at: datetime | None = None

    @classmethod
    def create(
        cls,
        email: str,
        role: Role = Role.VIEWER,
        name: str | None = None,
    ) -> "UserRecord":
        """Create a new user with no custom permissions."""
        return cls(id=UserId.generate(), email=email, name=name, role=role)

    def to_principal(self) -> Principal:
        return Principal(
            user_id=self.id,
            role=self.role,
            custom_permissions=tuple(self.permissions),
        )

    def change_role(self, role: Role) -> None:
        """Move to a new role and drop custom permissions so its defaults apply."""
        self.role = role
        self.permissions = []
        self.updated_at = datetime.now(UTC)

    def replace_permissions(self, permissions: list[str]) -> None:
        self.permissions = list(dict.fromkeys(permissions))
        self.updated_at = datetime.now(UTC)
