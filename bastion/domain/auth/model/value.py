"""Value objects for the auth domain."""

from dataclasses import dataclass
from uuid import uuid4

from pydantic import RootModel, field_validator


class UserId(RootModel[str]):
    """Identifier of a user in the external user store."""

    @field_validator("root")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("User ID cannot be blank")
        return v

    @classmethod
    def generate(cls) -> "UserId":
        return cls(uuid4().hex)

    def __str__(self) -> str:
        return self.root

    def __hash__(self) -> int:
        return hash(self.root)


@dataclass(frozen=True)
class ProviderIdentity:
    """An identity established by the external identity provider.

    Encapsulates provider + external_id together since they're always used as a pair.
    """

    provider: str  # e.g., "jwt", "clerk"
    external_id: str  # Provider-specific subject, e.g. the user's email
