"""Auth domain models."""

from .principal import Principal
from .role import Role
from .user import UserRecord
from .value import ProviderIdentity, UserId

__all__ = [
    "Principal",
    "ProviderIdentity",
    "Role",
    "UserId",
    "UserRecord",
]
