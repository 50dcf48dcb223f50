"""Auth domain ports."""

from .identity_provider import IdentityProvider
from .repository import AuditLog, UserRepository

__all__ = [
    "AuditLog",
    "IdentityProvider",
    "UserRepository",
]
