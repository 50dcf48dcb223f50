"""Auth domain services."""

from .authorization import AuthorizationService

__all__ = ["AuthorizationService"]
