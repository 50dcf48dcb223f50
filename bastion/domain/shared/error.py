"""Error hierarchy for Bastion.

Error layers:
- BastionError: Base class for all Bastion errors
- DomainError: Business rule violations, denied access, validation failures (4xx responses)
- InfrastructureError: System-level failures like an unreachable user store (503 responses)

These errors are mapped to HTTP responses by the global exception handler in app.py.
"""


class BastionError(Exception):
    """Base class for all Bastion errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations - typically 4xx)
# =============================================================================


class DomainError(BastionError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        invalid: list[str] | None = None,
    ) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field
        self.invalid = invalid or []


class InvalidStateError(DomainError):
    """Operation not allowed in current state."""


class ConflictError(DomainError):
    """Resource already exists or version conflict."""


class AuthorizationError(DomainError):
    """Caller is not authenticated or not authorized for this operation.

    The unauthenticated codes mean no principal could be established (401).
    Any other code is a denial for an authenticated principal (403), in which
    case ``missing_permissions`` names what was lacking.
    """

    UNAUTHENTICATED_CODES = frozenset({"missing_token", "invalid_token", "unknown_user"})

    def __init__(
        self,
        message: str,
        code: str | None = None,
        missing_permissions: tuple[str, ...] = (),
    ) -> None:
        super().__init__(message, code=code)
        self.missing_permissions = missing_permissions

    @property
    def unauthenticated(self) -> bool:
        return self.code in self.UNAUTHENTICATED_CODES


# =============================================================================
# Infrastructure Errors (system-level failures - typically 503)
# =============================================================================


class InfrastructureError(BastionError):
    """Base class for infrastructure/system errors."""


class ExternalServiceError(InfrastructureError):
    """External collaborator (identity provider, user store) is unavailable or failed."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
