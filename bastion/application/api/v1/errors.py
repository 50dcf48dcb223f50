"""Centralized error transformation for API routes.

Maps Bastion errors (domain and infrastructure) to HTTPException responses.
"""

from typing import Any

from fastapi import HTTPException

from bastion.domain.shared.error import (
    AuthorizationError,
    BastionError,
    ConflictError,
    DomainError,
    InfrastructureError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    NotFoundError: 404,
    ValidationError: 422,
    InvalidStateError: 409,
    ConflictError: 409,
    AuthorizationError: 403,
}


def map_bastion_error(error: BastionError) -> HTTPException:
    """Map a Bastion error to an HTTPException.

    Args:
        error: The Bastion error to map.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
    }

    if isinstance(error, InfrastructureError):
        # Unreachable collaborators map to 503
        return HTTPException(status_code=503, detail=detail)

    if isinstance(error, DomainError):
        status_code = DOMAIN_ERROR_STATUS_MAP.get(type(error), 400)
        if isinstance(error, ValidationError):
            if error.field is not None:
                detail["field"] = error.field
            if error.invalid:
                detail["invalid"] = list(error.invalid)
        if isinstance(error, AuthorizationError):
            # Distinguish 401 (unauthenticated) from 403 (unauthorized)
            if error.unauthenticated:
                return HTTPException(
                    status_code=401,
                    detail=detail,
                    headers={"WWW-Authenticate": "Bearer"},
                )
            if error.missing_permissions:
                detail["missing_permissions"] = list(error.missing_permissions)
        return HTTPException(status_code=status_code, detail=detail)

    # Fallback for unknown BastionError subclasses
    return HTTPException(status_code=500, detail=detail)
