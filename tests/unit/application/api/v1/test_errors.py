"""Tests for the error-to-HTTP mapping."""

from bastion.application.api.v1.errors import map_bastion_error
from bastion.domain.shared.error import (
    AuthorizationError,
    BastionError,
    ConflictError,
    ExternalServiceError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)


class TestMapBastionError:
    def test_not_found(self) -> None:
        exc = map_bastion_error(NotFoundError("User u1 not found", code="user_not_found"))
        assert exc.status_code == 404
        assert exc.detail == {"code": "user_not_found", "message": "User u1 not found"}

    def test_validation_carries_field_and_invalid(self) -> None:
        exc = map_bastion_error(
            ValidationError(
                "Invalid permissions: bogus.x", field="permissions", invalid=["bogus.x"]
            )
        )
        assert exc.status_code == 422
        assert exc.detail["field"] == "permissions"
        assert exc.detail["invalid"] == ["bogus.x"]

    def test_state_and_conflict(self) -> None:
        assert map_bastion_error(InvalidStateError("x", code="last_top_role")).status_code == 409
        assert map_bastion_error(ConflictError("x")).status_code == 409

    def test_unauthenticated_is_401_with_challenge(self) -> None:
        for code in ("missing_token", "invalid_token", "unknown_user"):
            exc = map_bastion_error(AuthorizationError("nope", code=code))
            assert exc.status_code == 401
            assert exc.headers == {"WWW-Authenticate": "Bearer"}

    def test_denied_is_403_with_missing_permissions(self) -> None:
        exc = map_bastion_error(
            AuthorizationError(
                "Missing permission: users.view",
                code="access_denied",
                missing_permissions=("users.view",),
            )
        )
        assert exc.status_code == 403
        assert exc.detail["missing_permissions"] == ["users.view"]
        assert exc.headers is None

    def test_rank_denial_has_no_missing_permissions(self) -> None:
        exc = map_bastion_error(AuthorizationError("Cannot manage", code="access_denied"))
        assert exc.status_code == 403
        assert "missing_permissions" not in exc.detail

    def test_infrastructure_is_503(self) -> None:
        assert map_bastion_error(ExternalServiceError("store down")).status_code == 503

    def test_unknown_subclass_is_500(self) -> None:
        class OddError(BastionError): ...

        assert map_bastion_error(OddError("odd")).status_code == 500
