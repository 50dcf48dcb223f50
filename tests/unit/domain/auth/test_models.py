"""Tests for auth domain models."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from bastion.domain.auth.model.audit import RbacChange, RbacChangeKind
from bastion.domain.auth.model.principal import Principal
from bastion.domain.auth.model.role import Role
from bastion.domain.auth.model.user import UserRecord
from bastion.domain.auth.model.value import UserId


class TestUserId:
    def test_blank_rejected(self) -> None:
        with pytest.raises(PydanticValidationError):
            UserId("  ")

    def test_generated_ids_are_unique(self) -> None:
        assert UserId.generate() != UserId.generate()

    def test_hashable(self) -> None:
        assert {UserId("a"), UserId("a")} == {UserId("a")}


class TestPrincipal:
    def test_minimum_role(self) -> None:
        staff = Principal(UserId("s"), Role.STAFF)
        assert staff.has_minimum_role(Role.CONTENT_EDITOR)
        assert staff.has_minimum_role(Role.STAFF)
        assert not staff.has_minimum_role(Role.ADMIN)

    def test_custom_permissions_flag(self) -> None:
        assert not Principal(UserId("s"), Role.STAFF).has_custom_permissions
        assert Principal(UserId("s"), Role.STAFF, ("media.view",)).has_custom_permissions


class TestUserRecord:
    def test_create_defaults_to_viewer_without_custom_permissions(self) -> None:
        user = UserRecord.create(email="new@example.com")
        assert user.role is Role.VIEWER
        assert user.permissions == []

    def test_to_principal(self) -> None:
        user = UserRecord(id=UserId("u"), email="u@x", role=Role.ADMIN, permissions=["media.view"])
        principal = user.to_principal()
        assert principal.user_id == UserId("u")
        assert principal.custom_permissions == ("media.view",)

    def test_change_role_clears_permissions(self) -> None:
        user = UserRecord(id=UserId("u"), email="u@x", role=Role.STAFF, permissions=["media.view"])
        user.change_role(Role.ADMIN)
        assert user.role is Role.ADMIN
        assert user.permissions == []
        assert user.updated_at is not None

    def test_replace_permissions_deduplicates_in_order(self) -> None:
        user = UserRecord(id=UserId("u"), email="u@x")
        user.replace_permissions(["b.view", "a.view", "b.view"])
        assert user.permissions == ["b.view", "a.view"]


class TestRbacChange:
    def test_involves_actor_and_target(self) -> None:
        change = RbacChange.create(
            kind=RbacChangeKind.ROLE_CHANGE,
            actor_id=UserId("actor"),
            target_id=UserId("target"),
            old_value={"role": "VIEWER"},
            new_value={"role": "STAFF"},
        )
        assert change.involves(UserId("actor"))
        assert change.involves(UserId("target"))
        assert not change.involves(UserId("bystander"))
