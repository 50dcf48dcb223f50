"""Tests for the pure permission predicates, including wildcard semantics."""

import pytest

from bastion.domain.shared.authorization.catalog import DEFAULT_CATALOG, PermissionCatalog
from bastion.domain.shared.authorization.checks import (
    EffectivePermissions,
    has_all_permissions,
    has_any_permission,
    has_permission,
    missing_permissions,
)
from bastion.domain.shared.authorization.permission import Action, Permission, Resource


def perms(*values: str) -> EffectivePermissions:
    return EffectivePermissions.of(Permission.of(v) for v in values)


class TestHasPermission:
    def test_exact_match(self) -> None:
        assert has_permission(perms("products.edit"), "products.edit")

    def test_absent(self) -> None:
        assert not has_permission(perms("products.view"), "products.edit")

    def test_accepts_typed_permission(self) -> None:
        assert has_permission(perms("users.view"), Permission.of("users.view"))

    def test_wildcard_grants_action(self) -> None:
        assert has_permission(perms("products.*"), "products.delete")

    def test_empty_set_denies(self) -> None:
        assert not has_permission(EffectivePermissions(), "products.view")

    def test_unparsable_request_denies(self) -> None:
        assert not has_permission(perms("products.*"), "products")
        assert not has_permission(perms("products.*"), "*")

    def test_concrete_grant_does_not_satisfy_wildcard_request(self) -> None:
        assert not has_permission(perms("media.view"), "media.*")

    def test_wildcard_does_not_grant_uncatalogued_action(self) -> None:
        assert not has_permission(perms("media.*"), "media.edit")
        assert not has_permission(perms("pages.*"), "pages.upload")
        assert not has_permission(perms("messages.*"), Permission.of("messages.publish"))

    def test_exact_grant_of_uncatalogued_action_denies(self) -> None:
        assert not has_permission(perms("media.edit"), "media.edit")

    def test_checks_use_the_resolving_catalog(self) -> None:
        narrow = PermissionCatalog({Resource.PRODUCTS: {Action.VIEW: "View products"}})
        granted = EffectivePermissions.of([Permission.wildcard(Resource.PRODUCTS)], narrow)
        assert has_permission(granted, "products.view")
        assert not has_permission(granted, "products.edit")
        assert missing_permissions(granted, ["products.view", "products.edit"]) == (
            "products.edit",
        )


class TestWildcardSemantics:
    @pytest.mark.parametrize("resource", list(Resource))
    def test_wildcard_completeness(self, resource: Resource) -> None:
        granted = EffectivePermissions.of([Permission.wildcard(resource)])
        for permission in DEFAULT_CATALOG.permissions(resource):
            assert has_permission(granted, permission)

    @pytest.mark.parametrize("resource", list(Resource))
    def test_wildcard_non_leakage(self, resource: Resource) -> None:
        granted = EffectivePermissions.of([Permission.wildcard(resource)])
        for other in Resource:
            if other is resource:
                continue
            for permission in DEFAULT_CATALOG.permissions(other):
                assert not has_permission(granted, permission)


class TestAnyAll:
    def test_any_true_if_one_matches(self) -> None:
        assert has_any_permission(perms("pages.view"), ["pages.edit", "pages.view"])

    def test_any_false_for_empty_request(self) -> None:
        assert not has_any_permission(perms("pages.view"), [])

    def test_all_requires_each(self) -> None:
        granted = perms("pages.*", "media.view")
        assert has_all_permissions(granted, ["pages.edit", "media.view"])
        assert not has_all_permissions(granted, ["pages.edit", "media.upload"])

    def test_all_true_for_empty_request(self) -> None:
        assert has_all_permissions(perms(), [])

    def test_missing_names_exact_strings(self) -> None:
        granted = perms("pages.*")
        assert missing_permissions(granted, ["pages.edit", "media.upload", "users.view"]) == (
            "media.upload",
            "users.view",
        )


class TestEffectivePermissions:
    def test_iteration_is_sorted(self) -> None:
        granted = perms("users.view", "media.view", "products.view")
        assert granted.to_strings() == ["media.view", "products.view", "users.view"]

    def test_expand_resolves_wildcards_against_catalog(self) -> None:
        expanded = perms("media.*", "users.view").expand(DEFAULT_CATALOG)
        assert expanded == sorted(
            ["media.view", "media.upload", "media.delete", "users.view"],
            key=Permission.of,
        )

    def test_bool_and_len(self) -> None:
        assert not EffectivePermissions()
        assert len(perms("users.view", "users.view")) == 1
