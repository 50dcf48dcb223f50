"""Tests for PermissionCatalog."""

import pytest

from bastion.domain.shared.authorization.catalog import DEFAULT_CATALOG, PermissionCatalog
from bastion.domain.shared.authorization.permission import Action, Permission, Resource


class TestDefaultCatalog:
    def test_every_resource_is_catalogued(self) -> None:
        assert set(DEFAULT_CATALOG.resources()) == set(Resource)

    def test_wildcard_is_never_a_catalogued_action(self) -> None:
        for resource in DEFAULT_CATALOG.resources():
            assert Action.ALL not in DEFAULT_CATALOG.actions(resource)

    def test_contains_concrete_permission(self) -> None:
        assert Permission.of("users.manage_roles") in DEFAULT_CATALOG

    def test_does_not_contain_uncatalogued_action(self) -> None:
        # Valid action name, but not defined for messages
        assert Permission.of("messages.publish") not in DEFAULT_CATALOG

    def test_contains_wildcard_for_catalogued_resource(self) -> None:
        assert Permission.wildcard(Resource.SETTINGS) in DEFAULT_CATALOG

    def test_dashboard_widgets_are_catalogued(self) -> None:
        actions = DEFAULT_CATALOG.actions(Resource.DASHBOARD)
        assert Action.SEARCH_ANALYTICS in actions
        assert Action.RECENT_ACTIVITY in actions

    def test_len_counts_concrete_permissions(self) -> None:
        assert len(DEFAULT_CATALOG) == len(list(DEFAULT_CATALOG))


class TestParse:
    def test_parse_known(self) -> None:
        assert DEFAULT_CATALOG.parse("pages.publish") == Permission(Resource.PAGES, Action.PUBLISH)

    def test_parse_unknown_returns_none(self) -> None:
        assert DEFAULT_CATALOG.parse("pages.upload") is None
        assert DEFAULT_CATALOG.parse("garbage") is None

    def test_invalid_lists_only_bad_entries(self) -> None:
        values = ["products.view", "products.fly", "*", "media.*"]
        assert DEFAULT_CATALOG.invalid(values) == ["products.fly", "*"]


class TestExpand:
    def test_wildcard_expands_to_every_current_action(self) -> None:
        expanded = DEFAULT_CATALOG.expand(Permission.wildcard(Resource.MEDIA))
        assert {str(p) for p in expanded} == {"media.view", "media.upload", "media.delete"}

    def test_concrete_expands_to_itself(self) -> None:
        permission = Permission.of("media.view")
        assert DEFAULT_CATALOG.expand(permission) == (permission,)

    def test_uncatalogued_expands_to_nothing(self) -> None:
        assert DEFAULT_CATALOG.expand(Permission.of("media.publish")) == ()

    def test_wildcard_follows_catalog_growth(self) -> None:
        small = PermissionCatalog({Resource.MEDIA: {Action.VIEW: "View"}})
        grown = PermissionCatalog({Resource.MEDIA: {Action.VIEW: "View", Action.UPLOAD: "Upload"}})
        wildcard = Permission.wildcard(Resource.MEDIA)
        assert len(small.expand(wildcard)) == 1
        assert len(grown.expand(wildcard)) == 2


class TestDescriptions:
    def test_describe_concrete(self) -> None:
        assert DEFAULT_CATALOG.describe(Permission.of("products.delete")) == (
            "Delete products permanently"
        )

    def test_describe_wildcard(self) -> None:
        assert DEFAULT_CATALOG.describe(Permission.wildcard(Resource.USERS)) == (
            "All user management permissions"
        )

    def test_descriptions_include_concrete_and_wildcards(self) -> None:
        described = DEFAULT_CATALOG.descriptions()
        assert "homepage.edit" in described
        assert "homepage.*" in described


class TestConstruction:
    def test_rejects_wildcard_entry(self) -> None:
        with pytest.raises(ValueError):
            PermissionCatalog({Resource.MEDIA: {Action.ALL: "Everything"}})

    def test_catalog_is_not_mutated_by_source_dict(self) -> None:
        source = {Resource.MEDIA: {Action.VIEW: "View"}}
        catalog = PermissionCatalog(source)
        source[Resource.MEDIA][Action.DELETE] = "Delete"
        assert catalog.actions(Resource.MEDIA) == (Action.VIEW,)
