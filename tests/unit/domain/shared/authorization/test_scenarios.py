"""End-to-end checks of the documented resolution and management scenarios."""

from bastion.domain.auth.model.principal import Principal
from bastion.domain.auth.model.role import Role
from bastion.domain.auth.model.value import UserId
from bastion.domain.shared.authorization.checks import has_permission
from bastion.domain.shared.authorization.hierarchy import RoleHierarchy
from bastion.domain.shared.authorization.management import can_manage_user
from bastion.domain.shared.authorization.permission import Permission
from bastion.domain.shared.authorization.resolver import PermissionResolver


def make_principal(role: Role, *custom: str, user_id: str = "p") -> Principal:
    return Principal(user_id=UserId(user_id), role=role, custom_permissions=tuple(custom))


class TestSubstituteConfiguration:
    """STAFF {products.view, products.edit} over VIEWER {products.view}."""

    hierarchy = RoleHierarchy(
        {
            Role.STAFF: [Permission.of("products.view"), Permission.of("products.edit")],
            Role.VIEWER: [Permission.of("products.view")],
        }
    )

    def test_staff_permissions(self) -> None:
        resolver = PermissionResolver(hierarchy=self.hierarchy)
        effective = resolver.resolve(make_principal(Role.STAFF))
        assert has_permission(effective, "products.edit")
        assert not has_permission(effective, "products.delete")

    def test_staff_manages_viewer_but_not_the_reverse(self) -> None:
        staff = make_principal(Role.STAFF, user_id="staff")
        viewer = make_principal(Role.VIEWER, user_id="viewer")
        assert can_manage_user(staff, viewer, self.hierarchy)
        assert not can_manage_user(viewer, staff, self.hierarchy)


class TestDefaultConfiguration:
    def test_admin_wildcard_subsumes_unlisted_action(self) -> None:
        effective = PermissionResolver().resolve(make_principal(Role.ADMIN))
        assert Permission.of("products.delete") not in effective
        assert has_permission(effective, "products.delete")

    def test_admin_with_custom_list_loses_defaults(self) -> None:
        effective = PermissionResolver().resolve(make_principal(Role.ADMIN, "media.view"))
        assert not has_permission(effective, "products.edit")
        assert has_permission(effective, "media.view")
