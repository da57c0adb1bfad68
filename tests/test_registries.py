"""
Tests for the permission and role registries
"""

import pytest

from gatehouse.exceptions import DuplicateSlugError
from gatehouse.managers import PermissionRegistry, RoleRegistry
from gatehouse.models.database import Permission, PermissionRole, Role, RoleUser
from gatehouse.models.database.user import User


@pytest.fixture
def permissions(session):
    return PermissionRegistry(session)


@pytest.fixture
def roles(session, permissions):
    return RoleRegistry(session, permissions)


def slugs_of(role):
    return {permission.slug for permission in role.permissions}


# ==================== Permission Registry ====================

def test_create_and_find_permission(permissions):
    created = permissions.Create("Read User", "read-user", "Ability to Read User permission.")

    found = permissions.FindBySlug("read-user")
    assert found is created
    assert found.permission_id is not None
    assert permissions.FindBySlug("missing") is None


def test_create_duplicate_permission_slug(permissions):
    permissions.Create("Read User", "read-user")

    with pytest.raises(DuplicateSlugError) as excinfo:
        permissions.Create("Another Name", "read-user")

    assert excinfo.value.slug == "read-user"


def test_create_or_get_permission(permissions):
    """Existing rows are reused and new rows get default name/description"""
    existing = permissions.Create("Read User", "read-user")

    assert permissions.CreateOrGet("read-user") is existing

    created = permissions.CreateOrGet("manage-users")
    assert created.name == "Manage Users"
    assert created.description == "Ability to Manage Users permission."
    assert len(permissions.GetAll()) == 2


def test_delete_all_permissions(session, permissions, roles):
    role = roles.Create("Admin", "admin")
    roles.AttachPermissions(role, ["a", "b", "c"])
    session.commit()

    assert permissions.DeleteAll() == 3
    session.commit()

    assert session.query(Permission).count() == 0
    assert session.query(PermissionRole).count() == 0
    # Roles survive the permission wipe
    assert roles.FindBySlug("admin") is not None
    assert roles.FindBySlug("admin").permissions == []


def test_deleting_permission_keeps_unrelated_roles(session, permissions, roles):
    admin = roles.Create("Admin", "admin")
    viewer = roles.Create("Viewer", "viewer")
    roles.AttachPermissions(admin, ["read", "write"])
    roles.AttachPermissions(viewer, ["read"])
    session.commit()

    session.delete(permissions.FindBySlug("read"))
    session.commit()
    session.expire_all()

    remaining = {(row.role_id, row.permission_id) for row in session.query(PermissionRole).all()}
    write = permissions.FindBySlug("write")
    assert remaining == {(admin.role_id, write.permission_id)}
    assert {role.slug for role in roles.GetAll()} == {"admin", "viewer"}
    assert slugs_of(roles.FindBySlug("viewer")) == set()


# ==================== Role Registry ====================

def test_create_duplicate_role_slug(roles):
    roles.Create("Admin", "admin")

    with pytest.raises(DuplicateSlugError):
        roles.Create("Administrator", "admin")


def test_create_or_get_role(roles):
    admin = roles.Create("Administrator", "admin")

    assert roles.CreateOrGet("admin") is admin
    assert roles.CreateOrGet("content-manager").name == "Content Manager"


def test_attach_permission_creates_missing_permission(permissions, roles):
    role = roles.Create("Admin", "admin")

    assert roles.AttachPermission(role, "publish-post") is True
    assert permissions.FindBySlug("publish-post") is not None
    assert roles.AttachPermission(role, "publish-post") is False
    assert slugs_of(role) == {"publish-post"}


def test_attach_permissions(roles):
    role = roles.Create("Admin", "admin")

    assert roles.AttachPermissions(role, ["a", "b"]) is True
    assert roles.AttachPermissions(role, ["a", "b"]) is False
    assert roles.AttachPermissions(role, ["b", "c"]) is True
    assert roles.AttachPermissions(role, []) is False
    assert slugs_of(role) == {"a", "b", "c"}


def test_sync_permissions_with_empty_list_is_noop(roles):
    role = roles.Create("Admin", "admin")
    roles.AttachPermissions(role, ["a", "b"])

    assert roles.SyncPermissions(role, []) is False
    assert slugs_of(role) == {"a", "b"}


def test_sync_permissions_replaces_set(session, roles):
    role = roles.Create("Admin", "admin")

    assert roles.SyncPermissions(role, ["a", "b"]) is True
    assert slugs_of(role) == {"a", "b"}

    assert roles.SyncPermissions(role, ["b", "c"]) is True
    session.commit()
    session.expire_all()

    assert slugs_of(roles.FindBySlug("admin")) == {"b", "c"}
    assert roles.SyncPermissions(role, ["c", "b"]) is False


def test_has_permission_checks(roles):
    role = roles.Create("Admin", "admin")
    roles.AttachPermissions(role, ["a", "b"])

    assert roles.HasPermission(role, "a") is True
    assert roles.HasPermission(role, "z") is False
    assert roles.HasAnyPermission(role, ["z", "b"]) is True
    assert roles.HasAnyPermission(role, ["y", "z"]) is False
    assert roles.HasAnyPermission(role, []) is False
    assert [p.slug for p in roles.GetPermissions(role)] == ["a", "b"]


def test_detach_permissions(permissions, roles):
    role = roles.Create("Admin", "admin")
    roles.AttachPermissions(role, ["a", "b", "c", "d"])

    assert roles.DetachPermission(role, "a") is True
    assert roles.DetachPermission(role, "a") is False
    assert roles.DetachPermission(role, "unknown") is False
    assert roles.DetachPermissions(role, ["b", "c", "unknown"]) == 2
    assert slugs_of(role) == {"d"}
    # Detaching never deletes the permission itself
    assert permissions.FindBySlug("a") is not None


def test_detach_all_permissions(roles):
    role = roles.Create("Admin", "admin")
    roles.AttachPermissions(role, ["a", "b", "c"])

    assert roles.DetachAllPermissions(role) == 3
    assert roles.DetachAllPermissions(role) == 0
    assert slugs_of(role) == set()


def test_delete_role_cascades_associations(session, permissions, roles):
    role = roles.Create("Admin", "admin")
    roles.AttachPermissions(role, ["a", "b"])
    user = User(username="alice")
    session.add(user)
    user.AssignRole(role)
    session.commit()

    roles.Delete(role)
    session.commit()
    session.expire_all()

    assert session.query(Role).count() == 0
    assert session.query(PermissionRole).count() == 0
    assert session.query(RoleUser).count() == 0
    assert session.query(User).filter(User.username == "alice").one().roles == []
    assert len(permissions.GetAll()) == 2


def test_delete_all_roles(session, roles):
    roles.Create("Admin", "admin")
    roles.Create("Viewer", "viewer")
    session.commit()

    assert roles.DeleteAll() == 2
    assert roles.GetAll() == []
