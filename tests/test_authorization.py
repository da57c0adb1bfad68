"""
Tests for the principal authorization queries and user-role helpers
"""

import pytest

from gatehouse.managers import RoleRegistry
from gatehouse.models.database.user import User


@pytest.fixture
def principals(session):
    """alice: admin + editor, bob: viewer, carol: no roles"""
    roles = RoleRegistry(session)
    admin = roles.Create("Administrator", "admin")
    editor = roles.Create("Editor", "editor")
    viewer = roles.Create("Viewer", "viewer")
    roles.AttachPermissions(admin, ["manage-users", "read-report"])
    roles.AttachPermissions(editor, ["edit-post"])
    roles.AttachPermissions(viewer, ["read-report"])

    alice = User(username="alice")
    bob = User(username="bob")
    carol = User(username="carol")
    session.add_all([alice, bob, carol])
    alice.AssignRole(admin)
    alice.AssignRole(editor)
    bob.AssignRole(viewer)
    session.commit()
    return {"alice": alice, "bob": bob, "carol": carol}


def test_has_role(principals):
    alice = principals["alice"]

    assert alice.HasRole("admin") is True
    assert alice.HasRole("viewer") is False
    assert principals["carol"].HasRole("admin") is False


def test_has_any_role(principals):
    bob = principals["bob"]

    assert bob.HasAnyRole(["admin", "viewer"]) is True
    assert bob.HasAnyRole("admin|viewer") is True
    assert bob.HasAnyRole(["admin", "editor"]) is False
    assert bob.HasAnyRole([]) is False


def test_permissions_come_from_roles(principals):
    alice = principals["alice"]

    assert alice.HasPermission("manage-users") is True
    assert alice.HasPermission("edit-post") is True
    assert principals["bob"].HasPermission("manage-users") is False
    assert principals["carol"].HasPermission("read-report") is False
    assert alice.GetPermissionSlugs() == {"manage-users", "read-report", "edit-post"}


def test_has_any_permission(principals):
    bob = principals["bob"]

    assert bob.HasAnyPermission(["manage-users", "read-report"]) is True
    assert bob.HasAnyPermission(["manage-users", "edit-post"]) is False
    assert bob.HasAnyPermission([]) is False


def test_assign_and_remove_role(session, principals):
    carol = principals["carol"]
    viewer = RoleRegistry(session).FindBySlug("viewer")

    assert carol.AssignRole(viewer) is True
    assert carol.AssignRole(viewer) is False
    session.commit()
    assert carol.HasPermission("read-report") is True

    assert carol.RemoveRole(viewer) is True
    assert carol.RemoveRole(viewer) is False
    session.commit()
    assert carol.GetRoles() == []


def test_permission_changes_apply_to_holders(session, principals):
    roles = RoleRegistry(session)
    viewer = roles.FindBySlug("viewer")

    roles.AttachPermission(viewer, "export-report")
    session.commit()

    assert principals["bob"].HasPermission("export-report") is True


def test_database_manager_lookups(db_manager, session, principals):
    assert db_manager.GetUser(session, principals["alice"].user_id) is principals["alice"]
    assert db_manager.GetUser(session, 9999) is None
    assert db_manager.CountRows(session) == {"roles": 3, "permissions": 3}
