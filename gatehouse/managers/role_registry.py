"""
Gatehouse - Role Registry

Catalog operations over the roles table plus maintenance of each role's
permission set. Permissions referenced by slug are created on demand through
PermissionRegistry.CreateOrGet.
"""

import logging
from typing import Iterable, List, Optional

from gatehouse.exceptions import DuplicateSlugError
from gatehouse.managers.permission_registry import PermissionRegistry
from gatehouse.models.database import Role, Permission
from gatehouse.naming import HumanizeSlug, SplitIdentifiers

# Create logger
logger = logging.getLogger(__name__)


class RoleRegistry:
    """
    Looks up, creates and deletes roles, and attaches/detaches their permissions
    """

    def __init__(self, session, permission_registry: Optional[PermissionRegistry] = None):
        """
        Args:
            session: SQLAlchemy session
            permission_registry: Registry used for create-or-get of permissions
        """
        self.session = session
        self.permissions = permission_registry or PermissionRegistry(session)

    # ==================== Catalog ====================

    def FindBySlug(self, slug: str) -> Optional[Role]:
        return self.session.query(Role).filter(Role.slug == slug).first()

    def GetAll(self) -> List[Role]:
        return self.session.query(Role).order_by(Role.slug).all()

    def Create(self, name: str, slug: str, description: Optional[str] = None) -> Role:
        """
        Create a new role

        Raises:
            DuplicateSlugError: If a role with this slug exists
        """
        if self.FindBySlug(slug) is not None:
            raise DuplicateSlugError("Role", slug)

        role = Role(name=name, slug=slug, description=description)
        self.session.add(role)
        self.session.flush()  # Flush to get the role_id
        logger.info(f"Created role '{slug}'")
        return role

    def CreateOrGet(self, slug: str, name: Optional[str] = None, description: Optional[str] = None) -> Role:
        """Return the role for slug, creating it if it doesn't exist"""
        existing = self.FindBySlug(slug)
        if existing is not None:
            return existing
        return self.Create(name or HumanizeSlug(slug), slug, description)

    def Delete(self, role: Role):
        """
        Delete one role
        User and permission associations go with it; users and permissions stay.
        """
        slug = role.slug
        self.session.delete(role)
        self.session.flush()
        logger.info(f"Deleted role '{slug}'")

    def DeleteAll(self) -> int:
        """
        Delete every role
        Both association tables are cleared by the database cascade.

        Returns:
            int: Number of roles deleted
        """
        self.session.flush()
        count = self.session.query(Role).count()
        self.session.query(Role).delete(synchronize_session=False)
        self.session.expire_all()
        logger.info(f"Deleted {count} role(s)")
        return count

    # ==================== Permission Queries ====================

    def GetPermissions(self, role: Role) -> List[Permission]:
        return role.GetPermissions()

    def HasPermission(self, role: Role, permission_slug: str) -> bool:
        return role.HasPermission(permission_slug)

    def HasAnyPermission(self, role: Role, permission_slugs: Iterable[str]) -> bool:
        return role.HasAnyPermission(permission_slugs)

    # ==================== Permission Mutations ====================

    def AttachPermission(self, role: Role, permission_slug: str) -> bool:
        """
        Attach a permission to the role, creating the permission if needed

        Args:
            role: Role to modify
            permission_slug: Slug of the permission

        Returns:
            bool: True if a new attachment was made, False if already attached
        """
        permission = self.permissions.CreateOrGet(permission_slug)

        if permission in role.permissions:
            return False

        role.permissions.append(permission)
        self.session.flush()
        logger.debug(f"Attached permission '{permission_slug}' to role '{role.slug}'")
        return True

    def AttachPermissions(self, role: Role, permission_slugs: Iterable[str]) -> bool:
        """
        Attach several permissions

        Returns:
            bool: True if at least one new attachment was made
        """
        changes_made = False
        for slug in SplitIdentifiers(permission_slugs):
            if self.AttachPermission(role, slug):
                changes_made = True
        return changes_made

    def SyncPermissions(self, role: Role, permission_slugs: Iterable[str]) -> bool:
        """
        Make the role's permission set exactly the given slugs

        Missing permissions are created. An empty list is ignored and leaves the
        current permissions untouched.

        Args:
            role: Role to modify
            permission_slugs: Slugs the role should end up with

        Returns:
            bool: True if anything was attached or detached
        """
        slugs = SplitIdentifiers(permission_slugs)
        if not slugs:
            return False

        target = []
        for slug in slugs:
            permission = self.permissions.CreateOrGet(slug)
            if permission not in target:
                target.append(permission)

        current = list(role.permissions)
        to_attach = [permission for permission in target if permission not in current]
        to_detach = [permission for permission in current if permission not in target]

        for permission in to_detach:
            role.permissions.remove(permission)
        for permission in to_attach:
            role.permissions.append(permission)

        if to_attach or to_detach:
            self.session.flush()
            logger.debug(
                f"Synced role '{role.slug}': attached {[p.slug for p in to_attach]}, "
                f"detached {[p.slug for p in to_detach]}"
            )
            return True
        return False

    def DetachPermission(self, role: Role, permission_slug: str) -> bool:
        """
        Detach a permission from the role

        Returns:
            bool: True if the permission was attached and has been removed
        """
        permission = self.permissions.FindBySlug(permission_slug)
        if permission is None or permission not in role.permissions:
            return False

        role.permissions.remove(permission)
        self.session.flush()
        logger.debug(f"Detached permission '{permission_slug}' from role '{role.slug}'")
        return True

    def DetachPermissions(self, role: Role, permission_slugs: Iterable[str]) -> int:
        """
        Detach several permissions

        Returns:
            int: Number of permissions actually detached
        """
        return sum(1 for slug in SplitIdentifiers(permission_slugs) if self.DetachPermission(role, slug))

    def DetachAllPermissions(self, role: Role) -> int:
        """
        Detach every permission from the role

        Returns:
            int: Number of permissions the role had
        """
        count = len(role.permissions)
        role.permissions.clear()
        self.session.flush()
        return count
