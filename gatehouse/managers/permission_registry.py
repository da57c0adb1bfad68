"""
Gatehouse - Permission Registry

Catalog operations over the permissions table. Every operation works inside
the caller's session and only flushes; committing is left to the caller.
"""

import logging
from typing import List, Optional

from gatehouse.exceptions import DuplicateSlugError
from gatehouse.models.database import Permission
from gatehouse.naming import HumanizeSlug, DefaultPermissionDescription

# Create logger
logger = logging.getLogger(__name__)


class PermissionRegistry:
    """
    Looks up, creates and deletes permissions by slug
    """

    def __init__(self, session):
        """
        Args:
            session: SQLAlchemy session
        """
        self.session = session

    def FindBySlug(self, slug: str) -> Optional[Permission]:
        """
        Find a permission by slug

        Args:
            slug: Permission slug

        Returns:
            Permission: The permission, or None if not found
        """
        return self.session.query(Permission).filter(Permission.slug == slug).first()

    def GetAll(self) -> List[Permission]:
        return self.session.query(Permission).order_by(Permission.slug).all()

    def Create(self, name: str, slug: str, description: Optional[str] = None) -> Permission:
        """
        Create a new permission

        Args:
            name: Display name
            slug: Unique slug
            description: Optional description

        Returns:
            Permission: The created permission

        Raises:
            DuplicateSlugError: If a permission with this slug exists
        """
        if self.FindBySlug(slug) is not None:
            raise DuplicateSlugError("Permission", slug)

        permission = Permission(name=name, slug=slug, description=description)
        self.session.add(permission)
        self.session.flush()  # Flush to get the permission_id
        logger.info(f"Created permission '{slug}'")
        return permission

    def CreateOrGet(self, slug: str, name: Optional[str] = None, description: Optional[str] = None) -> Permission:
        """
        Return the permission for slug, creating it if it doesn't exist

        Args:
            slug: Permission slug
            name: Display name for a new permission (defaults to the humanized slug)
            description: Description for a new permission

        Returns:
            Permission: Existing or newly created permission
        """
        existing = self.FindBySlug(slug)
        if existing is not None:
            return existing

        name = name or HumanizeSlug(slug)
        return self.Create(name, slug, description or DefaultPermissionDescription(name))

    def DeleteAll(self) -> int:
        """
        Delete every permission
        Role associations are removed by the database cascade.

        Returns:
            int: Number of permissions deleted
        """
        self.session.flush()
        count = self.session.query(Permission).count()
        self.session.query(Permission).delete(synchronize_session=False)
        # Loaded role.permissions collections are stale after a bulk delete
        self.session.expire_all()
        logger.info(f"Deleted {count} permission(s)")
        return count
