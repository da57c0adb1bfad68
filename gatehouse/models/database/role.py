"""
Gatehouse - Role Database Model

Role model for RBAC (Role-Based Access Control).
Stores role definitions and their relationships with permissions.
Principals reach their roles through HasRolesMixin; Role has no relationship back to them.
"""

from datetime import datetime, timezone
from typing import Iterable, List
from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship

from gatehouse.models.database.base import Base, TABLES
from gatehouse.naming import SplitIdentifiers


class Role(Base):
    """
    Roles table - stores role definitions for RBAC
    """
    __tablename__ = TABLES.roles
    __table_args__ = {"sqlite_autoincrement": True}

    role_id = Column(Integer, primary_key=True, autoincrement=True)
    slug = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationship to permissions through junction table
    permissions = relationship(
        "Permission",
        secondary=TABLES.permission_role,
        back_populates="roles",
        passive_deletes=True,
        order_by="Permission.slug",
    )

    def GetPermissions(self) -> List["Permission"]:
        """Return the permissions attached to this role"""
        return list(self.permissions)

    def GetPermissionSlugs(self) -> set:
        return {permission.slug for permission in self.permissions}

    def HasPermission(self, permission_slug: str) -> bool:
        """Check if the role has the permission with this slug"""
        return permission_slug in self.GetPermissionSlugs()

    def HasAnyPermission(self, permission_slugs: Iterable[str]) -> bool:
        """Check if the role has any of the given permissions (False when none are given)"""
        wanted = set(SplitIdentifiers(permission_slugs))
        if not wanted:
            return False
        return bool(wanted & self.GetPermissionSlugs())

    def __repr__(self):
        return f"<Role {self.slug}>"
