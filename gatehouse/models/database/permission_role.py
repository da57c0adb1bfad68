"""
Gatehouse - PermissionRole Database Model

Junction table for many-to-many relationship between roles and permissions.
Rows disappear with either side through ON DELETE CASCADE.
"""

from sqlalchemy import Column, Integer, ForeignKey

from gatehouse.models.database.base import Base, TABLES


class PermissionRole(Base):
    """
    PermissionRole junction table - maps permissions to roles (many-to-many)
    """
    __tablename__ = TABLES.permission_role

    permission_id = Column(
        Integer,
        ForeignKey(f"{TABLES.permissions}.permission_id", ondelete="CASCADE"),
        primary_key=True,
    )
    role_id = Column(
        Integer,
        ForeignKey(f"{TABLES.roles}.role_id", ondelete="CASCADE"),
        primary_key=True,
    )
