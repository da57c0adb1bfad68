"""
Gatehouse - Permission Database Model

Permission model for RBAC.
Stores available permissions that can be assigned to roles.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship

from gatehouse.models.database.base import Base, TABLES


class Permission(Base):
    """
    Permissions table - stores available permissions, keyed by slug
    """
    __tablename__ = TABLES.permissions
    __table_args__ = {"sqlite_autoincrement": True}

    permission_id = Column(Integer, primary_key=True, autoincrement=True)
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

    # Relationship to roles through junction table
    roles = relationship(
        "Role",
        secondary=TABLES.permission_role,
        back_populates="permissions",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Permission {self.slug}>"
