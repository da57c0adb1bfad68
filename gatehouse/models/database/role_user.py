"""
Gatehouse - RoleUser Database Model

Junction table for many-to-many relationship between roles and users.
"""

from sqlalchemy import Column, Integer, ForeignKey

from gatehouse.models.database.base import Base, TABLES


class RoleUser(Base):
    """
    RoleUser junction table - maps roles to users (many-to-many)
    """
    __tablename__ = TABLES.role_user

    role_id = Column(
        Integer,
        ForeignKey(f"{TABLES.roles}.role_id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id = Column(
        Integer,
        ForeignKey(f"{TABLES.users}.user_id", ondelete="CASCADE"),
        primary_key=True,
    )
