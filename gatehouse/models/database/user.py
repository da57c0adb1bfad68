"""
Gatehouse - User Database Model

Default principal model. Applications with their own user table can point the
"user_model" setting at any model that mixes in HasRolesMixin and maps to the
configured users table with a user_id primary key.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, Boolean

from gatehouse.models.database.base import Base, TABLES
from gatehouse.models.database.has_roles import HasRolesMixin


class User(HasRolesMixin, Base):
    """
    Users table - principals that hold roles
    """
    __tablename__ = TABLES.users
    __table_args__ = {"sqlite_autoincrement": True}

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, unique=True, nullable=False)
    email = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    is_active = Column(Boolean, default=True)

    def __repr__(self):
        return f"<User {self.username}>"
