"""
Gatehouse - Database Models Package

This package contains all SQLAlchemy database model definitions.
All models share a common declarative base for proper table relationships.

The default principal model in gatehouse.models.database.user is not imported
here. It is mapped only when it is imported, usually through the "user_model"
setting, so applications can map their own principal onto the users table.
"""

# Import Base first
from gatehouse.models.database.base import Base, TABLES

# Import all models
from gatehouse.models.database.permission import Permission
from gatehouse.models.database.role import Role
from gatehouse.models.database.permission_role import PermissionRole
from gatehouse.models.database.role_user import RoleUser
from gatehouse.models.database.has_roles import HasRolesMixin

# Export all models and Base
__all__ = [
    'Base',
    'TABLES',
    'Permission',
    'Role',
    'PermissionRole',
    'RoleUser',
    'HasRolesMixin',
]
