"""
Gatehouse - Managers Package

This package contains manager classes for database access, the role and
permission registries, and configuration reconciliation.
"""

from gatehouse.managers.database_manager import DatabaseManager
from gatehouse.managers.permission_registry import PermissionRegistry
from gatehouse.managers.role_registry import RoleRegistry
from gatehouse.managers.reconciliation_manager import (
    ReconciliationManager,
    SeedPermissionsResult,
    SyncPermissionsResult,
    SeedRolesResult,
    SyncRolesResult,
)

__all__ = [
    'DatabaseManager',
    'PermissionRegistry',
    'RoleRegistry',
    'ReconciliationManager',
    'SeedPermissionsResult',
    'SyncPermissionsResult',
    'SeedRolesResult',
    'SyncRolesResult',
]
