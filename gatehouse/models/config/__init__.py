"""
Gatehouse - Configuration Models Package

Pydantic models describing the declarative roles and permissions configuration.
"""

from gatehouse.models.config.permission_entry import (
    PermissionDefinition,
    BarePermission,
    KeyedPermission,
    PermissionEntry,
    ParsePermissionEntry,
    ParsePermissionEntries,
)
from gatehouse.models.config.role_definition import RoleDefinition, ParseRolePermissionReference
from gatehouse.models.config.gatehouse_config import GatehouseConfig, TableNames

__all__ = [
    'PermissionDefinition',
    'BarePermission',
    'KeyedPermission',
    'PermissionEntry',
    'ParsePermissionEntry',
    'ParsePermissionEntries',
    'RoleDefinition',
    'ParseRolePermissionReference',
    'GatehouseConfig',
    'TableNames',
]
