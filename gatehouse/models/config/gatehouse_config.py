"""
Gatehouse - Configuration Model

Immutable configuration record handed to the reconciliation manager and the
CLI. Built from the JSON configuration file by ConfigManager.
"""

from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from gatehouse.models.config.permission_entry import (
    PermissionDefinition,
    PermissionEntry,
    ParsePermissionEntries,
)
from gatehouse.models.config.role_definition import RoleDefinition


class TableNames(BaseModel):
    """Names of the persisted tables"""
    model_config = ConfigDict(frozen=True)

    roles: str = "roles"
    permissions: str = "permissions"
    role_user: str = "role_user"
    permission_role: str = "permission_role"
    users: str = "users"


class GatehouseConfig(BaseModel):
    """Declarative roles and permissions plus storage settings"""
    model_config = ConfigDict(frozen=True)

    permissions: Tuple[PermissionEntry, ...] = ()
    roles: Tuple[RoleDefinition, ...] = ()
    tables: TableNames = TableNames()
    user_model: str = "gatehouse.models.database.user.User"
    database_url: str = "sqlite:///database/gatehouse.db"
    log_level: str = "INFO"

    @field_validator("permissions", mode="before")
    @classmethod
    def _parse_permissions(cls, value):
        return tuple(ParsePermissionEntries(value))

    @field_validator("roles", mode="before")
    @classmethod
    def _parse_roles(cls, value):
        if value is None:
            return ()
        if isinstance(value, dict):
            roles = []
            for slug, definition in value.items():
                definition = dict(definition or {})
                definition["slug"] = slug
                roles.append(definition)
            return tuple(roles)
        return value

    def GetDeclaredPermissions(self) -> List[PermissionDefinition]:
        """Resolve the flat permissions catalog in declaration order"""
        return [entry.Resolve() for entry in self.permissions]

    def GetRolePermissions(self) -> List[PermissionDefinition]:
        """
        Derive the implicit permission set declared across all roles

        Entries are keyed by derived name. The first occurrence wins and later
        entries with the same name are dropped, even when their slugs differ.

        Returns:
            list: Unique permission definitions in first-seen order
        """
        unique: Dict[str, PermissionDefinition] = {}
        for role in self.roles:
            for definition in role.ResolvePermissions():
                if definition.name in unique:
                    continue
                unique[definition.name] = definition
        return list(unique.values())

    @classmethod
    def FromDict(cls, data: Dict[str, Any]) -> "GatehouseConfig":
        """Build a configuration from a plain dict, e.g. parsed JSON"""
        return cls.model_validate(data)
