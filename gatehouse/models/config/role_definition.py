"""
Gatehouse - Role Definition Configuration Model

A role is declared under its slug with an optional display name, an optional
description and the permissions it grants. Permission references use the same
derivation rules as the top-level permissions catalog.
"""

from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from gatehouse.naming import HumanizeSlug
from gatehouse.models.config.permission_entry import (
    BarePermission,
    KeyedPermission,
    PermissionDefinition,
    PermissionEntry,
)


def ParseRolePermissionReference(value: Any) -> PermissionEntry:
    """
    Build a permission entry from a reference inside a role definition

    Args:
        value: A string, or a dict with "name" and optional "slug"/"description"

    Returns:
        PermissionEntry: BarePermission or KeyedPermission
    """
    if isinstance(value, (BarePermission, KeyedPermission)):
        return value
    if isinstance(value, str):
        return BarePermission(identifier=value)
    if isinstance(value, dict) and value.get("name"):
        return KeyedPermission(
            identifier=value["name"],
            slug=value.get("slug"),
            description=value.get("description"),
        )
    raise ValueError(f"Unsupported role permission reference: {value!r}")


class RoleDefinition(BaseModel):
    """One entry of the "roles" configuration section"""
    model_config = ConfigDict(frozen=True)

    slug: str
    name: Optional[str] = None
    description: Optional[str] = None
    permissions: Tuple[PermissionEntry, ...] = ()

    @field_validator("permissions", mode="before")
    @classmethod
    def _parse_permissions(cls, value):
        if value is None:
            return ()
        if not isinstance(value, (list, tuple)):
            raise ValueError("Role permissions must be a list")
        return tuple(ParseRolePermissionReference(item) for item in value)

    @property
    def display_name(self) -> str:
        """Configured name, or the slug with separators turned into spaces"""
        return self.name or HumanizeSlug(self.slug)

    def ResolvePermissions(self) -> List[PermissionDefinition]:
        """Resolve every permission reference in declaration order"""
        return [entry.Resolve() for entry in self.permissions]
