"""
Gatehouse - Permission Entry Configuration Models

A permission entry in configuration is either a bare identifier or an
identifier with slug/description overrides. Both shapes resolve to a single
PermissionDefinition before anything touches the database.
"""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict

from gatehouse.naming import TitleCase, Slugify, DefaultPermissionDescription


class PermissionDefinition(BaseModel):
    """Canonical (name, slug, description) triple for one permission"""
    model_config = ConfigDict(frozen=True)

    name: str
    slug: str
    description: str


class BarePermission(BaseModel):
    """Entry declared as a plain string, e.g. "read user" """
    model_config = ConfigDict(frozen=True)

    identifier: str

    def Resolve(self) -> PermissionDefinition:
        name = TitleCase(self.identifier)
        return PermissionDefinition(
            name=name,
            slug=Slugify(self.identifier),
            description=DefaultPermissionDescription(name),
        )


class KeyedPermission(BaseModel):
    """Entry declared as key => {slug?, description?}"""
    model_config = ConfigDict(frozen=True)

    identifier: str
    slug: Optional[str] = None
    description: Optional[str] = None

    def Resolve(self) -> PermissionDefinition:
        name = TitleCase(self.identifier)
        return PermissionDefinition(
            name=name,
            slug=self.slug or Slugify(self.identifier),
            description=self.description or DefaultPermissionDescription(name),
        )


PermissionEntry = Union[BarePermission, KeyedPermission]


def ParsePermissionEntry(key: Optional[str], value: Any) -> PermissionEntry:
    """
    Build a permission entry from its raw configuration form

    Args:
        key: Mapping key the value was declared under, or None for list items
        value: Raw value (string, override dict, or None)

    Returns:
        PermissionEntry: BarePermission or KeyedPermission

    Raises:
        ValueError: If the value has an unsupported shape
    """
    if isinstance(value, (BarePermission, KeyedPermission)):
        return value

    if key is None:
        if isinstance(value, str):
            return BarePermission(identifier=value)
        if isinstance(value, dict) and len(value) == 1:
            # Single-key object inside a list: {"create user": {...}}
            (inner_key, inner_value), = value.items()
            return ParsePermissionEntry(inner_key, inner_value)
        raise ValueError(f"Unsupported permission entry: {value!r}")

    if value is None:
        return KeyedPermission(identifier=key)
    if isinstance(value, dict):
        return KeyedPermission(
            identifier=key,
            slug=value.get("slug"),
            description=value.get("description"),
        )
    raise ValueError(f"Unsupported overrides for permission '{key}': {value!r}")


def ParsePermissionEntries(raw: Any) -> List[PermissionEntry]:
    """
    Normalize the "permissions" configuration section

    Accepts a list of entries or a mapping of identifier to overrides.
    """
    if raw is None:
        return []
    if isinstance(raw, dict):
        return [ParsePermissionEntry(key, value) for key, value in raw.items()]
    if isinstance(raw, (list, tuple)):
        return [ParsePermissionEntry(None, value) for value in raw]
    raise ValueError(f"Permissions must be a list or a mapping, got {type(raw).__name__}")
