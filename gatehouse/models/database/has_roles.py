"""
Gatehouse - HasRoles Mixin

Authorization queries for the principal model. Any declarative model that
mixes this in gets a "roles" relationship through the role_user table and the
HasRole / HasPermission family of checks. Permissions are granted through
roles only; there are no direct user permissions.

The principal model must be declared on gatehouse.models.database.Base, use
the configured users table name and have a user_id primary key, since the
role_user table references it. Role has no reverse relationship to principals.
"""

from typing import Iterable, List

from sqlalchemy.orm import declared_attr, relationship

from gatehouse.models.database.base import TABLES
from gatehouse.naming import SplitIdentifiers


class HasRolesMixin:
    """
    Adds role membership and permission checks to a principal model
    """

    @declared_attr
    def roles(cls):
        return relationship(
            "Role",
            secondary=TABLES.role_user,
            passive_deletes=True,
            order_by="Role.slug",
        )

    # ==================== Role Checks ====================

    def GetRoleSlugs(self) -> set:
        return {role.slug for role in self.roles}

    def HasRole(self, role_slug: str) -> bool:
        """Check if the principal holds the role with this slug"""
        return role_slug in self.GetRoleSlugs()

    def HasAnyRole(self, role_slugs: Iterable[str]) -> bool:
        """
        Check if the principal holds any of the given roles

        Args:
            role_slugs: List of role slugs, or a pipe-delimited string

        Returns:
            bool: False when no slugs are given
        """
        wanted = set(SplitIdentifiers(role_slugs))
        if not wanted:
            return False
        return bool(wanted & self.GetRoleSlugs())

    # ==================== Permission Checks ====================

    def GetPermissionSlugs(self) -> set:
        """Union of the permission slugs of every held role"""
        slugs = set()
        for role in self.roles:
            slugs |= role.GetPermissionSlugs()
        return slugs

    def HasPermission(self, permission_slug: str) -> bool:
        """Check if any held role grants the permission"""
        return any(role.HasPermission(permission_slug) for role in self.roles)

    def HasAnyPermission(self, permission_slugs: Iterable[str]) -> bool:
        """Check if any held role grants any of the given permissions"""
        wanted = set(SplitIdentifiers(permission_slugs))
        if not wanted:
            return False
        return any(role.HasAnyPermission(wanted) for role in self.roles)

    # ==================== Role Assignment ====================

    def AssignRole(self, role) -> bool:
        """
        Give the principal a role

        Returns:
            bool: True if the role was newly assigned
        """
        if role in self.roles:
            return False
        self.roles.append(role)
        return True

    def RemoveRole(self, role) -> bool:
        """
        Take a role away from the principal

        Returns:
            bool: True if the role was held and has been removed
        """
        if role not in self.roles:
            return False
        self.roles.remove(role)
        return True

    def GetRoles(self) -> List:
        return list(self.roles)
