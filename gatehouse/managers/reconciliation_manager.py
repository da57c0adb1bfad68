"""
Gatehouse - Reconciliation Manager

Brings the roles and permissions tables in line with a GatehouseConfig.

Two policies are available for each kind of entity:
- Seed: additive. Creates what is missing and never deletes.
- Sync: destructive. Deletes the whole table, then recreates it from configuration.

Each run uses a single session and commits once at the end. Any database
error rolls the run back and is reported as a StorageFailureError.
"""

import logging
from dataclasses import dataclass
from typing import Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from gatehouse.exceptions import ConfigurationMissingError, StorageFailureError
from gatehouse.managers.database_manager import DatabaseManager
from gatehouse.managers.permission_registry import PermissionRegistry
from gatehouse.managers.role_registry import RoleRegistry
from gatehouse.models.config import GatehouseConfig
from gatehouse.models.database import Permission

# Create logger
logger = logging.getLogger(__name__)

T = TypeVar("T")


# ==================== Results ====================

@dataclass
class SeedPermissionsResult:
    added: int = 0
    found: int = 0


@dataclass
class SyncPermissionsResult:
    deleted: int = 0
    created: int = 0


@dataclass
class SeedRolesResult:
    roles_added: int = 0
    roles_existing: int = 0
    permissions_added: int = 0
    permissions_existing: int = 0
    permissions_attached: int = 0


@dataclass
class SyncRolesResult:
    roles_deleted: int = 0
    roles_added: int = 0
    permissions_added: int = 0
    permissions_existing: int = 0


class ReconciliationManager:
    """
    Seeds and syncs roles and permissions from configuration
    """

    def __init__(self, db_manager: DatabaseManager):
        """
        Args:
            db_manager: DatabaseManager providing sessions
        """
        self.db_manager = db_manager

    def _Run(self, operation_name: str, operation: Callable[..., T]) -> T:
        """
        Execute one reconciliation run in its own session

        Args:
            operation_name: Name used in log and error messages
            operation: Callable receiving the session

        Returns:
            Whatever the operation returns

        Raises:
            StorageFailureError: If the database rejects any step
        """
        session = self.db_manager.GetSession()
        try:
            result = operation(session)
            session.commit()
            logger.info(f"{operation_name} completed: {result}")
            return result
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"{operation_name} failed: {str(e)}")
            raise StorageFailureError(f"{operation_name} failed: {str(e)}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ==================== Permissions ====================

    def SeedPermissions(self, config: GatehouseConfig) -> SeedPermissionsResult:
        """
        Create every declared permission that doesn't exist yet

        Args:
            config: Configuration holding the permissions catalog

        Returns:
            SeedPermissionsResult: added / found counts

        Raises:
            ConfigurationMissingError: If no permissions are declared
        """
        definitions = config.GetDeclaredPermissions()
        if not definitions:
            raise ConfigurationMissingError("No permissions found in configuration")

        def operation(session) -> SeedPermissionsResult:
            registry = PermissionRegistry(session)
            result = SeedPermissionsResult()
            for definition in definitions:
                if registry.FindBySlug(definition.slug) is not None:
                    result.found += 1
                    continue
                registry.Create(definition.name, definition.slug, definition.description)
                result.added += 1
            return result

        return self._Run("Permissions seed", operation)

    def SyncPermissions(self, config: GatehouseConfig) -> SyncPermissionsResult:
        """
        Delete all permissions and recreate them from configuration
        Role associations to the deleted permissions are removed as well.

        Raises:
            ConfigurationMissingError: If no permissions are declared
            DuplicateSlugError: If two declared permissions share a slug
        """
        definitions = config.GetDeclaredPermissions()
        if not definitions:
            raise ConfigurationMissingError("No permissions found in configuration")

        def operation(session) -> SyncPermissionsResult:
            registry = PermissionRegistry(session)
            result = SyncPermissionsResult(deleted=registry.DeleteAll())
            for definition in definitions:
                registry.Create(definition.name, definition.slug, definition.description)
                result.created += 1
            return result

        return self._Run("Permissions sync", operation)

    # ==================== Roles ====================

    def _CreateMissingRolePermissions(self, session, config: GatehouseConfig) -> int:
        """
        Create permissions implied by role definitions that don't exist yet

        Returns:
            int: Number of permissions created
        """
        registry = PermissionRegistry(session)
        added = 0
        for definition in config.GetRolePermissions():
            if registry.FindBySlug(definition.slug) is None:
                registry.Create(definition.name, definition.slug, definition.description)
                added += 1
        return added

    def SeedRoles(self, config: GatehouseConfig) -> SeedRolesResult:
        """
        Create missing roles and permissions and attach missing grants
        Existing roles keep their name, description and current permissions.

        Raises:
            ConfigurationMissingError: If no roles are declared
        """
        if not config.roles:
            raise ConfigurationMissingError("No roles found in configuration")

        def operation(session) -> SeedRolesResult:
            permissions = PermissionRegistry(session)
            roles = RoleRegistry(session, permissions)
            result = SeedRolesResult(permissions_existing=session.query(Permission).count())

            result.permissions_added = self._CreateMissingRolePermissions(session, config)

            for role_definition in config.roles:
                role = roles.FindBySlug(role_definition.slug)
                if role is not None:
                    result.roles_existing += 1
                else:
                    role = roles.Create(
                        role_definition.display_name,
                        role_definition.slug,
                        role_definition.description,
                    )
                    result.roles_added += 1

                for definition in role_definition.ResolvePermissions():
                    if permissions.FindBySlug(definition.slug) is None:
                        logger.debug(f"Skipping unresolved permission '{definition.slug}' for role '{role.slug}'")
                        continue
                    if roles.AttachPermission(role, definition.slug):
                        result.permissions_attached += 1

            return result

        return self._Run("Roles seed", operation)

    def SyncRoles(self, config: GatehouseConfig) -> SyncRolesResult:
        """
        Delete all roles and recreate them from configuration

        Deleting roles clears both the role-permission and user-role
        associations. Permissions themselves are kept; missing ones are created.

        Raises:
            ConfigurationMissingError: If no roles are declared
        """
        if not config.roles:
            raise ConfigurationMissingError("No roles found in configuration")

        def operation(session) -> SyncRolesResult:
            permissions = PermissionRegistry(session)
            roles = RoleRegistry(session, permissions)
            result = SyncRolesResult(roles_deleted=roles.DeleteAll())
            result.permissions_existing = session.query(Permission).count()

            result.permissions_added = self._CreateMissingRolePermissions(session, config)

            for role_definition in config.roles:
                role = roles.Create(
                    role_definition.display_name,
                    role_definition.slug,
                    role_definition.description,
                )
                result.roles_added += 1

                resolved = [
                    definition.slug
                    for definition in role_definition.ResolvePermissions()
                    if permissions.FindBySlug(definition.slug) is not None
                ]
                if resolved:
                    roles.SyncPermissions(role, resolved)

            return result

        return self._Run("Roles sync", operation)
