"""
Gatehouse - Request Gates

Dependency factories that allow or deny a request based on the current
principal's roles and permissions. Each accepts a pipe-delimited string or a
list of slugs.

Usage:
    @app.get("/admin")
    async def admin_home(user = Depends(RequireRole("admin|editor"))):
        ...

    router = APIRouter(dependencies=[Depends(RequirePermission("read-user"))])
"""

import logging
from typing import Iterable, Union

from fastapi import Depends

from gatehouse.auth import GetCurrentPrincipal
from gatehouse.exceptions import UnauthenticatedError, UnauthorizedError
from gatehouse.naming import SplitIdentifiers

# Create logger
logger = logging.getLogger(__name__)

Identifiers = Union[str, Iterable[str]]


def _Describe(principal) -> str:
    return str(getattr(principal, "username", None) or getattr(principal, "user_id", principal))


def RequireRole(roles: Identifiers):
    """
    Dependency factory requiring any of the given roles

    Args:
        roles: "admin|editor" or ["admin", "editor"]

    Returns:
        Dependency function returning the principal when allowed
    """
    required = SplitIdentifiers(roles)

    def role_checker(principal=Depends(GetCurrentPrincipal)):
        if principal is None:
            raise UnauthenticatedError()
        if not principal.HasAnyRole(required):
            logger.warning(f"Denied '{_Describe(principal)}': requires role {required}")
            raise UnauthorizedError()
        return principal

    return role_checker


def RequirePermission(permissions: Identifiers):
    """
    Dependency factory requiring any of the given permissions
    """
    required = SplitIdentifiers(permissions)

    def permission_checker(principal=Depends(GetCurrentPrincipal)):
        if principal is None:
            raise UnauthenticatedError()
        if not principal.HasAnyPermission(required):
            logger.warning(f"Denied '{_Describe(principal)}': requires permission {required}")
            raise UnauthorizedError()
        return principal

    return permission_checker


def RequireRoleOrPermission(roles_or_permissions: Identifiers):
    """
    Dependency factory allowing the request if any identifier matches either a
    held role or a granted permission
    """
    required = SplitIdentifiers(roles_or_permissions)

    def role_or_permission_checker(principal=Depends(GetCurrentPrincipal)):
        if principal is None:
            raise UnauthenticatedError()
        if principal.HasAnyRole(required) or principal.HasAnyPermission(required):
            return principal
        logger.warning(f"Denied '{_Describe(principal)}': requires role or permission {required}")
        raise UnauthorizedError()

    return role_or_permission_checker
