"""
Gatehouse - Exceptions Package

Contains all exception classes raised by the Gatehouse library.
"""

from .gatehouse_error import GatehouseError
from .configuration_missing_error import ConfigurationMissingError
from .duplicate_slug_error import DuplicateSlugError
from .storage_failure_error import StorageFailureError
from .access_errors import UnauthenticatedError, UnauthorizedError

__all__ = [
    'GatehouseError',
    'ConfigurationMissingError',
    'DuplicateSlugError',
    'StorageFailureError',
    'UnauthenticatedError',
    'UnauthorizedError',
]
