"""
Gatehouse - Storage Failure Error Exception

Raised when a database operation fails during a reconciliation run.
"""

from .gatehouse_error import GatehouseError


class StorageFailureError(GatehouseError):
    """Exception for database errors during reconciliation."""
    pass
