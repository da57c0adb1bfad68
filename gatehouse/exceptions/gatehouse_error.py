"""
Gatehouse - Base Error Exception

Base exception class for all library errors.
"""


class GatehouseError(Exception):
    """Base exception for Gatehouse errors."""
    pass
