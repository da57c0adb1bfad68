"""
Gatehouse - Configuration Missing Error Exception

Raised when the roles or permissions configuration is empty or cannot be read.
"""

from .gatehouse_error import GatehouseError


class ConfigurationMissingError(GatehouseError):
    """Exception for missing or unusable configuration."""
    pass
