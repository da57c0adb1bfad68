"""
Gatehouse - Database Module

This module holds the global db_manager instance used by the request gates.
Applications set it at startup, e.g. in a FastAPI lifespan handler:

    database.InitializeDatabase(config)
"""

from typing import Optional

from gatehouse.config import ResolveUserModel
from gatehouse.managers.database_manager import DatabaseManager
from gatehouse.models.config import GatehouseConfig

# Global database manager instance
db_manager: Optional[DatabaseManager] = None


def InitializeDatabase(config: GatehouseConfig) -> DatabaseManager:
    """
    Create the global DatabaseManager from configuration and create tables

    Args:
        config: Loaded configuration

    Returns:
        DatabaseManager: The new global instance
    """
    global db_manager
    db_manager = DatabaseManager(config.database_url, ResolveUserModel(config.user_model))
    db_manager.InitializeDatabase()
    return db_manager
