"""
Gatehouse - Database Base

Shared declarative base for all SQLAlchemy models.
This ensures all models share the same metadata and can reference each other.
Table names come from the "tables" configuration section.
"""

from sqlalchemy.orm import declarative_base

from gatehouse.config import GetTableNames

# Create the shared declarative base
Base = declarative_base()

# Resolved once at import
TABLES = GetTableNames()
