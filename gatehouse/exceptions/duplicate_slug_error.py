"""
Gatehouse - Duplicate Slug Error Exception

Raised when creating a role or permission whose slug is already taken.
"""

from .gatehouse_error import GatehouseError


class DuplicateSlugError(GatehouseError):
    """Exception raised when a slug already exists."""

    def __init__(self, entity: str, slug: str):
        self.entity = entity
        self.slug = slug
        super().__init__(f"{entity} with slug '{slug}' already exists")
