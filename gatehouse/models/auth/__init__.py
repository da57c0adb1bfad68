"""
Gatehouse - Authentication Models Package
"""

from gatehouse.models.auth.token_data import TokenData

__all__ = ['TokenData']
