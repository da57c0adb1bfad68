"""
Gatehouse - Token Data Model

Pydantic model for data carried in a decoded access token.
"""

from typing import Optional
from pydantic import BaseModel


class TokenData(BaseModel):
    """Data extracted from a JWT token"""
    user_id: int
    username: Optional[str] = None
