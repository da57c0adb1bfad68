"""
Gatehouse - Principal Resolution

This module resolves the principal for an inbound request:
- JWT token generation and validation
- Database session dependency
- Current principal dependency used by the request gates

A request without a usable token resolves to no principal rather than an
error, so the gates can decide between Unauthenticated and Unauthorized.
"""

import logging
import os
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from pydantic import ValidationError

from gatehouse import database
from gatehouse.models.auth import TokenData

# Create logger
logger = logging.getLogger(__name__)

# JWT Configuration
# Set GATEHOUSE_SECRET_KEY so tokens survive a restart; otherwise a random key is generated
SECRET_KEY = os.environ.get("GATEHOUSE_SECRET_KEY") or secrets.token_urlsafe(32)
ALGORITHM = "HS256"
DEFAULT_EXPIRATION_HOURS = 24

# Security scheme for FastAPI; missing credentials are handled by the gates
security = HTTPBearer(auto_error=False)


# ==================== JWT Token Functions ====================

def CreateAccessToken(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token

    Args:
        data: Dictionary containing user data (user_id, username)
        expires_delta: Optional custom expiration time

    Returns:
        str: Encoded JWT token
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(hours=DEFAULT_EXPIRATION_HOURS)

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt


def DecodeAccessToken(token: str) -> Optional[TokenData]:
    """
    Decode and validate a JWT access token

    Args:
        token: JWT token string

    Returns:
        TokenData: Token data if valid, None if invalid or expired
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        if payload.get("user_id") is None:
            return None
        return TokenData(user_id=payload["user_id"], username=payload.get("username"))
    except (JWTError, ValidationError) as e:
        logger.debug(f"Rejected access token: {str(e)}")
        return None


# ==================== Dependencies ====================

def GetDatabaseSession():
    """
    FastAPI dependency yielding a session from the global db_manager
    """
    if database.db_manager is None:
        raise RuntimeError("gatehouse.database.db_manager is not initialized")

    session = database.db_manager.GetSession()
    try:
        yield session
    finally:
        session.close()


def GetCurrentPrincipal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    session=Depends(GetDatabaseSession),
):
    """
    FastAPI dependency to get the principal for the current request

    Args:
        credentials: HTTP Bearer token from Authorization header, if any
        session: Database session from GetDatabaseSession

    Returns:
        The principal object, or None if no valid, active principal is found
    """
    if credentials is None:
        return None

    token_data = DecodeAccessToken(credentials.credentials)
    if token_data is None:
        return None

    user = database.db_manager.GetUser(session, token_data.user_id)
    if user is None:
        logger.warning(f"Token references unknown user {token_data.user_id}")
        return None

    if not getattr(user, "is_active", True):
        logger.warning(f"Token references disabled user {token_data.user_id}")
        return None

    return user
