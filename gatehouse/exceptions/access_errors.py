"""
Gatehouse - Access Error Exceptions

HTTP errors raised by the request gates. They subclass HTTPException so
FastAPI turns them into client error responses without extra handlers.
"""

from fastapi import HTTPException, status


class UnauthenticatedError(HTTPException):
    """No principal could be resolved for the request."""

    def __init__(self, detail: str = "Unauthenticated."):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class UnauthorizedError(HTTPException):
    """The principal lacks the required role or permission."""

    def __init__(self, detail: str = "Unauthorized action."):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )
