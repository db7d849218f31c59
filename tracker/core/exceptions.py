# tracker/core/exceptions.py
from typing import Any, Dict, List, Optional

from fastapi import status


class ApiError(Exception):
    """Base error carrying an HTTP status and a user-facing message"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[List[Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message or self.default_message
        self.errors = errors
        self.headers = headers
        super().__init__(self.message)


class ValidationError(ApiError):
    """Raised for malformed or missing input"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthenticationError(ApiError):
    """Raised when credentials or tokens are missing, invalid or expired"""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Any]] = None):
        super().__init__(message, errors, headers={"WWW-Authenticate": "Bearer"})


class NotFoundError(ApiError):
    """Raised when a resource is absent or owned by someone else"""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(ApiError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class InternalError(ApiError):
    pass
