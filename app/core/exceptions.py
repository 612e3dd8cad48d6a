"""Application error hierarchy.

Every error carries the HTTP status it maps to, a caller-facing message and an
optional ordered list of ``{field, message}`` details. The handlers in
``app.api.error_handlers`` render them into the response envelope.
"""
from typing import Dict, List, Optional

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[List[Dict[str, str]]] = None,
    ):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)

    def to_response(self) -> dict:
        content = {"success": False, "message": self.message}
        if self.errors:
            content["errors"] = self.errors
        return content


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid data"


class MalformedIdentifier(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid identifier"


class Conflict(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Duplicate entry"


class InvalidTransition(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Status transition not allowed"


class AuthenticationFailed(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class PermissionDenied(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not enough permissions"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class RateLimited(AppError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "Too many requests"
