"""
Domain exceptions raised by the service layer.

Services never raise HTTPException directly. Each error type carries the HTTP
status code it maps to, and the handlers registered in main.py turn them into
the standard {success, message, data} envelope.
"""

from typing import Any, Optional


class AppError(Exception):
    """Base class for client-correctable application errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, data: Any = None):
        self.message = message or self.default_message
        self.data = data
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or conflicting input (duplicate email, bad reference, ...)."""

    status_code = 400
    default_message = "Validation error"


class ConflictError(ValidationError):
    """Requested appointment slot is already taken."""

    default_message = "Doctor is not available at that time"


class AuthenticationError(AppError):
    """Missing, invalid or expired credentials."""

    status_code = 401
    default_message = "Authentication required"


class AuthorizationError(AppError):
    """Authenticated, but the role is not allowed to perform the action."""

    status_code = 403
    default_message = "You do not have permission to access this resource"


class NotFoundError(AppError):
    """No row exists for the requested id."""

    status_code = 404
    default_message = "Resource not found"
