"""
Typed application errors.

CRUD functions raise these; handlers registered in main.py turn them into
JSON responses shaped like FastAPI's HTTPException ({"detail": ...}).
Database failures are not wrapped: SQLAlchemyError propagates as-is and is
rendered as a 500 by its own handler.
"""

from typing import Optional


class AppError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidInputError(AppError):
    """Client sent data the operation cannot use (400)."""

    status_code = 400


class NotFoundError(AppError):
    """Target row does not exist (404)."""

    status_code = 404


class UnauthorizedError(AppError):
    """Missing or invalid credentials (401)."""

    status_code = 401


class ForbiddenError(AppError):
    """Authenticated, but not allowed to do this (403)."""

    status_code = 403
