"""
Domain errors raised by the service layer.

Each error carries the HTTP status it maps to and a message that is
safe to show to the caller.  The application registers a handler in
``main.py`` that turns any ``ServiceError`` into a ``{"error": ...}``
JSON response, so endpoints never build error responses by hand.
"""

from fastapi import status


class ServiceError(Exception):
    """Base class for errors that are reported to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Caller input is malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ServiceError):
    """A uniqueness rule was violated, by pre-check or by the database."""

    status_code = status.HTTP_409_CONFLICT


class InternalError(ServiceError):
    """Unexpected failure.  The message is generic; details go to the log."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
