"""
Error kinds raised by the service layer.

Every business-rule violation is raised as a subclass of
``TodoApiError`` at the point of detection and propagates unhandled to
the HTTP boundary.  There the exception handlers installed by
``create_app`` translate the error kind into a status code using
``STATUS_BY_KIND``; no other code maps errors to responses.
"""

from enum import Enum
from typing import Any

from fastapi import status


class ErrorKind(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    VALIDATION_FAILED = "validation_failed"


class TodoApiError(Exception):
    """Base class for all errors surfaced by the core services."""

    kind: ErrorKind

    def __init__(self, detail: Any) -> None:
        super().__init__(detail)
        self.detail = detail


class Unauthenticated(TodoApiError):
    """No identity could be resolved for the request."""

    kind = ErrorKind.UNAUTHENTICATED

    def __init__(self, detail: str = "Not authenticated") -> None:
        super().__init__(detail)


class Forbidden(TodoApiError):
    """The caller is not allowed to act on the target."""

    kind = ErrorKind.FORBIDDEN


class NotFound(TodoApiError):
    """The referenced todo id or account login does not exist."""

    kind = ErrorKind.NOT_FOUND


class Conflict(TodoApiError):
    """Creation of something that already exists."""

    kind = ErrorKind.CONFLICT


class ValidationFailed(TodoApiError):
    """Request input rejected before any service ran.

    ``detail`` is the list of field errors reported by pydantic.
    """

    kind = ErrorKind.VALIDATION_FAILED


STATUS_BY_KIND = {
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
}
