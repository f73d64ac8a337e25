"""
Domain errors raised by the service layer.

Every error carries a machine readable ``kind``, the HTTP status it
maps to and a list of human readable ``details``.  ``create_app``
registers a handler that renders any ``UserServiceError`` into the
common error envelope::

    {"error": {"kind": "conflict", "details": ["Email already exists."]}}
"""

from typing import Iterable, List, Optional

from fastapi import status


class UserServiceError(Exception):
    """Base class for errors surfaced to API clients."""

    kind: str = "internal_error"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.message = message
        self.details: List[str] = list(details) if details is not None else [message]

    def to_payload(self) -> dict:
        return error_payload(self.kind, self.details)


class NotFoundError(UserServiceError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(UserServiceError):
    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT


class ValidationFailedError(UserServiceError):
    """One or more field constraints failed.

    ``details`` holds every violation message, never truncated, so that a
    client can fix all of them in a single round trip.
    """

    kind = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, violations: Iterable[str]):
        violations = list(violations)
        super().__init__("Validation failed.", violations)


class BadRequestError(UserServiceError):
    kind = "bad_request"
    status_code = status.HTTP_400_BAD_REQUEST


def error_payload(kind: str, details: Iterable[str]) -> dict:
    """Build the error envelope for errors not raised as ``UserServiceError``."""
    return {"error": {"kind": kind, "details": list(details)}}
