"""
Recruitment error types and the operation-wrapping decorator.

Usage:
    from core.exceptions import NotFoundError, wrap_errors

    @wrap_errors("Failed to approve job requirement")
    def approve(self, requirement_id: int, approved_by: int):
        ...
"""

import functools
from typing import Callable, TypeVar

from fastapi import status

F = TypeVar("F", bound=Callable)


class RecruitmentError(Exception):
    """Base class for errors raised by the recruitment services."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "RECRUITMENT_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RecruitmentError):
    """Raised when input is missing or out of range."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "VALIDATION_ERROR"


class NotFoundError(RecruitmentError):
    """Raised when an id does not reference an existing record."""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"


class ConflictError(RecruitmentError):
    """Raised on a duplicate application for the same posting and e-mail."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "CONFLICT"


class TransportError(RecruitmentError):
    """Raised when the mail transport fails to accept a message."""

    status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "TRANSPORT_ERROR"


def wrap_errors(operation: str) -> Callable[[F], F]:
    """
    Re-raise errors from a service operation with the operation name prefixed.

    Recruitment errors keep their class so the HTTP layer can still map them
    to a status code; anything else becomes a plain RecruitmentError.

    Args:
        operation: Human-readable operation description, e.g.
            "Failed to create job posting"
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except RecruitmentError as e:
                raise type(e)(f"{operation}: {e.message}") from e
            except Exception as e:
                raise RecruitmentError(f"{operation}: {e}") from e

        return wrapper  # type: ignore[return-value]

    return decorator
