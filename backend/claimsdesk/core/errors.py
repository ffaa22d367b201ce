"""
Domain errors raised by the claims engine.

Each error carries the HTTP status the API layer renders it with, so the
exception handlers in ``main`` stay a single mapping.
"""
from typing import Optional


class ClaimsDeskError(Exception):
    """Base exception for claims engine errors."""

    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(ClaimsDeskError):
    """Malformed input or an illegal status value."""

    status_code = 400


class NotFoundError(ClaimsDeskError):
    """Unknown claim or document id."""

    status_code = 404


class ConflictError(ClaimsDeskError):
    """Transition attempted on a claim that is no longer pending."""

    status_code = 409

    def __init__(self, message: str, current_status: Optional[str] = None):
        self.current_status = current_status
        super().__init__(message)


class StorageError(ClaimsDeskError):
    """Storage or database failure; rendered as an opaque internal error."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(message)
