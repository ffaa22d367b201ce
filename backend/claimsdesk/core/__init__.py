"""
Core module exports
"""
from claimsdesk.core.config import settings, get_settings
from claimsdesk.core.errors import (
    ClaimsDeskError,
    ValidationError,
    NotFoundError,
    ConflictError,
    StorageError,
)
from claimsdesk.core.logging import logger, get_logger

__all__ = [
    "settings",
    "get_settings",
    "ClaimsDeskError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "StorageError",
    "logger",
    "get_logger",
]
