"""
Database utility functions.

Storage failures are terminal for the triggering request: the session is rolled
back and the error is re-raised as a StorageError for the API layer to render
opaquely.
"""
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from claimsdesk.core.errors import StorageError
from claimsdesk.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def _find_session(args: tuple, kwargs: dict) -> Optional[Session]:
    db = kwargs.get("db")
    if isinstance(db, Session):
        return db
    for arg in args:
        if isinstance(arg, Session):
            return arg
        # Bound methods of store/registry objects carry the session as .db
        candidate = getattr(arg, "db", None)
        if isinstance(candidate, Session):
            return candidate
    return None


def translate_db_errors(operation: str) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator that converts SQLAlchemy failures into StorageError.

    Args:
        operation: Human-readable name of the operation, used in logs
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return func(*args, **kwargs)
            except SQLAlchemyError as e:
                db = _find_session(args, kwargs)
                if db is not None:
                    db.rollback()
                logger.error(f"Database operation '{operation}' failed: {e}")
                raise StorageError(
                    f"Database operation '{operation}' failed",
                    original_error=e,
                ) from e

        return wrapper
    return decorator
