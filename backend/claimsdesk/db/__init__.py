"""
Database package
"""
from claimsdesk.db.base import Base
from claimsdesk.db.session import engine, SessionLocal, get_db, init_db
from claimsdesk.db.models import *

__all__ = [
    "Base",
    "engine",
    "SessionLocal",
    "get_db",
    "init_db",
]
