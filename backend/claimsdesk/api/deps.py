"""
API dependencies
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from claimsdesk.db import get_db
from claimsdesk.services import ClaimsService, DocumentRegistry


def get_claims_service(db: Session = Depends(get_db)) -> ClaimsService:
    return ClaimsService(db)


def get_document_registry(db: Session = Depends(get_db)) -> DocumentRegistry:
    return DocumentRegistry(db)


__all__ = [
    "get_db",
    "get_claims_service",
    "get_document_registry",
]
