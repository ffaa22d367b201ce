"""
Database models package
"""
from claimsdesk.db.models.claim import Claim, ClaimType, ClaimStatus
from claimsdesk.db.models.document import Document

__all__ = [
    # Claim
    "Claim",
    "ClaimType",
    "ClaimStatus",
    # Document
    "Document",
]
