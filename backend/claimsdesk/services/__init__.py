"""
Services package
"""
from claimsdesk.services.aggregation import (
    aggregate,
    truncate_amount,
    ClaimSummary,
    SummaryScope,
)
from claimsdesk.services.claim_store import ClaimStore
from claimsdesk.services.document_registry import DocumentRegistry
from claimsdesk.services.claims_service import (
    ClaimsService,
    ClaimSubmission,
    UploadedFile,
)

__all__ = [
    "aggregate",
    "truncate_amount",
    "ClaimSummary",
    "SummaryScope",
    "ClaimStore",
    "DocumentRegistry",
    "ClaimsService",
    "ClaimSubmission",
    "UploadedFile",
]
