"""
Claims API routes
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from pydantic import BaseModel

from claimsdesk.api.deps import get_claims_service
from claimsdesk.api.routes.documents import DocumentResponse, document_response
from claimsdesk.db.models import Claim
from claimsdesk.services import ClaimsService, ClaimSubmission, UploadedFile

router = APIRouter()


# Request/Response schemas
class StatusUpdateRequest(BaseModel):
    status: str


class ClaimResponse(BaseModel):
    claim_id: str
    employee_name: str
    employee_email: str
    employee_id: str
    department: str
    claim_date: str
    amount: float
    description: str
    type: str
    status: str
    created_at: str
    updated_at: Optional[str]
    documents: List[DocumentResponse] = []


class SubmittedDocument(BaseModel):
    id: int
    originalName: str


class SubmitClaimResponse(BaseModel):
    message: str
    claimId: str
    documents: List[SubmittedDocument]


class SummaryResponse(BaseModel):
    scope: str
    total: int
    count: int
    by_type: dict


def claim_response(claim: Claim, include_documents: bool = True) -> ClaimResponse:
    return ClaimResponse(
        claim_id=claim.claim_id,
        employee_name=claim.employee_name,
        employee_email=claim.employee_email,
        employee_id=claim.employee_id,
        department=claim.department,
        claim_date=claim.claim_date.isoformat(),
        amount=float(claim.amount),
        description=claim.description,
        type=claim.type,
        status=claim.status.value,
        created_at=claim.created_at.isoformat(),
        updated_at=claim.updated_at.isoformat() if claim.updated_at else None,
        documents=[document_response(d) for d in claim.documents] if include_documents else [],
    )


@router.get("", response_model=List[ClaimResponse])
async def list_claims(
    claim_id: Optional[str] = Query(None),
    employee_id: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    service: ClaimsService = Depends(get_claims_service),
):
    """List claims, optionally filtered by claim id, employee id or status."""
    claims = service.list_claims(claim_id=claim_id, employee_id=employee_id, status=status)
    return [claim_response(c) for c in claims]


@router.post("", response_model=SubmitClaimResponse, status_code=status.HTTP_201_CREATED)
async def submit_claim(
    empName: Optional[str] = Form(None),
    empEmail: Optional[str] = Form(None),
    empId: Optional[str] = Form(None),
    department: Optional[str] = Form(None),
    claimDate: Optional[str] = Form(None),
    amount: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    type: Optional[str] = Form(None),
    documents: Optional[List[UploadFile]] = File(None),
    service: ClaimsService = Depends(get_claims_service),
):
    """Submit a new reimbursement claim with its supporting documents."""
    submission = ClaimSubmission(
        employee_name=empName,
        employee_email=empEmail,
        employee_id=empId,
        department=department,
        claim_date=claimDate,
        amount=amount,
        description=description,
        type=type,
    )
    files = [
        UploadedFile(
            file_name=upload.filename or "document",
            content=await upload.read(),
            content_type=upload.content_type,
        )
        for upload in documents or []
    ]

    claim = service.submit(submission, files)

    return SubmitClaimResponse(
        message="Claim submitted successfully",
        claimId=claim.claim_id,
        documents=[
            SubmittedDocument(id=d.id, originalName=d.file_name)
            for d in claim.documents
        ],
    )


@router.get("/summary", response_model=SummaryResponse)
async def get_summary(
    scope: str = Query("pending"),
    service: ClaimsService = Depends(get_claims_service),
):
    """Totals by claim type for pending or completed claims."""
    return SummaryResponse(**service.summary(scope).to_dict())


@router.get("/{claim_id}", response_model=ClaimResponse)
async def get_claim(
    claim_id: str,
    service: ClaimsService = Depends(get_claims_service),
):
    """Get claim details by ID."""
    return claim_response(service.get_claim(claim_id))


@router.patch("/{claim_id}", response_model=ClaimResponse)
async def update_claim_status(
    claim_id: str,
    request: StatusUpdateRequest,
    service: ClaimsService = Depends(get_claims_service),
):
    """Approve or reject a pending claim."""
    claim = service.transition(claim_id, request.status)
    return claim_response(claim)


@router.get("/{claim_id}/documents", response_model=List[DocumentResponse])
async def get_claim_documents(
    claim_id: str,
    service: ClaimsService = Depends(get_claims_service),
):
    """Get all documents for a claim."""
    return [document_response(d) for d in service.registry.list_by_claim(claim_id)]
