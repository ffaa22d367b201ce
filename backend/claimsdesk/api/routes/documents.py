"""
Document API routes
"""
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from pydantic import BaseModel

from claimsdesk.api.deps import get_document_registry
from claimsdesk.core import NotFoundError, logger
from claimsdesk.db.models import Document
from claimsdesk.services import DocumentRegistry

router = APIRouter()

# Document ids are INTEGER primary keys
MAX_DOCUMENT_ID = 2**31 - 1


# Response schemas
class DocumentResponse(BaseModel):
    id: int
    claim_id: str
    file_name: str
    content_type: Optional[str]
    uploaded_at: str
    file_exists: bool
    url: Optional[str]


def document_response(document: Document) -> DocumentResponse:
    exists = DocumentRegistry.file_exists(document)
    return DocumentResponse(
        id=document.id,
        claim_id=document.claim_id,
        file_name=document.file_name,
        content_type=document.content_type,
        uploaded_at=document.uploaded_at.isoformat(),
        file_exists=exists,
        url=f"/api/documents/{document.id}" if exists else None,
    )


@router.get("/{document_id}")
async def download_document(
    document_id: str,
    registry: DocumentRegistry = Depends(get_document_registry),
):
    """Stream a stored document under its original file name."""
    if not (document_id.isascii() and document_id.isdigit()) or int(document_id) > MAX_DOCUMENT_ID:
        raise NotFoundError("Document not found")

    document, path = registry.get(int(document_id))
    logger.info(f"Serving document {document.id} ({document.file_name})")

    return FileResponse(
        path,
        media_type=document.content_type or "application/octet-stream",
        filename=document.file_name,
    )
