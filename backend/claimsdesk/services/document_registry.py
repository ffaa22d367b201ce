"""
Document Registry

Tracks files attached to claims. Metadata lives in the documents table; bytes
live on local disk under ``UPLOAD_DIR/<claim_id>/``. Retrieval returns the
stored path so the API can stream the file unmodified.
"""
import os
import uuid
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from claimsdesk.core.config import settings
from claimsdesk.core.errors import NotFoundError
from claimsdesk.core.logging import get_logger
from claimsdesk.db.models import Document
from claimsdesk.services.db_utils import translate_db_errors

logger = get_logger(__name__)


class DocumentRegistry:
    """Repository for claim documents and their stored bytes."""

    def __init__(self, db: Session, upload_dir: Optional[str] = None):
        self.db = db
        self.upload_dir = Path(upload_dir or settings.UPLOAD_DIR)

    @translate_db_errors("list documents")
    def list_by_claim(self, claim_id: str) -> List[Document]:
        """Documents of a claim in upload order; empty for unknown claims."""
        return (
            self.db.query(Document)
            .filter(Document.claim_id == claim_id)
            .order_by(Document.id)
            .all()
        )

    @translate_db_errors("get document")
    def get(self, document_id: int) -> Tuple[Document, Path]:
        """
        Metadata and on-disk path of a document.

        Raises:
            NotFoundError: unknown id, or the bytes are gone from disk
        """
        document = self.db.get(Document, document_id)
        if document is None:
            raise NotFoundError("Document not found")

        path = Path(document.file_path)
        if not path.is_file():
            logger.error(f"Document {document_id} is registered but missing on disk")
            raise NotFoundError("File not found on server")

        return document, path

    @staticmethod
    def file_exists(document: Document) -> bool:
        return os.path.isfile(document.file_path)

    @translate_db_errors("add document")
    def add(
        self,
        claim_id: str,
        file_name: str,
        content: bytes,
        content_type: Optional[str] = None,
    ) -> Document:
        """
        Store bytes for a claim and register them.

        The row is flushed, not committed; the caller owns the transaction.
        """
        claim_dir = self.upload_dir / claim_id
        claim_dir.mkdir(parents=True, exist_ok=True)

        file_ext = os.path.splitext(file_name)[1]
        file_path = claim_dir / f"{uuid.uuid4()}{file_ext}"
        file_path.write_bytes(content)

        document = Document(
            claim_id=claim_id,
            file_name=file_name,
            file_path=str(file_path),
            content_type=content_type,
        )
        self.db.add(document)
        try:
            self.db.flush()
        except SQLAlchemyError:
            self.discard([str(file_path)])
            raise

        logger.info(f"Document stored: {file_name} for claim {claim_id} ({len(content) / 1024:.1f}KB)")
        return document

    @staticmethod
    def discard(paths: Iterable[str]) -> None:
        """Remove stored files; used when a claim could not be persisted."""
        for path in paths:
            try:
                if os.path.exists(path):
                    os.remove(path)
                    logger.info(f"Deleted file due to error: {path}")
            except OSError as e:
                logger.error(f"Error deleting file {path}: {e}")
