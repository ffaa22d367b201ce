"""
Claims Service

Orchestrates the claim lifecycle on top of the Claim Store and Document
Registry:

- claim intake (validation, claim + documents in one unit of work)
- the pending -> approved | rejected state machine
- read pass-throughs and server-side summaries for the dashboard
"""
import re
from calendar import monthrange
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from claimsdesk.core.config import settings
from claimsdesk.core.errors import ValidationError
from claimsdesk.core.logging import get_logger
from claimsdesk.db.models import Claim, ClaimStatus, Document
from claimsdesk.services.aggregation import ClaimSummary, SummaryScope, aggregate
from claimsdesk.services.claim_store import ClaimStore
from claimsdesk.services.document_registry import DocumentRegistry

logger = get_logger(__name__)

EMPLOYEE_ID_PATTERN = re.compile(r"^ATS0[1-9]\d{2}$")
EMPLOYEE_EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@(gmail|outlook)\.com$")
CLAIM_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


@dataclass
class ClaimSubmission:
    """Raw claim fields as submitted by the intake form."""
    employee_name: str
    employee_email: str
    employee_id: str
    department: str
    claim_date: str
    amount: str
    description: str
    type: str


@dataclass
class UploadedFile:
    file_name: str
    content: bytes
    content_type: Optional[str] = None


def months_before(day: date, months: int) -> date:
    """Same day ``months`` earlier, clamped to the end of shorter months."""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    return date(year, month, min(day.day, monthrange(year, month)[1]))


def parse_claim_date(value: str) -> date:
    """Parse ``YYYY-MM-DD``, optionally followed by an ISO time such as ``T00:00:00Z``."""
    raw = str(value).strip()
    day, sep, _ = raw.partition("T")
    if not CLAIM_DATE_PATTERN.match(day):
        raise ValueError(f"not an ISO date: {raw!r}")
    if sep:
        datetime.fromisoformat(raw.replace("Z", "+00:00"))
    return date.fromisoformat(day)


def validate_employee_id(employee_id: str) -> str:
    if not EMPLOYEE_ID_PATTERN.match(employee_id or ""):
        raise ValidationError("Employee ID must be ATS0 followed by 3 digits (e.g., ATS0123)")
    return employee_id


def parse_status_filter(status: Optional[str]) -> Optional[ClaimStatus]:
    if not status:
        return None
    try:
        return ClaimStatus(status)
    except ValueError:
        valid = ", ".join(s.value for s in ClaimStatus)
        raise ValidationError(f"status must be one of: {valid}")


class ClaimsService:
    """Sole writer of claim status; entry point for the API layer."""

    def __init__(self, db: Session, upload_dir: Optional[str] = None):
        self.db = db
        self.store = ClaimStore(db)
        self.registry = DocumentRegistry(db, upload_dir=upload_dir)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_claims(
        self,
        claim_id: Optional[str] = None,
        employee_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Claim]:
        if employee_id:
            validate_employee_id(employee_id)
        return self.store.list(
            claim_id=claim_id,
            employee_id=employee_id,
            status=parse_status_filter(status),
        )

    def get_claim(self, claim_id: str) -> Claim:
        return self.store.get(claim_id)

    def summary(self, scope: str) -> ClaimSummary:
        """Aggregate the current claim snapshot for ``scope``."""
        try:
            summary_scope = SummaryScope(scope)
        except ValueError:
            raise ValidationError("scope must be pending or completed")
        return aggregate(self.store.snapshot(), summary_scope)

    # ------------------------------------------------------------------
    # Status workflow
    # ------------------------------------------------------------------

    def transition(self, claim_id: str, status: str) -> Claim:
        """
        Approve or reject a pending claim.

        Raises:
            ValidationError: ``status`` is not approved or rejected
            NotFoundError: unknown claim id
            ConflictError: the claim was already approved or rejected
        """
        try:
            target = ClaimStatus(status)
        except ValueError:
            target = None
        if target not in ClaimStatus.decisions():
            raise ValidationError("Status must be approved or rejected")

        claim = self.store.set_status(claim_id, target)
        logger.info(f"Claim {claim_id} {target.value}")
        return claim

    # ------------------------------------------------------------------
    # Intake
    # ------------------------------------------------------------------

    def submit(
        self,
        submission: ClaimSubmission,
        files: Sequence[UploadedFile],
        today: Optional[date] = None,
    ) -> Claim:
        """
        Validate a submission and persist it as a pending claim with its
        documents. Either the claim and all documents are stored, or nothing
        is: stored files are removed again when the transaction fails.
        """
        claim = self._build_claim(submission, today or date.today())
        self._validate_files(files)

        stored_paths: List[str] = []
        try:
            claim_id = self.store.create(claim, commit=False)
            for upload in files:
                document: Document = self.registry.add(
                    claim_id,
                    upload.file_name,
                    upload.content,
                    upload.content_type,
                )
                stored_paths.append(document.file_path)
            self.db.commit()
        except Exception:
            self.db.rollback()
            self.registry.discard(stored_paths)
            raise

        logger.info(f"Claim submitted: {claim_id} with {len(stored_paths)} document(s)")
        return self.store.get(claim_id)

    def _build_claim(self, submission: ClaimSubmission, today: date) -> Claim:
        fields = [
            submission.employee_name,
            submission.employee_email,
            submission.employee_id,
            submission.department,
            submission.claim_date,
            submission.amount,
            submission.description,
            submission.type,
        ]
        if any(value is None or str(value).strip() == "" for value in fields):
            raise ValidationError("All fields are required")

        validate_employee_id(submission.employee_id)

        if not EMPLOYEE_EMAIL_PATTERN.match(submission.employee_email):
            raise ValidationError("Email must be a valid @gmail.com or @outlook.com address")

        amount_error = f"Amount must be between ₹0.01 and ₹{settings.MAX_CLAIM_AMOUNT:,.0f}"
        try:
            amount = Decimal(str(submission.amount))
        except InvalidOperation:
            raise ValidationError(amount_error)
        if not amount.is_finite() or amount <= 0 or amount > Decimal(str(settings.MAX_CLAIM_AMOUNT)):
            raise ValidationError(amount_error)

        try:
            claim_date = parse_claim_date(submission.claim_date)
        except ValueError:
            raise ValidationError("claimDate must be in ISO format (YYYY-MM-DD)")
        earliest = months_before(today, settings.CLAIM_WINDOW_MONTHS)
        if claim_date > today or claim_date < earliest:
            raise ValidationError(
                f"Claim date must be within the last {settings.CLAIM_WINDOW_MONTHS} months "
                "and not in the future"
            )

        return Claim(
            employee_name=submission.employee_name,
            employee_email=submission.employee_email,
            employee_id=submission.employee_id,
            department=submission.department,
            claim_date=claim_date,
            amount=amount,
            description=submission.description,
            type=submission.type,
        )

    def _validate_files(self, files: Sequence[UploadedFile]) -> None:
        if not files:
            raise ValidationError("At least one document is required")
        if len(files) > settings.MAX_DOCUMENTS_PER_CLAIM:
            raise ValidationError(
                f"At most {settings.MAX_DOCUMENTS_PER_CLAIM} documents may be attached"
            )
        for upload in files:
            if upload.content_type not in settings.ALLOWED_CONTENT_TYPES:
                raise ValidationError("Only PDF, JPG, and PNG files are allowed")
            if len(upload.content) > settings.max_upload_bytes:
                raise ValidationError(f"File size exceeds {settings.MAX_UPLOAD_SIZE_MB}MB limit")
