"""
Claim Store

Durable record of claims keyed by claim id. The store owns the only write path
to claim status: a compare-and-set UPDATE guarded on the claim still being
pending, so two concurrent decisions on one claim cannot both land.
"""
import random
from datetime import datetime
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from claimsdesk.core.errors import ConflictError, NotFoundError, StorageError
from claimsdesk.core.logging import get_logger
from claimsdesk.db.models import Claim, ClaimStatus
from claimsdesk.services.db_utils import translate_db_errors

logger = get_logger(__name__)

MAX_ID_ATTEMPTS = 20


def generate_claim_id(now: Optional[datetime] = None) -> str:
    """Generate a claim id of the form CLM-<year>-<4 digits>."""
    year = (now or datetime.utcnow()).year
    return f"CLM-{year}-{random.randint(1000, 9999)}"


class ClaimStore:
    """Repository for Claim rows."""

    def __init__(self, db: Session):
        self.db = db

    @translate_db_errors("list claims")
    def list(
        self,
        claim_id: Optional[str] = None,
        employee_id: Optional[str] = None,
        status: Optional[ClaimStatus] = None,
    ) -> List[Claim]:
        """Claims matching all given filters, newest first."""
        query = self.db.query(Claim)
        if claim_id:
            query = query.filter(Claim.claim_id == claim_id)
        if employee_id:
            query = query.filter(Claim.employee_id == employee_id)
        if status:
            query = query.filter(Claim.status == status)
        return query.order_by(Claim.created_at.desc(), Claim.claim_id).all()

    @translate_db_errors("get claim")
    def get(self, claim_id: str) -> Claim:
        claim = self.db.get(Claim, claim_id)
        if claim is None:
            raise NotFoundError("Claim not found")
        return claim

    @translate_db_errors("snapshot claims")
    def snapshot(self) -> List[Claim]:
        """Every claim, read in a single query."""
        return self.db.query(Claim).order_by(Claim.created_at.desc(), Claim.claim_id).all()

    @translate_db_errors("create claim")
    def create(self, claim: Claim, commit: bool = True) -> str:
        """
        Insert a new pending claim and return its id.

        Pass ``commit=False`` to keep the insert in the caller's transaction,
        e.g. when documents are attached in the same unit of work.
        """
        if not claim.claim_id:
            claim.claim_id = self._unused_claim_id()
        claim.status = ClaimStatus.PENDING

        self.db.add(claim)
        if commit:
            self.db.commit()
        else:
            self.db.flush()

        logger.info(f"Claim created: {claim.claim_id} ({claim.type}, {claim.amount})")
        return claim.claim_id

    @translate_db_errors("set claim status")
    def set_status(self, claim_id: str, status: ClaimStatus) -> Claim:
        """
        Move a pending claim to ``status``.

        Raises:
            NotFoundError: no claim with this id
            ConflictError: the claim has already left pending
        """
        result = self.db.execute(
            update(Claim)
            .where(Claim.claim_id == claim_id, Claim.status == ClaimStatus.PENDING)
            .values(status=status, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 1:
            self.db.commit()
            claim = self.db.get(Claim, claim_id, populate_existing=True)
            logger.info(f"Claim {claim_id} status set to {status.value}")
            return claim

        self.db.rollback()
        current = self.db.get(Claim, claim_id, populate_existing=True)
        if current is None:
            raise NotFoundError("Claim not found")

        logger.warning(
            f"Rejected transition of claim {claim_id} to {status.value}: "
            f"already {current.status.value}"
        )
        raise ConflictError(
            f"Claim {claim_id} has already been {current.status.value}",
            current_status=current.status.value,
        )

    def _unused_claim_id(self) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = generate_claim_id()
            if self.db.get(Claim, candidate) is None:
                return candidate
        raise StorageError("Could not allocate a unique claim id")
