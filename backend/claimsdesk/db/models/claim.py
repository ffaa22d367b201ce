"""
Claim database model
"""
from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import Column, String, Date, DateTime, Enum, Numeric, Text
from sqlalchemy.orm import relationship

from claimsdesk.db.base import Base


class ClaimType(str, PyEnum):
    MEDICAL = "Medical"
    TRAVEL = "Travel"
    EDUCATION = "Education"
    MEAL = "Meal"
    EQUIPMENT = "Equipment"
    OTHER = "Other"

    @classmethod
    def bucket(cls, raw: str) -> "ClaimType":
        """Aggregation bucket for a stored type; unknown labels fold into OTHER."""
        try:
            return cls(raw)
        except ValueError:
            return cls.OTHER


class ClaimStatus(str, PyEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not ClaimStatus.PENDING

    @classmethod
    def decisions(cls) -> tuple:
        """Statuses a pending claim may move to."""
        return (cls.APPROVED, cls.REJECTED)


class Claim(Base):
    """Employee reimbursement claim."""

    __tablename__ = "claims"

    claim_id = Column(String(20), primary_key=True)
    employee_name = Column(String(100), nullable=False)
    employee_email = Column(String(100), nullable=False)
    employee_id = Column(String(10), nullable=False, index=True)
    department = Column(String(50), nullable=False)
    claim_date = Column(Date, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    description = Column(Text, nullable=False)

    # Stored verbatim; ClaimType.bucket() decides the aggregation label
    type = Column(String(50), nullable=False)

    status = Column(
        Enum(
            ClaimStatus,
            name="claim_status",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        default=ClaimStatus.PENDING,
        nullable=False,
        index=True,
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    documents = relationship(
        "Document",
        back_populates="claim",
        cascade="all, delete-orphan",
        order_by="Document.id",
    )

    @property
    def type_bucket(self) -> ClaimType:
        return ClaimType.bucket(self.type)

    def __repr__(self) -> str:
        return f"<Claim {self.claim_id} ({self.status.value})>"
