"""
Test configuration and fixtures for ClaimsDesk backend tests.
"""

import os
import tempfile

# Settings are read at import time; point them at throwaway storage first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="claimsdesk-uploads-")

from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from main import app
from claimsdesk.api.deps import get_claims_service, get_document_registry
from claimsdesk.db.base import Base
from claimsdesk.db.models import Claim, ClaimStatus, Document
from claimsdesk.db.session import get_db
from claimsdesk.services import ClaimsService, DocumentRegistry


# Use in-memory SQLite for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def upload_dir(tmp_path) -> str:
    path = tmp_path / "uploads"
    path.mkdir()
    return str(path)


@pytest.fixture
def service(db: Session, upload_dir: str) -> ClaimsService:
    return ClaimsService(db, upload_dir=upload_dir)


@pytest.fixture(scope="function")
def client(db: Session, upload_dir: str) -> Generator[TestClient, None, None]:
    """Create a test client with database and storage overrides."""
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_claims_service] = lambda: ClaimsService(db, upload_dir=upload_dir)
    app.dependency_overrides[get_document_registry] = lambda: DocumentRegistry(db, upload_dir=upload_dir)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_claim(db: Session):
    """Factory inserting claims directly, bypassing intake validation."""
    created = []

    def _make(
        claim_id: str,
        type: str = "Travel",
        amount: str = "5000.00",
        status: ClaimStatus = ClaimStatus.PENDING,
        **overrides,
    ) -> Claim:
        fields = dict(
            claim_id=claim_id,
            employee_name="Asha Rao",
            employee_email="asha.rao@gmail.com",
            employee_id="ATS0123",
            department="Engineering",
            claim_date=date.today() - timedelta(days=3),
            amount=Decimal(amount),
            description="Client visit",
            type=type,
            status=status,
            # Later claims sort first; keep insertion order deterministic
            created_at=datetime(2024, 1, 1) + timedelta(minutes=len(created)),
        )
        fields.update(overrides)
        claim = Claim(**fields)
        db.add(claim)
        db.commit()
        db.refresh(claim)
        created.append(claim)
        return claim

    return _make


@pytest.fixture
def test_claim(make_claim) -> Claim:
    """A pending travel claim."""
    return make_claim("CLM-2024-1001", type="Travel", amount="5000.00")


@pytest.fixture
def test_document(db: Session, test_claim: Claim, upload_dir: str) -> Document:
    """A PDF stored on disk and registered against test_claim."""
    path = os.path.join(upload_dir, "receipt-stored.pdf")
    with open(path, "wb") as f:
        f.write(b"%PDF-1.4 test receipt \x00\x01\x02")

    document = Document(
        claim_id=test_claim.claim_id,
        file_name="taxi receipt.pdf",
        file_path=path,
        content_type="application/pdf",
    )
    db.add(document)
    db.commit()
    db.refresh(document)
    return document
