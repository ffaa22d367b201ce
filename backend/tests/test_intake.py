"""
Tests for claim submission (intake).
"""

import os
from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from claimsdesk.core.errors import ValidationError
from claimsdesk.db.models import ClaimStatus, Document
from claimsdesk.services import ClaimSubmission, UploadedFile
from claimsdesk.services.claims_service import months_before


def form_data(**overrides) -> dict:
    data = {
        "empName": "Asha Rao",
        "empEmail": "asha.rao@gmail.com",
        "empId": "ATS0123",
        "department": "Engineering",
        "claimDate": (date.today() - timedelta(days=5)).isoformat(),
        "amount": "1234.99",
        "description": "Flight to client site",
        "type": "Travel",
    }
    data.update(overrides)
    return data


def submission(**overrides) -> ClaimSubmission:
    data = form_data(**overrides)
    return ClaimSubmission(
        employee_name=data["empName"],
        employee_email=data["empEmail"],
        employee_id=data["empId"],
        department=data["department"],
        claim_date=data["claimDate"],
        amount=data["amount"],
        description=data["description"],
        type=data["type"],
    )


PDF = UploadedFile("receipt.pdf", b"%PDF-1.4 receipt", "application/pdf")


class TestSubmitEndpoint:
    """POST /api/claims."""

    def test_submit_claim(self, client: TestClient):
        response = client.post(
            "/api/claims",
            data=form_data(),
            files=[
                ("documents", ("receipt.pdf", b"%PDF-1.4 receipt", "application/pdf")),
                ("documents", ("boarding pass.png", b"\x89PNG pass", "image/png")),
            ],
        )
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Claim submitted successfully"
        assert body["claimId"].startswith(f"CLM-{date.today().year}-")
        assert [d["originalName"] for d in body["documents"]] == ["receipt.pdf", "boarding pass.png"]

        claim = client.get("/api/claims", params={"claim_id": body["claimId"]}).json()[0]
        assert claim["status"] == "pending"
        assert claim["amount"] == 1234.99
        assert claim["employee_id"] == "ATS0123"

        download = client.get(f"/api/documents/{body['documents'][1]['id']}")
        assert download.content == b"\x89PNG pass"

    def test_submit_without_documents(self, client: TestClient):
        response = client.post("/api/claims", data=form_data())
        assert response.status_code == 400
        assert response.json() == {"error": "At least one document is required"}

    def test_submit_missing_field(self, client: TestClient):
        data = form_data()
        del data["department"]
        response = client.post(
            "/api/claims",
            data=data,
            files=[("documents", ("receipt.pdf", b"%PDF", "application/pdf"))],
        )
        assert response.status_code == 400
        assert response.json() == {"error": "All fields are required"}

    def test_submit_disallowed_file_type(self, client: TestClient):
        response = client.post(
            "/api/claims",
            data=form_data(),
            files=[("documents", ("notes.txt", b"hello", "text/plain"))],
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Only PDF, JPG, and PNG files are allowed"}
        assert client.get("/api/claims").json() == []


class TestSubmissionRules:
    """Field validation performed by the claims service."""

    def test_valid_submission_creates_pending_claim(self, service, db):
        claim = service.submit(submission(type="Snacks"), [PDF])

        assert claim.status == ClaimStatus.PENDING
        assert claim.type == "Snacks"
        assert len(claim.documents) == 1
        assert os.path.isfile(claim.documents[0].file_path)

    @pytest.mark.parametrize("employee_id", ["ATS0012", "ATS123", "ats0123", "ATS01234", "XYZ0123"])
    def test_employee_id_format(self, service, employee_id):
        with pytest.raises(ValidationError, match="ATS0"):
            service.submit(submission(empId=employee_id), [PDF])

    @pytest.mark.parametrize("email", ["asha@yahoo.com", "asha@gmail.co", "not-an-email"])
    def test_email_domain(self, service, email):
        with pytest.raises(ValidationError, match="gmail.com or @outlook.com"):
            service.submit(submission(empEmail=email), [PDF])

    @pytest.mark.parametrize("amount", ["0", "-5", "50000.01", "abc", "NaN"])
    def test_amount_bounds(self, service, amount):
        with pytest.raises(ValidationError, match="Amount must be between"):
            service.submit(submission(amount=amount), [PDF])

    def test_amount_upper_bound_inclusive(self, service):
        claim = service.submit(submission(amount="50000"), [PDF])
        assert claim.amount == 50000

    def test_future_claim_date(self, service):
        tomorrow = (date.today() + timedelta(days=1)).isoformat()
        with pytest.raises(ValidationError, match="not in the future"):
            service.submit(submission(claimDate=tomorrow), [PDF])

    def test_claim_date_window(self, service):
        today = date(2024, 5, 31)
        oldest_allowed = months_before(today, 3)
        assert oldest_allowed == date(2024, 2, 29)

        service.submit(submission(claimDate=oldest_allowed.isoformat()), [PDF], today=today)

        too_old = (oldest_allowed - timedelta(days=1)).isoformat()
        with pytest.raises(ValidationError):
            service.submit(submission(claimDate=too_old), [PDF], today=today)

    @pytest.mark.parametrize("claim_date", [
        "31/05/2024",
        "2024-05-01garbage",
        "2024-05-01T",
        "2024-05-01Tnoon",
        "20240501",
    ])
    def test_bad_claim_date_format(self, service, claim_date):
        with pytest.raises(ValidationError, match="ISO format"):
            service.submit(submission(claimDate=claim_date), [PDF])

    def test_claim_date_with_time_suffix(self, service):
        day = date.today() - timedelta(days=2)
        claim = service.submit(submission(claimDate=f"{day.isoformat()}T00:00:00.000Z"), [PDF])
        assert claim.claim_date == day

    def test_too_many_documents(self, service):
        with pytest.raises(ValidationError, match="At most"):
            service.submit(submission(), [PDF] * 6)

    def test_oversized_document(self, service):
        big = UploadedFile("big.pdf", b"0" * (5 * 1024 * 1024 + 1), "application/pdf")
        with pytest.raises(ValidationError, match="5MB"):
            service.submit(submission(), [big])

    def test_failed_submission_leaves_no_files(self, service, db, upload_dir, monkeypatch):
        """A failure after files are written removes them and stores nothing."""
        original_add = service.registry.add
        calls = []

        def failing_add(*args, **kwargs):
            if calls:
                raise OSError("disk full")
            calls.append(1)
            return original_add(*args, **kwargs)

        monkeypatch.setattr(service.registry, "add", failing_add)

        with pytest.raises(OSError):
            service.submit(submission(), [PDF, PDF])

        assert db.query(Document).count() == 0
        assert service.list_claims() == []
        leftovers = [f for _, _, files in os.walk(upload_dir) for f in files]
        assert leftovers == []


class TestMonthsBefore:
    @pytest.mark.parametrize("day, months, expected", [
        (date(2024, 5, 15), 3, date(2024, 2, 15)),
        (date(2024, 1, 10), 3, date(2023, 10, 10)),
        (date(2023, 5, 31), 3, date(2023, 2, 28)),
        (date(2024, 3, 31), 1, date(2024, 2, 29)),
    ])
    def test_months_before(self, day, months, expected):
        assert months_before(day, months) == expected
