"""
Seed script for populating the database with sample reimbursement claims.
Run with: python data/seed_claims.py
"""
import json
import sys
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from claimsdesk.db import SessionLocal, init_db
from claimsdesk.db.models import Claim, Document
from claimsdesk.services import ClaimsService

CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}


def load_sample_claims():
    """Load sample claims from the JSON fixture next to this script."""
    with open(Path(__file__).parent / "sample_claims.json", "r") as f:
        return json.load(f)


def placeholder_bytes(file_name: str) -> bytes:
    """Small stand-in file body; enough for the dashboard to download."""
    return f"Sample document {file_name}\n".encode()


def seed_claims():
    """Seed the database with sample claims and documents."""
    print("\n" + "=" * 60)
    print("SEEDING DATABASE WITH SAMPLE CLAIMS")
    print("=" * 60 + "\n")

    init_db()
    db = SessionLocal()

    try:
        service = ClaimsService(db)
        claims_data = load_sample_claims()
        print(f"Found {len(claims_data)} sample claims\n")

        for claim_data in claims_data:
            existing = db.query(Claim).filter(
                Claim.employee_id == claim_data["employee_id"],
                Claim.description == claim_data["description"],
            ).first()

            if existing:
                print(f"  Skipping {existing.claim_id} (already exists)")
                continue

            claim = Claim(
                employee_name=claim_data["employee_name"],
                employee_email=claim_data["employee_email"],
                employee_id=claim_data["employee_id"],
                department=claim_data["department"],
                claim_date=date.today() - timedelta(days=claim_data["days_ago"]),
                amount=Decimal(claim_data["amount"]),
                description=claim_data["description"],
                type=claim_data["type"],
            )
            claim_id = service.store.create(claim, commit=False)

            for file_name in claim_data["documents"]:
                service.registry.add(
                    claim_id,
                    file_name,
                    placeholder_bytes(file_name),
                    CONTENT_TYPES.get(Path(file_name).suffix.lower()),
                )
            db.commit()

            if claim_data.get("decision"):
                service.transition(claim_id, claim_data["decision"])

            print(
                f"  Created {claim_id}: {claim_data['type']} {claim_data['amount']} "
                f"({claim_data.get('decision') or 'pending'}, {len(claim_data['documents'])} docs)"
            )

        print("\n" + "=" * 60)
        print("SEEDING COMPLETE!")
        print("=" * 60)

        print(f"\nDatabase Summary:")
        print(f"  Claims: {db.query(Claim).count()}")
        print(f"  Documents: {db.query(Document).count()}")
        print()

    except Exception as e:
        print(f"\nError: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_claims()
