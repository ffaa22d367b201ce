import sys
import os

# Add the current directory to sys.path to ensure 'claimsdesk' can be imported
sys.path.append(os.getcwd())

from claimsdesk.db.session import SessionLocal
from claimsdesk.db.models import ClaimStatus
from claimsdesk.services import ClaimStore, SummaryScope, aggregate


def list_claims():
    db = SessionLocal()
    try:
        claims = ClaimStore(db).snapshot()
        if not claims:
            print("No claims found in the database. You might need to run the seed script.")
            return

        for status in ClaimStatus:
            matching = [c for c in claims if c.status == status]
            print(f"\n--- {status.value.title()} Claims ({len(matching)}) ---")
            for claim in matching:
                print(
                    f"{claim.claim_id:<15} | {claim.employee_id:<8} | {claim.type:<10} | "
                    f"{claim.amount:>10} | {len(claim.documents)} doc(s)"
                )

        print("\n--- Totals ---")
        for scope in SummaryScope:
            summary = aggregate(claims, scope)
            print(f"{scope.value:<10} {summary.total:>10}  {summary.by_type}")
        print("--- End of List ---\n")
    finally:
        db.close()


if __name__ == "__main__":
    list_claims()
