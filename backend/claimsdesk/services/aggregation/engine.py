"""
Deterministic Aggregation Engine
Summarizes claim amounts by type for one status scope. Pure: reads the claims
it is given and nothing else.
"""
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_FLOOR
from enum import Enum
from typing import Dict, Iterable, Protocol, Union

from claimsdesk.db.models.claim import ClaimStatus, ClaimType


class SummaryScope(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"

    def includes(self, status: ClaimStatus) -> bool:
        if self is SummaryScope.PENDING:
            return status is ClaimStatus.PENDING
        return status.is_terminal


class ClaimLike(Protocol):
    type: str
    amount: Union[Decimal, float, int]
    status: ClaimStatus


@dataclass
class ClaimSummary:
    """Totals for the claims in one scope."""
    scope: SummaryScope
    total: int
    count: int
    by_type: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "scope": self.scope.value,
            "total": self.total,
            "count": self.count,
            "by_type": dict(self.by_type),
        }


def truncate_amount(amount: Union[Decimal, float, int, str]) -> int:
    """Floor an amount to whole currency units (1234.99 -> 1234)."""
    # str() first so floats floor on their printed value, not binary noise
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


def aggregate(claims: Iterable[ClaimLike], scope: SummaryScope) -> ClaimSummary:
    """
    Sum truncated claim amounts by type for claims in ``scope``.

    Each amount is truncated before it is added, so the totals match the
    per-row amounts the dashboard shows. Types outside the fixed set are
    counted under Other. Every label is present in ``by_type``, zero if unused.

    Args:
        claims: Claim snapshot to summarize
        scope: PENDING or COMPLETED (approved and rejected)

    Returns:
        ClaimSummary with total == sum(by_type.values())
    """
    by_type = {claim_type.value: 0 for claim_type in ClaimType}
    count = 0

    for claim in claims:
        if not scope.includes(ClaimStatus(claim.status)):
            continue
        by_type[ClaimType.bucket(claim.type).value] += truncate_amount(claim.amount)
        count += 1

    return ClaimSummary(
        scope=scope,
        total=sum(by_type.values()),
        count=count,
        by_type=by_type,
    )
