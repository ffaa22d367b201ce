"""
Aggregation services package
"""
from claimsdesk.services.aggregation.engine import (
    aggregate,
    truncate_amount,
    ClaimSummary,
    SummaryScope,
)

__all__ = [
    "aggregate",
    "truncate_amount",
    "ClaimSummary",
    "SummaryScope",
]
