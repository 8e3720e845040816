"""
Dashboard aggregate statistics.

Counts are computed from full row sets on every call; nothing is cached or
persisted.
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable

from lepinet.models import VerificationStatus

# Health thresholds shown on the admin dashboard
UNREVIEWED_GOOD_BELOW = 100
UNREVIEWED_WARNING_BELOW = 500
PENDING_GOOD_BELOW = 5
PENDING_WARNING_BELOW = 20
EXPERTS_GOOD_ABOVE = 10
EXPERTS_WARNING_ABOVE = 3


def backlog_health(count: int, good_below: int, warning_below: int) -> str:
    """Health of a queue where fewer is better."""
    if count < good_below:
        return "good"
    if count < warning_below:
        return "warning"
    return "critical"


def capacity_health(count: int, good_above: int, warning_above: int) -> str:
    """Health of a resource where more is better."""
    if count > good_above:
        return "good"
    if count > warning_above:
        return "warning"
    return "critical"


@dataclass
class AdminStats:
    total_users: int
    verified_experts: int
    pending_verifications: int
    total_records: int
    reviewed_records: int
    unreviewed_records: int
    review_coverage: float
    health: Dict[str, str]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def compute_admin_stats(
    user_statuses: Iterable[VerificationStatus],
    record_ids: Iterable[Any],
    reviewed_record_ids: Iterable[Any],
) -> AdminStats:
    """
    Args:
        user_statuses: verification_status of every user
        record_ids: id of every observation record
        reviewed_record_ids: ai_log_id of every expert review (duplicates allowed)
    """
    statuses = list(user_statuses)
    all_records = set(record_ids)
    reviewed = set(reviewed_record_ids) & all_records

    verified = sum(1 for s in statuses if s == VerificationStatus.VERIFIED)
    pending = sum(1 for s in statuses if s == VerificationStatus.PENDING)
    unreviewed = len(all_records) - len(reviewed)
    coverage = round(len(reviewed) / len(all_records), 4) if all_records else 0.0

    return AdminStats(
        total_users=len(statuses),
        verified_experts=verified,
        pending_verifications=pending,
        total_records=len(all_records),
        reviewed_records=len(reviewed),
        unreviewed_records=unreviewed,
        review_coverage=coverage,
        health={
            "unreviewedRecords": backlog_health(
                unreviewed, UNREVIEWED_GOOD_BELOW, UNREVIEWED_WARNING_BELOW
            ),
            "pendingVerifications": backlog_health(
                pending, PENDING_GOOD_BELOW, PENDING_WARNING_BELOW
            ),
            "verifiedExperts": capacity_health(
                verified, EXPERTS_GOOD_ABOVE, EXPERTS_WARNING_ABOVE
            ),
        },
    )
