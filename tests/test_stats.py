"""
Admin statistics tests.
"""
import pytest

from lepinet.models import VerificationStatus
from lepinet.services.stats import backlog_health, capacity_health, compute_admin_stats


class TestHealthLevels:
    """Threshold boundaries."""

    @pytest.mark.parametrize("count,level", [(0, "good"), (99, "good"), (100, "warning"),
                                             (499, "warning"), (500, "critical")])
    def test_unreviewed(self, count, level):
        assert backlog_health(count, 100, 500) == level

    @pytest.mark.parametrize("count,level", [(4, "good"), (5, "warning"), (19, "warning"), (20, "critical")])
    def test_pending(self, count, level):
        assert backlog_health(count, 5, 20) == level

    @pytest.mark.parametrize("count,level", [(11, "good"), (10, "warning"), (4, "warning"), (3, "critical")])
    def test_experts(self, count, level):
        assert capacity_health(count, 10, 3) == level


class TestComputeAdminStats:
    """Aggregates over full row sets."""

    def test_counts_and_coverage(self):
        statuses = [
            VerificationStatus.VERIFIED,
            VerificationStatus.VERIFIED,
            VerificationStatus.PENDING,
            VerificationStatus.NONE,
        ]
        stats = compute_admin_stats(statuses, [1, 2, 3, 4], [1, 1, 3, 99])

        assert stats.total_users == 4
        assert stats.verified_experts == 2
        assert stats.pending_verifications == 1
        assert stats.total_records == 4
        assert stats.reviewed_records == 2
        assert stats.unreviewed_records == 2
        assert stats.review_coverage == 0.5
        assert stats.health == {
            "unreviewedRecords": "good",
            "pendingVerifications": "good",
            "verifiedExperts": "critical",
        }

    def test_empty(self):
        stats = compute_admin_stats([], [], [])
        assert stats.review_coverage == 0.0
        assert stats.unreviewed_records == 0
