"""
Training-status transition table tests.
"""
import pytest

from lepinet.core.exceptions import InvalidTransitionException
from lepinet.models import TrainingStatus
from lepinet.services.transitions import can_transition, check_transition

PENDING = TrainingStatus.PENDING
READY = TrainingStatus.READY
TRAINED = TrainingStatus.TRAINED
IGNORED = TrainingStatus.IGNORED


class TestTransitionTable:
    """Allowed and refused moves."""

    @pytest.mark.parametrize(
        "current,target",
        [(PENDING, READY), (READY, TRAINED), (PENDING, IGNORED), (READY, IGNORED), (IGNORED, PENDING)],
    )
    def test_allowed(self, current, target):
        assert can_transition(current, target)
        check_transition(current, target)

    @pytest.mark.parametrize(
        "current,target",
        [
            (PENDING, TRAINED),
            (PENDING, PENDING),
            (TRAINED, PENDING),
            (TRAINED, IGNORED),
            (IGNORED, READY),
            (IGNORED, TRAINED),
            (READY, PENDING),
        ],
    )
    def test_refused(self, current, target):
        assert not can_transition(current, target)
        with pytest.raises(InvalidTransitionException):
            check_transition(current, target)

    def test_refusal_details(self):
        with pytest.raises(InvalidTransitionException) as exc_info:
            check_transition("trained", "pending", review_id="abc")
        assert exc_info.value.details == {"from": "trained", "to": "pending", "reviewId": "abc"}
