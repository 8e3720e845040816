"""
Training-status state machine for expert reviews.

    pending -> ready -> trained
    pending | ready -> ignored -> pending (restore)

'trained' is terminal. Anything not listed here is refused.
"""
from typing import Dict, FrozenSet, Optional

from lepinet.core.exceptions import InvalidTransitionException
from lepinet.models import TrainingStatus

ALLOWED_TRANSITIONS: Dict[TrainingStatus, FrozenSet[TrainingStatus]] = {
    TrainingStatus.PENDING: frozenset({TrainingStatus.READY, TrainingStatus.IGNORED}),
    TrainingStatus.READY: frozenset({TrainingStatus.TRAINED, TrainingStatus.IGNORED}),
    TrainingStatus.IGNORED: frozenset({TrainingStatus.PENDING}),
    TrainingStatus.TRAINED: frozenset(),
}


def can_transition(current: TrainingStatus, target: TrainingStatus) -> bool:
    return TrainingStatus(target) in ALLOWED_TRANSITIONS[TrainingStatus(current)]


def check_transition(
    current: TrainingStatus, target: TrainingStatus, review_id: Optional[str] = None
) -> None:
    """
    Raises:
        InvalidTransitionException: target is not reachable from current
    """
    current = TrainingStatus(current)
    target = TrainingStatus(target)
    if not can_transition(current, target):
        details = {"from": current.value, "to": target.value}
        if review_id is not None:
            details["reviewId"] = review_id
        raise InvalidTransitionException(
            f"Cannot move training status from {current.value} to {target.value}",
            details=details,
        )
