"""
Training-candidate curation.

Candidates are certain-confidence expert reviews that identify a butterfly.
Admins move them through the training pipeline in bulk; every move is
validated against the transition table and recorded as an audit event.
"""
import enum
import uuid
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from lepinet.core.logging import logger
from lepinet.core.exceptions import (
    InvalidArgumentException,
    InvalidTransitionException,
    NotFoundException,
)
from lepinet.models import (
    ConfidenceLevel,
    ExpertReview,
    NOT_A_BUTTERFLY,
    ObservationRecord,
    TrainingStatus,
    TrainingStatusEvent,
    User,
)
from lepinet.services.transitions import check_transition


class CandidateStatusFilter(str, enum.Enum):
    ALL = "all"
    PENDING = "pending"
    READY = "ready"
    TRAINED = "trained"
    IGNORED = "ignored"

    def as_status(self) -> Optional[TrainingStatus]:
        return None if self == CandidateStatusFilter.ALL else TrainingStatus(self.value)


class AgreementFilter(str, enum.Enum):
    ALL = "all"
    AGREED = "agreed"
    CORRECTED = "corrected"


@dataclass
class Candidate:
    review: ExpertReview
    record: ObservationRecord


@dataclass
class CandidateListing:
    candidates: List[Candidate]
    total_candidates: int
    status_counts: Dict[str, int]


def is_candidate(review: ExpertReview) -> bool:
    """Certain-confidence reviews that identify a butterfly feed training."""
    return (
        review.confidence_level == ConfidenceLevel.CERTAIN
        and review.identified_species_name is not None
        and review.identified_species_name != NOT_A_BUTTERFLY
    )


def count_by_status(candidates: Sequence[Candidate]) -> Dict[str, int]:
    counts = {status.value: 0 for status in TrainingStatus}
    for candidate in candidates:
        counts[TrainingStatus(candidate.review.training_status).value] += 1
    return counts


def filter_candidates(
    candidates: Sequence[Candidate],
    training_status: Optional[TrainingStatus] = None,
    agreement: AgreementFilter = AgreementFilter.ALL,
    species_search: Optional[str] = None,
) -> List[Candidate]:
    agreement = AgreementFilter(agreement)
    term = (species_search or "").strip().lower()

    selected = []
    for candidate in candidates:
        review = candidate.review
        if training_status is not None and review.training_status != TrainingStatus(training_status):
            continue
        if agreement == AgreementFilter.AGREED and not review.agreed_with_ai:
            continue
        if agreement == AgreementFilter.CORRECTED and review.agreed_with_ai:
            continue
        if term and term not in (review.identified_species_name or "").lower():
            continue
        selected.append(candidate)
    return selected


class TrainingCurationService:
    """Admin-side curation of expert reviews for retraining."""

    @staticmethod
    async def all_candidates(db: AsyncSession) -> List[Candidate]:
        stmt = (
            select(ExpertReview, ObservationRecord)
            .join(ObservationRecord, ObservationRecord.id == ExpertReview.ai_log_id)
            .where(
                ExpertReview.confidence_level == ConfidenceLevel.CERTAIN,
                ExpertReview.identified_species_name != NOT_A_BUTTERFLY,
            )
            .order_by(ExpertReview.created_at.desc())
        )
        result = await db.execute(stmt)
        return [Candidate(review=review, record=record) for review, record in result.all()]

    @staticmethod
    async def list_candidates(
        db: AsyncSession,
        training_status: Optional[TrainingStatus] = None,
        agreement: AgreementFilter = AgreementFilter.ALL,
        species_search: Optional[str] = None,
    ) -> CandidateListing:
        candidates = await TrainingCurationService.all_candidates(db)
        return CandidateListing(
            candidates=filter_candidates(candidates, training_status, agreement, species_search),
            total_candidates=len(candidates),
            status_counts=count_by_status(candidates),
        )

    @staticmethod
    async def transition(
        db: AsyncSession,
        review_ids: Sequence[uuid.UUID],
        target: TrainingStatus,
        actor: User,
    ) -> List[uuid.UUID]:
        """
        Move every listed review to `target`, or none of them.

        Raises:
            InvalidArgumentException: No ids given
            NotFoundException: Some id is not an expert review
            InvalidTransitionException: Some review is not a candidate or cannot
                move to `target`
        """
        target = TrainingStatus(target)
        ids = list(dict.fromkeys(review_ids))
        if not ids:
            raise InvalidArgumentException("No reviews selected", details={"field": "ids"})

        stmt = select(ExpertReview).where(ExpertReview.id.in_(ids)).with_for_update()
        reviews = {review.id: review for review in (await db.execute(stmt)).scalars().all()}

        missing = [str(review_id) for review_id in ids if review_id not in reviews]
        if missing:
            raise NotFoundException("Review not found", details={"ids": missing})

        # Validate everything before writing anything
        for review_id in ids:
            if not is_candidate(reviews[review_id]):
                raise InvalidTransitionException(
                    "Review is not a training candidate",
                    details={"reviewId": str(review_id)},
                )
            check_transition(reviews[review_id].training_status, target, str(review_id))

        last_sequence = dict(
            (
                await db.execute(
                    select(TrainingStatusEvent.review_id, func.max(TrainingStatusEvent.sequence))
                    .where(TrainingStatusEvent.review_id.in_(ids))
                    .group_by(TrainingStatusEvent.review_id)
                )
            ).all()
        )

        actor_id = actor.id
        for review_id in ids:
            review = reviews[review_id]
            db.add(
                TrainingStatusEvent(
                    review_id=review_id,
                    from_status=review.training_status,
                    to_status=target,
                    sequence=last_sequence.get(review_id, 0) + 1,
                    changed_by=actor_id,
                )
            )
            review.training_status = target

        await db.commit()

        logger.info(
            "Training status updated",
            extra={
                "to_status": target.value,
                "count": len(ids),
                "changed_by": str(actor_id),
            },
        )
        return ids

    @staticmethod
    async def approve(db: AsyncSession, review_ids: Sequence[uuid.UUID], actor: User):
        return await TrainingCurationService.transition(db, review_ids, TrainingStatus.READY, actor)

    @staticmethod
    async def mark_trained(db: AsyncSession, review_ids: Sequence[uuid.UUID], actor: User):
        return await TrainingCurationService.transition(db, review_ids, TrainingStatus.TRAINED, actor)

    @staticmethod
    async def ignore(db: AsyncSession, review_id: uuid.UUID, actor: User):
        return await TrainingCurationService.transition(db, [review_id], TrainingStatus.IGNORED, actor)

    @staticmethod
    async def restore(db: AsyncSession, review_id: uuid.UUID, actor: User):
        return await TrainingCurationService.transition(db, [review_id], TrainingStatus.PENDING, actor)

    @staticmethod
    async def history(db: AsyncSession, review_id: uuid.UUID) -> List[TrainingStatusEvent]:
        if await db.get(ExpertReview, review_id) is None:
            raise NotFoundException(
                f"Review not found: {review_id}", details={"review_id": str(review_id)}
            )
        stmt = (
            select(TrainingStatusEvent)
            .where(TrainingStatusEvent.review_id == review_id)
            .order_by(TrainingStatusEvent.sequence.asc())
        )
        return list((await db.execute(stmt)).scalars().all())


# Global singleton instance
training_curation_service = TrainingCurationService()
