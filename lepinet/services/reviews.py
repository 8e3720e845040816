"""
Expert review workflow: verdict submission, comments and helpful votes.
"""
import uuid
from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from lepinet.core.logging import logger
from lepinet.core.exceptions import (
    ConflictException,
    InvalidArgumentException,
    NotFoundException,
)
from lepinet.models import (
    ConfidenceLevel,
    ExpertReview,
    ObservationRecord,
    ReviewComment,
    ReviewRating,
    Species,
    User,
)
from lepinet.services.records import RecordService
from lepinet.services.species import SpeciesService
from lepinet.services.verdicts import Verdict, resolve_verdict


@dataclass
class Workstation:
    record: ObservationRecord
    predicted_species: Optional[Species]
    species_options: List[Species]
    already_reviewed: bool


class ReviewService:
    """Operations behind the expert review screens."""

    @staticmethod
    async def get_review(db: AsyncSession, review_id: uuid.UUID) -> ExpertReview:
        review = await db.get(ExpertReview, review_id)
        if review is None:
            raise NotFoundException(
                f"Review not found: {review_id}", details={"review_id": str(review_id)}
            )
        return review

    @staticmethod
    async def has_reviewed(db: AsyncSession, reviewer_id: uuid.UUID, record_id: uuid.UUID) -> bool:
        stmt = select(func.count(ExpertReview.id)).where(
            ExpertReview.ai_log_id == record_id, ExpertReview.reviewer_id == reviewer_id
        )
        return (await db.execute(stmt)).scalar_one() > 0

    @staticmethod
    async def workstation(db: AsyncSession, reviewer: User, record_id: uuid.UUID) -> Workstation:
        record = await RecordService.get_record(db, record_id)
        predicted = await SpeciesService.find(db, record.predicted_id)

        return Workstation(
            record=record,
            predicted_species=predicted,
            species_options=await SpeciesService.list_species(db),
            already_reviewed=await ReviewService.has_reviewed(db, reviewer.id, record.id),
        )

    @staticmethod
    async def submit_review(
        db: AsyncSession,
        reviewer: User,
        record_id: uuid.UUID,
        verdict: Verdict,
        species_id: Optional[str] = None,
        confidence: ConfidenceLevel = ConfidenceLevel.CERTAIN,
        is_new_discovery: bool = False,
        comments: Optional[str] = None,
    ) -> ExpertReview:
        """
        Record one expert's verdict on one record.

        Raises:
            NotFoundException: Unknown record
            InvalidArgumentException: CORRECT without a species, or a species not in the catalog
            ConflictException: This reviewer already reviewed this record
        """
        reviewer_id = reviewer.id
        record = await RecordService.get_record(db, record_id)

        if await ReviewService.has_reviewed(db, reviewer_id, record.id):
            raise ConflictException(
                "You have already reviewed this record",
                details={"record_id": str(record.id)},
            )

        corrected_name = None
        if Verdict(verdict) == Verdict.CORRECT and species_id:
            species = await SpeciesService.find(db, species_id)
            if species is None:
                raise InvalidArgumentException(
                    f"Species not in catalog: {species_id}",
                    details={"species_id": species_id},
                )
            corrected_name = species.common_name_english

        resolved = resolve_verdict(
            verdict,
            predicted_species_name=record.predicted_species_name,
            corrected_species_name=corrected_name,
            confidence=confidence,
        )

        review = ExpertReview(
            ai_log_id=record.id,
            reviewer_id=reviewer_id,
            agreed_with_ai=resolved.agreed_with_ai,
            identified_species_name=resolved.identified_species_name,
            confidence_level=resolved.confidence_level,
            is_new_discovery=is_new_discovery,
            comments=(comments or "").strip() or None,
        )
        db.add(review)
        try:
            await db.flush()
        except IntegrityError:
            await db.rollback()
            raise ConflictException(
                "You have already reviewed this record",
                details={"record_id": str(record_id)},
            )

        await db.commit()

        logger.info(
            "Expert review submitted",
            extra={
                "review_id": str(review.id),
                "record_id": str(record_id),
                "reviewer_id": str(reviewer_id),
                "verdict": Verdict(verdict).value,
                "confidence_level": review.confidence_level.value,
            },
        )
        return review

    @staticmethod
    async def list_by_reviewer(
        db: AsyncSession, reviewer_id: uuid.UUID
    ) -> List[Tuple[ExpertReview, Optional[ObservationRecord]]]:
        stmt = (
            select(ExpertReview, ObservationRecord)
            .outerjoin(ObservationRecord, ObservationRecord.id == ExpertReview.ai_log_id)
            .where(ExpertReview.reviewer_id == reviewer_id)
            .order_by(ExpertReview.created_at.desc())
        )
        return [(review, record) for review, record in (await db.execute(stmt)).all()]

    # --- comments ---

    @staticmethod
    async def list_comments(
        db: AsyncSession, review_id: uuid.UUID
    ) -> List[Tuple[ReviewComment, Optional[User]]]:
        await ReviewService.get_review(db, review_id)
        stmt = (
            select(ReviewComment, User)
            .outerjoin(User, User.id == ReviewComment.author_id)
            .where(ReviewComment.review_id == review_id)
            .order_by(ReviewComment.created_at.asc())
        )
        return [(comment, author) for comment, author in (await db.execute(stmt)).all()]

    @staticmethod
    async def add_comment(
        db: AsyncSession,
        author: User,
        review_id: uuid.UUID,
        content: str,
        parent_id: Optional[uuid.UUID] = None,
    ) -> ReviewComment:
        """
        Raises:
            NotFoundException: Unknown review
            InvalidArgumentException: Empty content, or a parent from another review
        """
        await ReviewService.get_review(db, review_id)

        content = content.strip()
        if not content:
            raise InvalidArgumentException("Comment cannot be empty")

        if parent_id is not None:
            parent = await db.get(ReviewComment, parent_id)
            if parent is None or parent.review_id != review_id:
                raise InvalidArgumentException(
                    "Parent comment does not belong to this review",
                    details={"parent_id": str(parent_id), "review_id": str(review_id)},
                )

        comment = ReviewComment(
            review_id=review_id,
            author_id=author.id,
            parent_id=parent_id,
            content=content,
        )
        db.add(comment)
        await db.flush()
        await db.commit()

        logger.info(
            "Review comment added",
            extra={"comment_id": str(comment.id), "review_id": str(review_id)},
        )
        return comment

    # --- helpful votes ---

    @staticmethod
    async def helpful_count(db: AsyncSession, review_id: uuid.UUID) -> int:
        stmt = select(func.count(ReviewRating.id)).where(
            ReviewRating.review_id == review_id, ReviewRating.is_helpful.is_(True)
        )
        return (await db.execute(stmt)).scalar_one()

    @staticmethod
    async def vote_helpful(db: AsyncSession, rater: User, review_id: uuid.UUID) -> int:
        """
        Count a "helpful" vote and return the new total.

        Raises:
            NotFoundException: Unknown review
            ConflictException: This rater already voted on this review
        """
        rater_id = rater.id
        await ReviewService.get_review(db, review_id)

        db.add(ReviewRating(review_id=review_id, rater_id=rater_id, is_helpful=True))
        try:
            await db.flush()
        except IntegrityError:
            # Unique constraint violation (duplicate vote)
            await db.rollback()
            logger.warning(
                "Duplicate helpful vote",
                extra={"review_id": str(review_id), "rater_id": str(rater_id)},
            )
            raise ConflictException(
                "You already voted for this review",
                details={"review_id": str(review_id)},
            )

        await db.commit()

        count = await ReviewService.helpful_count(db, review_id)
        logger.info(
            "Helpful vote recorded",
            extra={"review_id": str(review_id), "rater_id": str(rater_id), "helpful_count": count},
        )
        return count


# Global singleton instance
review_service = ReviewService()
