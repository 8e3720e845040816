"""
Observation record queries: the records browser, record pages and the
review queue all share the same row shape (record + review count + species).
"""
import calendar
import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy import ColumnElement, Select, and_, exists, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from lepinet.core.exceptions import NotFoundException
from lepinet.models import (
    ExpertReview,
    ObservationRecord,
    ReviewRating,
    Species,
    User,
)


class RecordView(str, enum.Enum):
    ALL = "all"
    MINE = "mine"


class DateFilter(str, enum.Enum):
    ALL = "all"
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class RecordStatusFilter(str, enum.Enum):
    ALL = "all"
    VERIFIED = "verified"  # expert-finalized species name set
    UNVERIFIED = "unverified"
    REVIEWED = "reviewed"  # at least one expert review
    UNREVIEWED = "unreviewed"


@dataclass
class RecordRow:
    record: ObservationRecord
    review_count: int = 0
    species: Optional[Species] = None


@dataclass
class ReviewWithVotes:
    review: ExpertReview
    reviewer: Optional[User] = None
    helpful_count: int = 0


@dataclass
class RecordDetail:
    record: ObservationRecord
    predicted_species: Optional[Species] = None
    reviews: List[ReviewWithVotes] = field(default_factory=list)


def _months_back(moment: datetime, months: int) -> datetime:
    """Same day-of-month `months` earlier, clamped to the month's last day."""
    month_index = moment.month - 1 - months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def date_cutoff(date_filter: DateFilter, now: Optional[datetime] = None) -> Optional[datetime]:
    """Earliest created_at included by a date filter (UTC), or None for 'all'."""
    now = now or datetime.now(timezone.utc)
    date_filter = DateFilter(date_filter)

    if date_filter == DateFilter.TODAY:
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if date_filter == DateFilter.WEEK:
        return now - timedelta(days=7)
    if date_filter == DateFilter.MONTH:
        return _months_back(now, 1)
    if date_filter == DateFilter.YEAR:
        return _months_back(now, 12)
    return None


def _review_count_subquery():
    return (
        select(ExpertReview.ai_log_id, func.count(ExpertReview.id).label("review_count"))
        .group_by(ExpertReview.ai_log_id)
        .subquery()
    )


class RecordService:
    """Read access to observation records."""

    @staticmethod
    def base_query() -> Tuple[Select, ColumnElement]:
        """Records newest first, with review count and predicted species."""
        counts = _review_count_subquery()
        review_count = func.coalesce(counts.c.review_count, 0)
        stmt = (
            select(ObservationRecord, review_count.label("review_count"), Species)
            .outerjoin(counts, counts.c.ai_log_id == ObservationRecord.id)
            .outerjoin(Species, Species.butterfly_id == ObservationRecord.predicted_id)
            .order_by(ObservationRecord.created_at.desc())
        )
        return stmt, review_count

    @staticmethod
    async def _fetch_rows(db: AsyncSession, stmt: Select) -> List[RecordRow]:
        result = await db.execute(stmt)
        return [
            RecordRow(record=record, review_count=count, species=species)
            for record, count, species in result.all()
        ]

    @staticmethod
    async def get_record(db: AsyncSession, record_id: uuid.UUID) -> ObservationRecord:
        record = await db.get(ObservationRecord, record_id)
        if record is None:
            raise NotFoundException(
                f"Record not found: {record_id}", details={"record_id": str(record_id)}
            )
        return record

    @staticmethod
    async def list_records(
        db: AsyncSession,
        current_user: Optional[User] = None,
        view: RecordView = RecordView.ALL,
        search: Optional[str] = None,
        date_filter: DateFilter = DateFilter.ALL,
        status: RecordStatusFilter = RecordStatusFilter.ALL,
        now: Optional[datetime] = None,
    ) -> List[RecordRow]:
        stmt, review_count = RecordService.base_query()

        if RecordView(view) == RecordView.MINE and current_user is not None:
            stmt = stmt.where(ObservationRecord.user_id == current_user.id)

        term = (search or "").strip()
        if term:
            stmt = stmt.where(
                or_(
                    ObservationRecord.predicted_species_name.icontains(term, autoescape=True),
                    ObservationRecord.final_species_name.icontains(term, autoescape=True),
                )
            )

        cutoff = date_cutoff(date_filter, now)
        if cutoff is not None:
            stmt = stmt.where(ObservationRecord.created_at >= cutoff)

        status = RecordStatusFilter(status)
        finalized = and_(
            ObservationRecord.final_species_name.is_not(None),
            ObservationRecord.final_species_name != "",
        )
        if status == RecordStatusFilter.VERIFIED:
            stmt = stmt.where(finalized)
        elif status == RecordStatusFilter.UNVERIFIED:
            stmt = stmt.where(~finalized)
        elif status == RecordStatusFilter.REVIEWED:
            stmt = stmt.where(review_count > 0)
        elif status == RecordStatusFilter.UNREVIEWED:
            stmt = stmt.where(review_count == 0)

        return await RecordService._fetch_rows(db, stmt)

    @staticmethod
    async def review_queue(db: AsyncSession, reviewer: User) -> List[RecordRow]:
        """Records the reviewer has not reviewed yet, newest first."""
        stmt, _ = RecordService.base_query()
        already_reviewed = exists().where(
            ExpertReview.ai_log_id == ObservationRecord.id,
            ExpertReview.reviewer_id == reviewer.id,
        )
        return await RecordService._fetch_rows(db, stmt.where(~already_reviewed))

    @staticmethod
    async def list_for_uploader(db: AsyncSession, user_id: uuid.UUID) -> List[ObservationRecord]:
        stmt = (
            select(ObservationRecord)
            .where(ObservationRecord.user_id == user_id)
            .order_by(ObservationRecord.created_at.desc())
        )
        return list((await db.execute(stmt)).scalars().all())

    @staticmethod
    async def helpful_counts(
        db: AsyncSession, review_ids: Sequence[uuid.UUID]
    ) -> Dict[uuid.UUID, int]:
        if not review_ids:
            return {}
        stmt = (
            select(ReviewRating.review_id, func.count(ReviewRating.id))
            .where(ReviewRating.review_id.in_(review_ids), ReviewRating.is_helpful.is_(True))
            .group_by(ReviewRating.review_id)
        )
        return {review_id: count for review_id, count in (await db.execute(stmt)).all()}

    @staticmethod
    async def get_record_detail(db: AsyncSession, record_id: uuid.UUID) -> RecordDetail:
        record = await RecordService.get_record(db, record_id)

        predicted = None
        if record.predicted_id:
            predicted = await db.get(Species, record.predicted_id)

        stmt = (
            select(ExpertReview, User)
            .outerjoin(User, User.id == ExpertReview.reviewer_id)
            .where(ExpertReview.ai_log_id == record.id)
            .order_by(ExpertReview.created_at.desc())
        )
        rows = (await db.execute(stmt)).all()
        votes = await RecordService.helpful_counts(db, [review.id for review, _ in rows])

        return RecordDetail(
            record=record,
            predicted_species=predicted,
            reviews=[
                ReviewWithVotes(review=review, reviewer=reviewer, helpful_count=votes.get(review.id, 0))
                for review, reviewer in rows
            ],
        )


# Global singleton instance
record_service = RecordService()
