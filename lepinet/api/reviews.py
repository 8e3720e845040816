"""
Expert review workflow API endpoints: queue, workstation, verdicts,
comments and helpful votes.
"""
import uuid
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from lepinet.api.deps import get_db, get_current_user, require_verified_expert
from lepinet.api.records import to_list_item
from lepinet.core.middleware import get_request_id
from lepinet.core.exceptions import AppException, DBUnavailableException
from lepinet.core.logging import logger
from lepinet.models import User
from lepinet.schemas.record import RecordOut
from lepinet.schemas.review import (
    CommentCreateRequest,
    CommentListResponse,
    CommentOut,
    CommentResponse,
    HelpfulVoteResponse,
    MyReviewItem,
    MyReviewListResponse,
    ReviewOut,
    ReviewQueueResponse,
    ReviewSubmitRequest,
    ReviewSubmitResponse,
    WorkstationResponse,
)
from lepinet.schemas.species import SpeciesOut
from lepinet.schemas.user import UserSummary
from lepinet.services.records import record_service
from lepinet.services.reviews import review_service


router = APIRouter(prefix="/api/reviews", tags=["reviews"])


def to_my_review_item(review, record) -> MyReviewItem:
    item = MyReviewItem(**ReviewOut.model_validate(review).model_dump())
    if record is not None:
        item.record = RecordOut.model_validate(record)
    return item


def to_comment_out(comment, author) -> CommentOut:
    out = CommentOut.model_validate(comment)
    if author is not None:
        out.author = UserSummary.model_validate(author)
    return out


@router.get("/queue", response_model=ReviewQueueResponse)
async def review_queue(
    db: AsyncSession = Depends(get_db),
    expert: User = Depends(require_verified_expert),
):
    """Records the calling expert has not reviewed yet, newest first."""
    rows = await record_service.review_queue(db, expert)
    return ReviewQueueResponse(
        request_id=get_request_id(),
        total=len(rows),
        records=[to_list_item(row) for row in rows],
    )


@router.get("/mine", response_model=MyReviewListResponse)
async def list_my_reviews(
    db: AsyncSession = Depends(get_db),
    expert: User = Depends(require_verified_expert),
):
    rows = await review_service.list_by_reviewer(db, expert.id)
    return MyReviewListResponse(
        request_id=get_request_id(),
        total=len(rows),
        reviews=[to_my_review_item(review, record) for review, record in rows],
    )


@router.get("/workstation/{record_id}", response_model=WorkstationResponse)
async def workstation(
    record_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    expert: User = Depends(require_verified_expert),
):
    """
    Everything the review screen needs for one record.

    Raises:
        403: Caller is not a verified expert
        404: Record not found
    """
    station = await review_service.workstation(db, expert, record_id)
    return WorkstationResponse(
        request_id=get_request_id(),
        record=RecordOut.model_validate(station.record),
        predicted_species=(
            SpeciesOut.model_validate(station.predicted_species)
            if station.predicted_species is not None
            else None
        ),
        species_options=[SpeciesOut.model_validate(s) for s in station.species_options],
        already_reviewed=station.already_reviewed,
    )


@router.post("/{record_id}", response_model=ReviewSubmitResponse, status_code=201)
async def submit_review(
    record_id: uuid.UUID,
    request: ReviewSubmitRequest,
    db: AsyncSession = Depends(get_db),
    expert: User = Depends(require_verified_expert),
):
    """
    Submit a verdict on an AI prediction.

    - AGREE: the AI's species, with the chosen confidence
    - CORRECT: the catalog species given by speciesId, with the chosen confidence
    - UNSURE: the AI's species, always 'uncertain'
    - NOT_BUTTERFLY: "Not a Butterfly", always 'certain'

    Raises:
        403: Caller is not a verified expert
        404: Record not found
        409: Caller already reviewed this record
        422: CORRECT without a catalog species
        503: Database unavailable
    """
    request_id = get_request_id()

    logger.info(
        "Processing review submission",
        extra={
            "request_id": request_id,
            "record_id": str(record_id),
            "reviewer_id": str(expert.id),
            "verdict": request.verdict.value,
        },
    )

    try:
        review = await review_service.submit_review(
            db,
            expert,
            record_id,
            verdict=request.verdict,
            species_id=request.species_id,
            confidence=request.confidence,
            is_new_discovery=request.is_new_discovery,
            comments=request.comments,
        )
        return ReviewSubmitResponse(request_id=request_id, review=ReviewOut.model_validate(review))

    except AppException:
        raise
    except SQLAlchemyError as e:
        logger.error(
            f"Failed to submit review: {str(e)}",
            extra={"request_id": request_id},
            exc_info=True,
        )
        raise DBUnavailableException(f"Database operation failed: {str(e)}")


@router.get("/{review_id}/comments", response_model=CommentListResponse)
async def list_comments(
    review_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rows = await review_service.list_comments(db, review_id)
    return CommentListResponse(
        request_id=get_request_id(),
        total=len(rows),
        comments=[to_comment_out(comment, author) for comment, author in rows],
    )


@router.post("/{review_id}/comments", response_model=CommentResponse, status_code=201)
async def add_comment(
    review_id: uuid.UUID,
    request: CommentCreateRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Comment on a review, or reply to another comment on the same review.

    Raises:
        404: Review not found
        422: Empty comment, or parent comment from another review
    """
    comment = await review_service.add_comment(
        db, current_user, review_id, request.content, parent_id=request.parent_id
    )
    return CommentResponse(
        request_id=get_request_id(),
        comment=to_comment_out(comment, current_user),
    )


@router.get("/{review_id}/helpful", response_model=HelpfulVoteResponse)
async def helpful_count(
    review_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    await review_service.get_review(db, review_id)
    count = await review_service.helpful_count(db, review_id)
    return HelpfulVoteResponse(request_id=get_request_id(), review_id=review_id, helpful_count=count)


@router.post("/{review_id}/helpful", response_model=HelpfulVoteResponse)
async def vote_helpful(
    review_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Mark a review as helpful. One vote per user per review.

    Raises:
        404: Review not found
        409: Caller already voted for this review
    """
    request_id = get_request_id()

    logger.info(
        "Processing helpful vote",
        extra={"request_id": request_id, "review_id": str(review_id), "user_id": str(current_user.id)},
    )

    count = await review_service.vote_helpful(db, current_user, review_id)
    return HelpfulVoteResponse(request_id=request_id, review_id=review_id, helpful_count=count)
