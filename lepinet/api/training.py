"""
Training-candidate curation API endpoints (admin only).
"""
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from lepinet.api.deps import get_db, require_admin
from lepinet.core.middleware import get_request_id
from lepinet.core.exceptions import AppException, DBUnavailableException
from lepinet.core.logging import logger
from lepinet.models import TrainingStatus, User
from lepinet.schemas.training import (
    BulkTransitionRequest,
    CandidateListResponse,
    CandidateRecord,
    TrainingCandidate,
    TrainingEventOut,
    TrainingHistoryResponse,
    TransitionResponse,
    TriggerTrainingRequest,
    TriggerTrainingResponse,
)
from lepinet.services.curation import (
    AgreementFilter,
    Candidate,
    CandidateStatusFilter,
    training_curation_service,
)
from lepinet.services.training_trigger import training_trigger


router = APIRouter(prefix="/api/admin/training", tags=["training"])


def to_candidate(candidate: Candidate) -> TrainingCandidate:
    review = candidate.review
    return TrainingCandidate(
        id=review.id,
        ai_log_id=review.ai_log_id,
        identified_species_name=review.identified_species_name,
        agreed_with_ai=review.agreed_with_ai,
        training_status=review.training_status,
        confidence_level=review.confidence_level,
        created_at=review.created_at,
        ai_log=CandidateRecord.model_validate(candidate.record),
    )


async def _transition(
    db: AsyncSession,
    ids: List[uuid.UUID],
    target: TrainingStatus,
    admin: User,
) -> TransitionResponse:
    request_id = get_request_id()

    logger.info(
        "Processing training status change",
        extra={
            "request_id": request_id,
            "to_status": target.value,
            "count": len(ids),
            "admin_id": str(admin.id),
        },
    )

    try:
        updated = await training_curation_service.transition(db, ids, target, admin)
        return TransitionResponse(
            request_id=request_id,
            updated=len(updated),
            training_status=target,
            ids=updated,
        )

    except AppException:
        raise
    except SQLAlchemyError as e:
        logger.error(
            f"Failed to change training status: {str(e)}",
            extra={"request_id": request_id},
            exc_info=True,
        )
        raise DBUnavailableException(f"Database operation failed: {str(e)}")


@router.get("/candidates", response_model=CandidateListResponse)
async def list_candidates(
    status: CandidateStatusFilter = Query(CandidateStatusFilter.ALL),
    agreement: AgreementFilter = Query(AgreementFilter.ALL),
    species: Optional[str] = Query(None, description="Identified species name contains"),
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """
    Certain-confidence expert reviews that identify a butterfly, newest first.

    totalCandidates and statusCounts always describe the unfiltered set.
    """
    listing = await training_curation_service.list_candidates(
        db,
        training_status=status.as_status(),
        agreement=agreement,
        species_search=species,
    )
    return CandidateListResponse(
        request_id=get_request_id(),
        total_candidates=listing.total_candidates,
        status_counts=listing.status_counts,
        candidates=[to_candidate(c) for c in listing.candidates],
    )


@router.post("/approve", response_model=TransitionResponse)
async def approve_candidates(
    request: BulkTransitionRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """
    Move pending reviews to 'ready'. All-or-nothing.

    Raises:
        404: Some id is not an expert review
        409: Some review is not pending
        422: Empty id list
    """
    return await _transition(db, request.ids, TrainingStatus.READY, admin)


@router.post("/mark-trained", response_model=TransitionResponse)
async def mark_trained(
    request: BulkTransitionRequest,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Move ready reviews to 'trained' (terminal). All-or-nothing."""
    return await _transition(db, request.ids, TrainingStatus.TRAINED, admin)


@router.post("/{review_id}/ignore", response_model=TransitionResponse)
async def ignore_candidate(
    review_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    return await _transition(db, [review_id], TrainingStatus.IGNORED, admin)


@router.post("/{review_id}/restore", response_model=TransitionResponse)
async def restore_candidate(
    review_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Return an ignored review to 'pending'."""
    return await _transition(db, [review_id], TrainingStatus.PENDING, admin)


@router.get("/{review_id}/history", response_model=TrainingHistoryResponse)
async def training_history(
    review_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    events = await training_curation_service.history(db, review_id)
    return TrainingHistoryResponse(
        request_id=get_request_id(),
        review_id=review_id,
        events=[TrainingEventOut.model_validate(e) for e in events],
    )


@router.post("/trigger", response_model=TriggerTrainingResponse)
async def trigger_training(
    request: TriggerTrainingRequest,
    admin: User = Depends(require_admin),
):
    """
    Ping the external trainer.

    A completed HTTP call counts as sent, whatever the trainer answers; check
    the trainer's logs to confirm a job started.

    Raises:
        422: Empty secret
        502: Trainer unreachable
    """
    request_id = get_request_id()

    result = await training_trigger.trigger(request.secret, requested_by=str(admin.id))
    return TriggerTrainingResponse(
        request_id=request_id,
        sent=result.sent,
        upstream_status=result.status_code,
        message="Retrain signal sent. Check the trainer logs for progress.",
    )
