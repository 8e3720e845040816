"""
Observation record API endpoints.
"""
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lepinet.api.deps import get_db, get_current_user
from lepinet.core.middleware import get_request_id
from lepinet.models import User
from lepinet.schemas.record import (
    RecordDetailResponse,
    RecordListItem,
    RecordListResponse,
    RecordOut,
    RecordReview,
)
from lepinet.schemas.species import SpeciesOut, SpeciesSummary
from lepinet.schemas.user import UserSummary
from lepinet.services.records import (
    DateFilter,
    RecordRow,
    RecordStatusFilter,
    RecordView,
    record_service,
)


router = APIRouter(prefix="/api/records", tags=["records"])


def to_list_item(row: RecordRow) -> RecordListItem:
    item = RecordListItem.model_validate(row.record)
    item.review_count = row.review_count
    if row.species is not None:
        item.species_details = SpeciesSummary.model_validate(row.species)
    return item


@router.get("", response_model=RecordListResponse)
async def list_records(
    view: RecordView = Query(RecordView.ALL, description="all or mine"),
    search: Optional[str] = Query(None, description="Predicted or final species name"),
    date_filter: DateFilter = Query(DateFilter.ALL, alias="dateFilter"),
    status: RecordStatusFilter = Query(RecordStatusFilter.ALL),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Browse observation records, newest first.

    status:
    - verified / unverified: an expert-finalized species name is (not) set
    - reviewed / unreviewed: at least one / no expert review
    """
    rows = await record_service.list_records(
        db,
        current_user=current_user,
        view=view,
        search=search,
        date_filter=date_filter,
        status=status,
    )
    return RecordListResponse(
        request_id=get_request_id(),
        total=len(rows),
        records=[to_list_item(row) for row in rows],
    )


@router.get("/{record_id}", response_model=RecordDetailResponse)
async def get_record(
    record_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    A record with its predicted species and every expert review (newest first).

    Raises:
        404: Record not found
    """
    detail = await record_service.get_record_detail(db, record_id)

    reviews = []
    for entry in detail.reviews:
        review = RecordReview.model_validate(entry.review)
        review.helpful_count = entry.helpful_count
        if entry.reviewer is not None:
            review.reviewer = UserSummary.model_validate(entry.reviewer)
        reviews.append(review)

    return RecordDetailResponse(
        request_id=get_request_id(),
        record=RecordOut.model_validate(detail.record),
        predicted_species=(
            SpeciesOut.model_validate(detail.predicted_species)
            if detail.predicted_species is not None
            else None
        ),
        reviews=reviews,
    )
