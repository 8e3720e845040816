"""
Pydantic schemas for the expert review workflow, comments and helpful votes.
"""
import uuid
from typing import Optional, List
from datetime import datetime
from pydantic import Field

from lepinet.models import ConfidenceLevel, TrainingStatus
from lepinet.services.verdicts import Verdict
from lepinet.schemas.base import CamelModel
from lepinet.schemas.record import RecordOut, RecordListItem
from lepinet.schemas.species import SpeciesOut
from lepinet.schemas.user import UserSummary


class ReviewSubmitRequest(CamelModel):
    """
    Request schema for an expert verdict.
    POST /api/reviews/{record_id}

    species_id is the catalog id of the correct species; it is required for
    CORRECT and ignored otherwise. confidence is ignored for UNSURE and
    NOT_BUTTERFLY, which force their own level.
    """

    verdict: Verdict = Field(..., description="AGREE, CORRECT, UNSURE or NOT_BUTTERFLY")
    species_id: Optional[str] = Field(None, description="Catalog id of the correct species")
    confidence: ConfidenceLevel = Field(ConfidenceLevel.CERTAIN, description="certain or uncertain")
    is_new_discovery: bool = Field(False, description="Flag as a potential new discovery")
    comments: Optional[str] = Field(None, max_length=5000, description="Scientific notes")


class ReviewOut(CamelModel):
    id: uuid.UUID
    ai_log_id: uuid.UUID
    reviewer_id: uuid.UUID
    agreed_with_ai: bool
    identified_species_name: Optional[str] = None
    confidence_level: ConfidenceLevel
    is_new_discovery: bool
    comments: Optional[str] = None
    training_status: TrainingStatus
    created_at: datetime


class ReviewSubmitResponse(CamelModel):
    request_id: str
    review: ReviewOut


class MyReviewItem(ReviewOut):
    record: Optional[RecordOut] = None


class MyReviewListResponse(CamelModel):
    request_id: str
    total: int
    reviews: List[MyReviewItem]


class ReviewQueueResponse(CamelModel):
    request_id: str
    total: int
    records: List[RecordListItem]


class WorkstationResponse(CamelModel):
    """Everything the review screen needs: the record, the AI's species and the catalog."""

    request_id: str
    record: RecordOut
    predicted_species: Optional[SpeciesOut] = None
    species_options: List[SpeciesOut]
    already_reviewed: bool = False


class CommentCreateRequest(CamelModel):
    content: str = Field(..., min_length=1, max_length=5000)
    parent_id: Optional[uuid.UUID] = Field(None, description="Comment being replied to")


class CommentOut(CamelModel):
    id: uuid.UUID
    review_id: uuid.UUID
    author_id: uuid.UUID
    parent_id: Optional[uuid.UUID] = None
    content: str
    created_at: datetime
    author: Optional[UserSummary] = None


class CommentResponse(CamelModel):
    request_id: str
    comment: CommentOut


class CommentListResponse(CamelModel):
    request_id: str
    total: int
    comments: List[CommentOut]


class HelpfulVoteResponse(CamelModel):
    request_id: str
    review_id: uuid.UUID
    helpful_count: int
