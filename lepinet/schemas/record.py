"""
Pydantic schemas for observation records.
"""
import uuid
from typing import Optional, List
from datetime import datetime
from pydantic import Field

from lepinet.models import ConfidenceLevel, TrainingStatus
from lepinet.schemas.base import CamelModel
from lepinet.schemas.species import SpeciesOut, SpeciesSummary
from lepinet.schemas.user import UserSummary


class RecordOut(CamelModel):
    id: uuid.UUID
    user_id: Optional[uuid.UUID] = None
    image_url: str
    predicted_id: Optional[str] = None
    predicted_species_name: Optional[str] = None
    predicted_confidence: Optional[float] = None
    user_action: Optional[str] = None
    final_species_name: Optional[str] = None
    created_at: datetime


class RecordListItem(RecordOut):
    review_count: int = 0
    species_details: Optional[SpeciesSummary] = None


class RecordListResponse(CamelModel):
    request_id: str
    total: int
    records: List[RecordListItem]


class RecordReview(CamelModel):
    """An expert review as shown on a record page."""

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
    reviewer: Optional[UserSummary] = None
    helpful_count: int = 0


class RecordDetailResponse(CamelModel):
    request_id: str
    record: RecordOut
    predicted_species: Optional[SpeciesOut] = None
    reviews: List[RecordReview] = Field(default_factory=list)
