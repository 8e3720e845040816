"""
Pydantic schemas for training-candidate curation.
"""
import uuid
from typing import Optional, List, Dict
from datetime import datetime
from pydantic import Field

from lepinet.models import ConfidenceLevel, TrainingStatus
from lepinet.schemas.base import CamelModel


class CandidateRecord(CamelModel):
    id: uuid.UUID
    image_url: str
    predicted_id: Optional[str] = None
    final_species_name: Optional[str] = None


class TrainingCandidate(CamelModel):
    id: uuid.UUID
    ai_log_id: uuid.UUID
    identified_species_name: Optional[str] = None
    agreed_with_ai: bool
    training_status: TrainingStatus
    confidence_level: ConfidenceLevel
    created_at: datetime
    ai_log: CandidateRecord


class CandidateListResponse(CamelModel):
    request_id: str
    total_candidates: int = Field(..., description="Candidates before filtering")
    status_counts: Dict[str, int] = Field(..., description="Candidates per training status")
    candidates: List[TrainingCandidate]


class BulkTransitionRequest(CamelModel):
    ids: List[uuid.UUID] = Field(..., description="Expert review ids")


class TransitionResponse(CamelModel):
    request_id: str
    updated: int
    training_status: TrainingStatus
    ids: List[uuid.UUID]


class TrainingEventOut(CamelModel):
    id: uuid.UUID
    review_id: uuid.UUID
    from_status: TrainingStatus
    to_status: TrainingStatus
    sequence: int
    changed_by: Optional[uuid.UUID] = None
    created_at: datetime


class TrainingHistoryResponse(CamelModel):
    request_id: str
    review_id: uuid.UUID
    events: List[TrainingEventOut]


class TriggerTrainingRequest(CamelModel):
    secret: str = Field(..., min_length=1, description="Trainer secret")


class TriggerTrainingResponse(CamelModel):
    request_id: str
    sent: bool
    upstream_status: int
    message: str
