"""
Expert review model - one reviewer's verdict on one observation record,
plus the audit trail of its training-status changes.
"""
import enum
from sqlalchemy import (
    Column,
    String,
    Text,
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    Index,
    UniqueConstraint,
)

from lepinet.db.database import Base
from lepinet.models.types import new_id, str_enum, utcnow, uuid_column_type

# identified_species_name written for a NOT_BUTTERFLY verdict
NOT_A_BUTTERFLY = "Not a Butterfly"


class ConfidenceLevel(str, enum.Enum):
    """How sure the reviewer is about the identification."""

    CERTAIN = "certain"
    UNCERTAIN = "uncertain"


class TrainingStatus(str, enum.Enum):
    """Where a certain-confidence review stands in the retraining pipeline."""

    PENDING = "pending"  # Waiting for admin curation
    READY = "ready"  # Approved for the next training run
    TRAINED = "trained"  # Already fed to the model
    IGNORED = "ignored"  # Excluded from training (restorable)


class ExpertReview(Base):
    """
    Expert reviews table.
    A reviewer may review a given record only once.
    """

    __tablename__ = "expert_reviews"

    id = Column(uuid_column_type(), primary_key=True, default=new_id)

    ai_log_id = Column(
        uuid_column_type(), ForeignKey("ai_logs.id", ondelete="CASCADE"), nullable=False
    )
    reviewer_id = Column(
        uuid_column_type(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    # Verdict
    agreed_with_ai = Column(Boolean, nullable=False, default=False)
    identified_species_name = Column(String(255), nullable=True)
    confidence_level = Column(
        str_enum(ConfidenceLevel, "confidence_level"),
        nullable=False,
        default=ConfidenceLevel.CERTAIN,
    )
    is_new_discovery = Column(Boolean, nullable=False, default=False)
    comments = Column(Text, nullable=True)

    # Training curation
    training_status = Column(
        str_enum(TrainingStatus, "training_status"),
        nullable=False,
        default=TrainingStatus.PENDING,
    )

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint("ai_log_id", "reviewer_id", name="uq_expert_review_reviewer"),
        Index("idx_expert_reviews_ai_log_id", "ai_log_id"),
        Index("idx_expert_reviews_reviewer_id", "reviewer_id"),
        Index("idx_expert_reviews_training_status", "training_status"),
        Index("idx_expert_reviews_created_at", "created_at"),
    )

    def __repr__(self):
        return (
            f"<ExpertReview(id={self.id}, ai_log_id={self.ai_log_id}, "
            f"identified={self.identified_species_name}, status={self.training_status.value})>"
        )


class TrainingStatusEvent(Base):
    """Audit history: one row per training-status transition."""

    __tablename__ = "training_status_events"

    id = Column(uuid_column_type(), primary_key=True, default=new_id)

    review_id = Column(
        uuid_column_type(), ForeignKey("expert_reviews.id", ondelete="CASCADE"), nullable=False
    )
    from_status = Column(str_enum(TrainingStatus, "training_status_from"), nullable=False)
    to_status = Column(str_enum(TrainingStatus, "training_status_to"), nullable=False)
    # 1-based position in the review's history
    sequence = Column(Integer, nullable=False)
    changed_by = Column(
        uuid_column_type(), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("review_id", "sequence", name="uq_training_status_event_sequence"),
    )

    def __repr__(self):
        return (
            f"<TrainingStatusEvent(review_id={self.review_id}, "
            f"{self.from_status.value}->{self.to_status.value})>"
        )
