"""
Observation record model - an uploaded butterfly photo and the AI's prediction.
Rows are created by the mobile app; this service reads them and lets experts review them.
"""
from sqlalchemy import Column, String, Float, DateTime, ForeignKey, Index

from lepinet.db.database import Base
from lepinet.models.types import new_id, utcnow, uuid_column_type


class ObservationRecord(Base):
    """AI prediction log table (one row per uploaded image)."""

    __tablename__ = "ai_logs"

    id = Column(uuid_column_type(), primary_key=True, default=new_id)

    # Uploader (kept when the account is deleted, but unlinked)
    user_id = Column(
        uuid_column_type(), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    # Image
    image_url = Column(String(1000), nullable=False)

    # AI prediction
    predicted_id = Column(String(50), nullable=True)  # species.butterfly_id
    predicted_species_name = Column(String(255), nullable=True)
    predicted_confidence = Column(Float, nullable=True)  # 0.0 to 1.0
    user_action = Column(String(100), nullable=True)  # what the uploader did with the prediction

    # Expert-finalized identification
    final_species_name = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index("idx_ai_logs_user_id", "user_id"),
        Index("idx_ai_logs_predicted_id", "predicted_id"),
        Index("idx_ai_logs_created_at", "created_at"),
    )

    def __repr__(self):
        return f"<ObservationRecord(id={self.id}, predicted={self.predicted_species_name})>"
