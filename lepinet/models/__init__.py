"""
SQLAlchemy models package.
Exports all database models for easy import.
"""
from lepinet.models.user import User, UserRole, VerificationStatus
from lepinet.models.observation import ObservationRecord
from lepinet.models.species import Species
from lepinet.models.expert_review import (
    ExpertReview,
    TrainingStatusEvent,
    ConfidenceLevel,
    TrainingStatus,
    NOT_A_BUTTERFLY,
)
from lepinet.models.review_feedback import ReviewComment, ReviewRating
from lepinet.models.notification import Notification, NotificationType

__all__ = [
    "User",
    "UserRole",
    "VerificationStatus",
    "ObservationRecord",
    "Species",
    "ExpertReview",
    "TrainingStatusEvent",
    "ConfidenceLevel",
    "TrainingStatus",
    "NOT_A_BUTTERFLY",
    "ReviewComment",
    "ReviewRating",
    "Notification",
    "NotificationType",
]
