"""
Services package.
Business logic behind the API routers.
"""
from lepinet.services.users import user_service, UserService
from lepinet.services.species import species_service, SpeciesService
from lepinet.services.records import record_service, RecordService
from lepinet.services.reviews import review_service, ReviewService
from lepinet.services.curation import training_curation_service, TrainingCurationService
from lepinet.services.notifications import notification_service, NotificationService
from lepinet.services.admin import admin_service, AdminService
from lepinet.services.training_trigger import training_trigger, TrainingTriggerClient
from lepinet.services.watermark import watermark_service, WatermarkService

__all__ = [
    "user_service",
    "UserService",
    "species_service",
    "SpeciesService",
    "record_service",
    "RecordService",
    "review_service",
    "ReviewService",
    "training_curation_service",
    "TrainingCurationService",
    "notification_service",
    "NotificationService",
    "admin_service",
    "AdminService",
    "training_trigger",
    "TrainingTriggerClient",
    "watermark_service",
    "WatermarkService",
]
