"""Application services."""

from advidly.services.analytics import AnalyticsService, CampaignMetrics
from advidly.services.auth import (
    AuthService,
    DuplicateUserError,
    InvalidCredentialsError,
    Registration,
)
from advidly.services.processing import ProcessingQueue
from advidly.services.sessions import Session, SessionStore
from advidly.services.storage import StoredUpload, UploadRejectedError, UploadStorage

__all__ = [
    "AnalyticsService",
    "AuthService",
    "CampaignMetrics",
    "DuplicateUserError",
    "InvalidCredentialsError",
    "ProcessingQueue",
    "Registration",
    "Session",
    "SessionStore",
    "StoredUpload",
    "UploadRejectedError",
    "UploadStorage",
]
