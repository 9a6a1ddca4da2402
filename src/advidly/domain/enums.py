"""Domain enumerations."""

from enum import StrEnum


class UserType(StrEnum):
    """Which side of the marketplace an account is on."""

    COMPANY = "company"
    INDIVIDUAL = "individual"


class CampaignStatus(StrEnum):
    """Lifecycle of an advertising campaign."""

    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class AdStatus(StrEnum):
    """Review status of an uploaded ad."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class VideoStatus(StrEnum):
    """Status of a creator video in the processing pipeline."""

    UPLOADED = "uploaded"
    PROCESSING = "processing"
    READY = "ready"
    PUBLISHED = "published"

    @property
    def is_downloadable(self) -> bool:
        """Whether processing has finished for this status."""
        return self in (VideoStatus.READY, VideoStatus.PUBLISHED)


class AdPlacement(StrEnum):
    """Where in a video an ad runs."""

    PRE_ROLL = "pre-roll"
    MID_ROLL = "mid-roll"
    POST_ROLL = "post-roll"


class UploadKind(StrEnum):
    """Upload categories, each stored in its own directory."""

    AD = "ads"
    VIDEO = "videos"
