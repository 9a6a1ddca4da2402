"""Domain models - pure Python records held by the storage layer.

Each entity has a stored record (``User``, ``Campaign``, ...) and an insertable
subset (``NewUser``, ``NewCampaign``, ...) carrying everything except the
identifier and the fields the store fills in itself.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

from advidly.domain.enums import AdPlacement, AdStatus, CampaignStatus, UserType, VideoStatus


@dataclass
class NewUser:
    """Fields needed to create a user. ``password`` is already hashed."""

    email: str
    username: str
    password: str
    full_name: str
    user_type: UserType


@dataclass
class User:
    """A registered account on either side of the marketplace."""

    id: int
    email: str
    username: str
    password: str
    full_name: str
    user_type: UserType
    created_at: datetime


@dataclass
class NewCompanyProfile:
    user_id: int
    company_name: str
    industry: str | None = None
    website: str | None = None
    description: str | None = None


@dataclass
class CompanyProfile:
    """Advertiser details, one per company user."""

    id: int
    user_id: int
    company_name: str
    industry: str | None = None
    website: str | None = None
    description: str | None = None


@dataclass
class NewCreatorProfile:
    user_id: int
    bio: str | None = None
    niche: str | None = None
    youtube_channel: str | None = None


@dataclass
class CreatorProfile:
    """Creator details, one per individual user."""

    id: int
    user_id: int
    bio: str | None = None
    niche: str | None = None
    youtube_channel: str | None = None


@dataclass
class NewCampaign:
    user_id: int
    name: str
    status: CampaignStatus
    budget: Decimal
    start_date: datetime
    spent: Decimal = Decimal("0")
    end_date: datetime | None = None
    target_audience: str | None = None


@dataclass
class Campaign:
    """An advertising campaign owned by a company user."""

    id: int
    user_id: int
    name: str
    status: CampaignStatus
    budget: Decimal
    spent: Decimal
    start_date: datetime
    end_date: datetime | None
    target_audience: str | None
    created_at: datetime


@dataclass
class NewAd:
    user_id: int
    title: str
    file_path: str
    duration: int
    status: AdStatus = AdStatus.PENDING
    campaign_id: int | None = None
    description: str | None = None


@dataclass
class Ad:
    """An uploaded ad asset, optionally attached to a campaign."""

    id: int
    user_id: int
    campaign_id: int | None
    title: str
    description: str | None
    file_path: str
    duration: int
    status: AdStatus
    created_at: datetime


@dataclass
class NewVideo:
    user_id: int
    title: str
    raw_file_path: str
    status: VideoStatus = VideoStatus.PROCESSING
    description: str | None = None
    category: str | None = None
    ad_preferences: dict[str, Any] = field(default_factory=dict)
    ad_placement: AdPlacement | None = None


@dataclass
class Video:
    """A creator video and the outputs of its processing job."""

    id: int
    user_id: int
    title: str
    description: str | None
    category: str | None
    raw_file_path: str
    status: VideoStatus
    ad_preferences: dict[str, Any]
    ad_placement: AdPlacement | None
    created_at: datetime
    processed_file_path: str | None = None
    thumbnail_path: str | None = None
    duration: int | None = None
    views: int = 0

    @property
    def file_paths(self) -> list[str]:
        """Every file on disk that belongs to this video."""
        paths = [self.raw_file_path, self.processed_file_path, self.thumbnail_path]
        return [p for p in paths if p]


@dataclass
class NewVideoAd:
    video_id: int
    ad_id: int
    placement_time: int | None = None
    views: int = 0
    clicks: int = 0


@dataclass
class VideoAd:
    """An ad placed in a video, with its delivery counters."""

    id: int
    video_id: int
    ad_id: int
    placement_time: int | None
    views: int
    clicks: int
    created_at: datetime
