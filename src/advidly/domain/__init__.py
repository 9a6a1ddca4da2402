"""Domain models and enumerations."""

from advidly.domain.enums import (
    AdPlacement,
    AdStatus,
    CampaignStatus,
    UploadKind,
    UserType,
    VideoStatus,
)
from advidly.domain.models import (
    Ad,
    Campaign,
    CompanyProfile,
    CreatorProfile,
    NewAd,
    NewCampaign,
    NewCompanyProfile,
    NewCreatorProfile,
    NewUser,
    NewVideo,
    NewVideoAd,
    User,
    Video,
    VideoAd,
)
from advidly.domain.patches import (
    AdPatch,
    CampaignPatch,
    CompanyProfilePatch,
    CreatorProfilePatch,
    UserPatch,
    VideoAdPatch,
    VideoPatch,
)

__all__ = [
    "Ad",
    "AdPatch",
    "AdPlacement",
    "AdStatus",
    "Campaign",
    "CampaignPatch",
    "CampaignStatus",
    "CompanyProfile",
    "CompanyProfilePatch",
    "CreatorProfile",
    "CreatorProfilePatch",
    "NewAd",
    "NewCampaign",
    "NewCompanyProfile",
    "NewCreatorProfile",
    "NewUser",
    "NewVideo",
    "NewVideoAd",
    "UploadKind",
    "User",
    "UserPatch",
    "UserType",
    "Video",
    "VideoAd",
    "VideoAdPatch",
    "VideoPatch",
    "VideoStatus",
]
