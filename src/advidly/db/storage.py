"""In-memory entity storage.

Every entity kind lives in its own ``{id: record}`` mapping with its own id
counter. Lookups by foreign key are linear scans over the mapping, returned in
insertion order. Nothing is persisted: all data is gone when the process exits.
"""

from collections.abc import Callable, Iterator
from dataclasses import asdict, replace
from datetime import UTC, datetime
from typing import Generic, TypeVar

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
    Patch,
    UserPatch,
    VideoAdPatch,
    VideoPatch,
)
from advidly.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class NotFoundError(Exception):
    """Raised when updating or deleting a record that does not exist."""

    def __init__(self, kind: str, record_id: int) -> None:
        super().__init__(f"{kind} with id {record_id} not found")
        self.kind = kind
        self.record_id = record_id


class DuplicateProfileError(Exception):
    """Raised when a user already has a profile of the requested kind."""

    pass


def _now() -> datetime:
    return datetime.now(UTC)


class _Table(Generic[T]):
    """One entity mapping plus its id counter."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._rows: dict[int, T] = {}
        self._next_id = 1

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._rows.values()))

    def __len__(self) -> int:
        return len(self._rows)

    def get(self, record_id: int) -> T | None:
        return self._rows.get(record_id)

    def find(self, predicate: Callable[[T], bool]) -> T | None:
        return next((row for row in self._rows.values() if predicate(row)), None)

    def filter(self, predicate: Callable[[T], bool]) -> list[T]:
        return [row for row in self._rows.values() if predicate(row)]

    def insert(self, build: Callable[[int], T]) -> T:
        record_id = self._next_id
        self._next_id += 1
        record = build(record_id)
        self._rows[record_id] = record
        return record

    def update(self, record_id: int, patch: Patch) -> T:
        current = self._rows.get(record_id)
        if current is None:
            raise NotFoundError(self.kind, record_id)
        updated = replace(current, **patch.changes())
        self._rows[record_id] = updated
        return updated

    def delete(self, record_id: int) -> None:
        if record_id not in self._rows:
            raise NotFoundError(self.kind, record_id)
        del self._rows[record_id]


class MemStorage:
    """Repository for all AdVidly entities.

    ``get_*`` returns ``None`` for unknown ids; ``update_*`` and ``delete_*``
    raise :class:`NotFoundError`. Deletes never cascade to dependent records.
    """

    def __init__(self) -> None:
        self.users: _Table[User] = _Table("User")
        self.company_profiles: _Table[CompanyProfile] = _Table("Company profile")
        self.creator_profiles: _Table[CreatorProfile] = _Table("Creator profile")
        self.campaigns: _Table[Campaign] = _Table("Campaign")
        self.ads: _Table[Ad] = _Table("Ad")
        self.videos: _Table[Video] = _Table("Video")
        self.video_ads: _Table[VideoAd] = _Table("VideoAd")

    # Users

    def get_user(self, user_id: int) -> User | None:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        wanted = username.lower()
        return self.users.find(lambda u: u.username.lower() == wanted)

    def get_user_by_email(self, email: str) -> User | None:
        wanted = email.lower()
        return self.users.find(lambda u: u.email.lower() == wanted)

    def create_user(self, new: NewUser) -> User:
        user = self.users.insert(lambda i: User(id=i, created_at=_now(), **asdict(new)))
        logger.debug("user_stored", user_id=user.id)
        return user

    def update_user(self, user_id: int, patch: UserPatch) -> User:
        return self.users.update(user_id, patch)

    def delete_user(self, user_id: int) -> None:
        self.users.delete(user_id)

    # Company profiles

    def get_company_profile(self, profile_id: int) -> CompanyProfile | None:
        return self.company_profiles.get(profile_id)

    def get_company_profile_by_user_id(self, user_id: int) -> CompanyProfile | None:
        return self.company_profiles.find(lambda p: p.user_id == user_id)

    def create_company_profile(self, new: NewCompanyProfile) -> CompanyProfile:
        if self.get_company_profile_by_user_id(new.user_id):
            raise DuplicateProfileError(f"User {new.user_id} already has a company profile")
        return self.company_profiles.insert(lambda i: CompanyProfile(id=i, **asdict(new)))

    def update_company_profile(
        self, profile_id: int, patch: CompanyProfilePatch
    ) -> CompanyProfile:
        return self.company_profiles.update(profile_id, patch)

    def delete_company_profile(self, profile_id: int) -> None:
        self.company_profiles.delete(profile_id)

    # Creator profiles

    def get_creator_profile(self, profile_id: int) -> CreatorProfile | None:
        return self.creator_profiles.get(profile_id)

    def get_creator_profile_by_user_id(self, user_id: int) -> CreatorProfile | None:
        return self.creator_profiles.find(lambda p: p.user_id == user_id)

    def create_creator_profile(self, new: NewCreatorProfile) -> CreatorProfile:
        if self.get_creator_profile_by_user_id(new.user_id):
            raise DuplicateProfileError(f"User {new.user_id} already has a creator profile")
        return self.creator_profiles.insert(lambda i: CreatorProfile(id=i, **asdict(new)))

    def update_creator_profile(
        self, profile_id: int, patch: CreatorProfilePatch
    ) -> CreatorProfile:
        return self.creator_profiles.update(profile_id, patch)

    def delete_creator_profile(self, profile_id: int) -> None:
        self.creator_profiles.delete(profile_id)

    # Campaigns

    def get_campaign(self, campaign_id: int) -> Campaign | None:
        return self.campaigns.get(campaign_id)

    def get_campaigns_by_user_id(self, user_id: int) -> list[Campaign]:
        return self.campaigns.filter(lambda c: c.user_id == user_id)

    def create_campaign(self, new: NewCampaign) -> Campaign:
        return self.campaigns.insert(lambda i: Campaign(id=i, created_at=_now(), **asdict(new)))

    def update_campaign(self, campaign_id: int, patch: CampaignPatch) -> Campaign:
        return self.campaigns.update(campaign_id, patch)

    def delete_campaign(self, campaign_id: int) -> None:
        self.campaigns.delete(campaign_id)

    # Ads

    def get_ad(self, ad_id: int) -> Ad | None:
        return self.ads.get(ad_id)

    def get_ads_by_user_id(self, user_id: int) -> list[Ad]:
        return self.ads.filter(lambda a: a.user_id == user_id)

    def get_ads_by_campaign_id(self, campaign_id: int) -> list[Ad]:
        return self.ads.filter(lambda a: a.campaign_id == campaign_id)

    def create_ad(self, new: NewAd) -> Ad:
        return self.ads.insert(lambda i: Ad(id=i, created_at=_now(), **asdict(new)))

    def update_ad(self, ad_id: int, patch: AdPatch) -> Ad:
        return self.ads.update(ad_id, patch)

    def delete_ad(self, ad_id: int) -> None:
        self.ads.delete(ad_id)

    # Videos

    def get_video(self, video_id: int) -> Video | None:
        return self.videos.get(video_id)

    def get_videos_by_user_id(self, user_id: int) -> list[Video]:
        return self.videos.filter(lambda v: v.user_id == user_id)

    def create_video(self, new: NewVideo) -> Video:
        # Processing outputs start empty whatever the caller passed
        return self.videos.insert(
            lambda i: Video(
                id=i,
                created_at=_now(),
                processed_file_path=None,
                thumbnail_path=None,
                duration=None,
                views=0,
                **asdict(new),
            )
        )

    def update_video(self, video_id: int, patch: VideoPatch) -> Video:
        return self.videos.update(video_id, patch)

    def delete_video(self, video_id: int) -> None:
        self.videos.delete(video_id)

    # Video ads

    def get_video_ad(self, video_ad_id: int) -> VideoAd | None:
        return self.video_ads.get(video_ad_id)

    def get_video_ads_by_video_id(self, video_id: int) -> list[VideoAd]:
        return self.video_ads.filter(lambda va: va.video_id == video_id)

    def get_video_ads_by_ad_id(self, ad_id: int) -> list[VideoAd]:
        return self.video_ads.filter(lambda va: va.ad_id == ad_id)

    def create_video_ad(self, new: NewVideoAd) -> VideoAd:
        return self.video_ads.insert(lambda i: VideoAd(id=i, created_at=_now(), **asdict(new)))

    def update_video_ad(self, video_ad_id: int, patch: VideoAdPatch) -> VideoAd:
        return self.video_ads.update(video_ad_id, patch)

    def delete_video_ad(self, video_ad_id: int) -> None:
        self.video_ads.delete(video_ad_id)
