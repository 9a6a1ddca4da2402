"""Dashboard analytics aggregated from stored records.

Views and clicks come from the delivery counters on videos and ad placements.
Growth figures compare the recent window with the whole history: the share of
a total that comes from records created within the window.
"""

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from advidly.db.storage import MemStorage
from advidly.domain.enums import CampaignStatus, VideoStatus
from advidly.domain.models import Campaign, VideoAd

GROWTH_WINDOW = timedelta(days=30)
NEW_VIDEO_WINDOW = timedelta(days=7)
CENTS = Decimal("0.01")


def percentage(part: float | Decimal, whole: float | Decimal) -> int:
    """Whole-number percentage of ``part`` in ``whole``, 0 when ``whole`` is 0."""
    if not whole:
        return 0
    return int((Decimal(part) * 100 / Decimal(whole)).quantize(Decimal(1), ROUND_HALF_UP))


@dataclass
class CampaignMetrics:
    """Delivery figures for one campaign."""

    views: int
    clicks: int

    @property
    def performance(self) -> int:
        """Click-through rate as a percentage, capped at 100."""
        return min(percentage(self.clicks, self.views), 100)


@dataclass
class CompanySummary:
    active_campaigns: int
    campaign_growth: int
    total_views: int
    views_growth: int
    budget_used: int
    budget_percentage: int


@dataclass
class CreatorSummary:
    total_videos: int
    new_videos: int
    total_views: int
    views_growth: int
    total_earnings: str
    earnings_growth: int
    processing_videos: int
    processing_eta: str


class AnalyticsService:
    """Computes campaign metrics and dashboard summaries."""

    def __init__(
        self,
        storage: MemStorage,
        creator_cpm: Decimal = Decimal("2.00"),
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.storage = storage
        self.creator_cpm = creator_cpm
        self._clock = clock or (lambda: datetime.now(UTC))

    def _campaign_placements(self, campaign_id: int) -> list[VideoAd]:
        placements: list[VideoAd] = []
        for ad in self.storage.get_ads_by_campaign_id(campaign_id):
            placements.extend(self.storage.get_video_ads_by_ad_id(ad.id))
        return placements

    def campaign_metrics(self, campaign: Campaign) -> CampaignMetrics:
        """Sum the placement counters of every ad in a campaign."""
        placements = self._campaign_placements(campaign.id)
        return CampaignMetrics(
            views=sum(p.views for p in placements),
            clicks=sum(p.clicks for p in placements),
        )

    def company_summary(self, user_id: int) -> CompanySummary:
        """Dashboard figures for a company user."""
        since = self._clock() - GROWTH_WINDOW
        campaigns = self.storage.get_campaigns_by_user_id(user_id)

        placements: list[VideoAd] = []
        for campaign in campaigns:
            placements.extend(self._campaign_placements(campaign.id))
        total_views = sum(p.views for p in placements)
        recent_views = sum(p.views for p in placements if p.created_at >= since)

        spent = sum((c.spent for c in campaigns), Decimal(0))
        budget = sum((c.budget for c in campaigns), Decimal(0))

        return CompanySummary(
            active_campaigns=sum(1 for c in campaigns if c.status == CampaignStatus.ACTIVE),
            campaign_growth=percentage(
                sum(1 for c in campaigns if c.created_at >= since), len(campaigns)
            ),
            total_views=total_views,
            views_growth=percentage(recent_views, total_views),
            budget_used=int(spent),
            budget_percentage=percentage(spent, budget),
        )

    def _earnings(self, placements: Iterable[VideoAd]) -> Decimal:
        views = sum(p.views for p in placements)
        return (Decimal(views) / 1000 * self.creator_cpm).quantize(CENTS, ROUND_HALF_UP)

    def creator_summary(self, user_id: int, seconds_per_job: float = 0.0) -> CreatorSummary:
        """Dashboard figures for a creator.

        Args:
            user_id: The creator
            seconds_per_job: Expected processing time of one video, for the ETA
        """
        now = self._clock()
        since = now - GROWTH_WINDOW
        videos = self.storage.get_videos_by_user_id(user_id)
        recent_ids = {v.id for v in videos if v.created_at >= since}

        placements: list[VideoAd] = []
        for video in videos:
            placements.extend(self.storage.get_video_ads_by_video_id(video.id))
        earnings = self._earnings(placements)
        recent_earnings = self._earnings(p for p in placements if p.video_id in recent_ids)

        total_views = sum(v.views for v in videos)
        recent_views = sum(v.views for v in videos if v.id in recent_ids)

        processing = sum(1 for v in videos if v.status == VideoStatus.PROCESSING)
        if processing:
            minutes = max(1, math.ceil(processing * seconds_per_job / 60))
            eta = f"{minutes} minutes"
        else:
            eta = "N/A"

        return CreatorSummary(
            total_videos=len(videos),
            new_videos=sum(1 for v in videos if v.created_at >= now - NEW_VIDEO_WINDOW),
            total_views=total_views,
            views_growth=percentage(recent_views, total_views),
            total_earnings=f"{earnings:.2f}",
            earnings_growth=percentage(recent_earnings, earnings),
            processing_videos=processing,
            processing_eta=eta,
        )
