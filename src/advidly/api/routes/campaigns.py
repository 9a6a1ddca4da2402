"""Campaign management endpoints."""

from datetime import datetime
from decimal import Decimal

from fastapi import APIRouter, status
from pydantic import Field

from advidly.api.deps import CurrentSessionDep, ServicesDep, StorageDep, ensure_owned
from advidly.api.schemas import ApiModel, MessageResponse
from advidly.domain.enums import CampaignStatus
from advidly.domain.models import Campaign, NewCampaign
from advidly.domain.patches import CamelModel, CampaignPatch
from advidly.logging import get_logger

router = APIRouter(prefix="/campaigns", tags=["Campaigns"])
logger = get_logger(__name__)


class CreateCampaignRequest(CamelModel):
    """Request to create a campaign. The owner is the logged-in user."""

    name: str = Field(..., min_length=1, max_length=255)
    status: CampaignStatus = CampaignStatus.ACTIVE
    budget: Decimal = Field(..., ge=0)
    spent: Decimal = Field(default=Decimal("0"), ge=0)
    start_date: datetime
    end_date: datetime | None = None
    target_audience: str | None = None


class CampaignResponse(ApiModel):
    """Campaign response model."""

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


class CampaignSummaryResponse(CampaignResponse):
    """Campaign with its delivery figures, as shown on the dashboard."""

    views: int
    performance: int


@router.get(
    "",
    response_model=list[CampaignSummaryResponse],
    summary="List campaigns",
    description="List the caller's campaigns with views and click-through performance.",
)
async def list_campaigns(
    session: CurrentSessionDep, services: ServicesDep
) -> list[CampaignSummaryResponse]:
    """List campaigns owned by the logged-in user."""
    summaries = []
    for campaign in services.storage.get_campaigns_by_user_id(session.user_id):
        metrics = services.analytics.campaign_metrics(campaign)
        summaries.append(
            CampaignSummaryResponse(
                **CampaignResponse.model_validate(campaign).model_dump(),
                views=metrics.views,
                performance=metrics.performance,
            )
        )
    return summaries


@router.post(
    "",
    response_model=CampaignResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create campaign",
)
async def create_campaign(
    request: CreateCampaignRequest, session: CurrentSessionDep, storage: StorageDep
) -> Campaign:
    """Create a campaign owned by the logged-in user."""
    campaign = storage.create_campaign(
        NewCampaign(
            user_id=session.user_id,
            name=request.name,
            status=request.status,
            budget=request.budget,
            spent=request.spent,
            start_date=request.start_date,
            end_date=request.end_date,
            target_audience=request.target_audience,
        )
    )
    logger.info("campaign_created", campaign_id=campaign.id, user_id=session.user_id)
    return campaign


@router.get(
    "/{campaign_id}",
    response_model=CampaignResponse,
    summary="Get campaign",
)
async def get_campaign(
    campaign_id: int, session: CurrentSessionDep, storage: StorageDep
) -> Campaign:
    """Get one of the caller's campaigns."""
    return ensure_owned(storage.get_campaign(campaign_id), session, "campaign")


@router.patch(
    "/{campaign_id}",
    response_model=CampaignResponse,
    summary="Update campaign",
    description="Change any of name, status, budget, spent, dates or target audience.",
)
async def update_campaign(
    campaign_id: int,
    patch: CampaignPatch,
    session: CurrentSessionDep,
    storage: StorageDep,
) -> Campaign:
    """Update a campaign."""
    ensure_owned(storage.get_campaign(campaign_id), session, "campaign", "update")
    campaign = storage.update_campaign(campaign_id, patch)
    logger.info("campaign_updated", campaign_id=campaign_id, fields=sorted(patch.changes()))
    return campaign


@router.delete(
    "/{campaign_id}",
    response_model=MessageResponse,
    summary="Delete campaign",
    description="Delete a campaign. Ads that reference it are left untouched.",
)
async def delete_campaign(
    campaign_id: int, session: CurrentSessionDep, storage: StorageDep
) -> MessageResponse:
    """Delete a campaign."""
    ensure_owned(storage.get_campaign(campaign_id), session, "campaign", "delete")
    storage.delete_campaign(campaign_id)
    logger.info("campaign_deleted", campaign_id=campaign_id)
    return MessageResponse(message="Campaign deleted successfully")
