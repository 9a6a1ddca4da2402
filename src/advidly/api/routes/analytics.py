"""Dashboard analytics endpoints."""

from fastapi import APIRouter, HTTPException, status

from advidly.api.deps import AppServices, CurrentSessionDep, ServicesDep
from advidly.api.schemas import ApiModel
from advidly.domain.enums import UserType
from advidly.services.sessions import Session

router = APIRouter(prefix="/analytics", tags=["Analytics"])


class CompanySummaryResponse(ApiModel):
    """Company dashboard figures."""

    active_campaigns: int
    campaign_growth: int
    total_views: int
    views_growth: int
    budget_used: int
    budget_percentage: int


class CreatorSummaryResponse(ApiModel):
    """Creator dashboard figures."""

    total_videos: int
    new_videos: int
    total_views: int
    views_growth: int
    total_earnings: str
    earnings_growth: int
    processing_videos: int
    processing_eta: str


def _require_user_type(
    services: AppServices, session: Session, user_type: UserType, label: str
) -> None:
    user = services.storage.get_user(session.user_id)
    if user is None or user.user_type != user_type:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Only {label} accounts can access this",
        )


@router.get(
    "/summary",
    response_model=CompanySummaryResponse,
    summary="Company summary",
    description="Campaign, view and budget figures for a company account.",
)
async def company_summary(
    session: CurrentSessionDep, services: ServicesDep
) -> CompanySummaryResponse:
    """Get the company dashboard summary."""
    _require_user_type(services, session, UserType.COMPANY, "company")
    summary = services.analytics.company_summary(session.user_id)
    return CompanySummaryResponse.model_validate(summary)


@router.get(
    "/creator/summary",
    response_model=CreatorSummaryResponse,
    summary="Creator summary",
    description="Video, view, earnings and processing figures for a creator account.",
)
async def creator_summary(
    session: CurrentSessionDep, services: ServicesDep
) -> CreatorSummaryResponse:
    """Get the creator dashboard summary."""
    _require_user_type(services, session, UserType.INDIVIDUAL, "creator")
    summary = services.analytics.creator_summary(
        session.user_id,
        seconds_per_job=services.processing.processor.expected_seconds,
    )
    return CreatorSummaryResponse.model_validate(summary)
