"""Ad upload and management endpoints."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status

from advidly.api.deps import CurrentSessionDep, ServicesDep, StorageDep, ensure_owned
from advidly.api.schemas import ApiModel, MessageResponse
from advidly.db.storage import MemStorage
from advidly.domain.enums import AdStatus, UploadKind
from advidly.domain.models import Ad, NewAd
from advidly.domain.patches import AdPatch
from advidly.logging import get_logger
from advidly.services.sessions import Session
from advidly.services.storage import UploadRejectedError

router = APIRouter(prefix="/ads", tags=["Ads"])
logger = get_logger(__name__)


class AdResponse(ApiModel):
    """Ad response model."""

    id: int
    user_id: int
    campaign_id: int | None
    title: str
    description: str | None
    file_path: str
    duration: int
    status: AdStatus
    created_at: datetime


def _parse_campaign_id(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="campaignId must be an integer",
        )


def _check_campaign(storage: MemStorage, session: Session, campaign_id: int | None) -> None:
    """An ad may only be attached to one of its owner's campaigns."""
    if campaign_id is None:
        return
    campaign = storage.get_campaign(campaign_id)
    if campaign is None or campaign.user_id != session.user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Campaign not found",
        )


@router.get(
    "",
    response_model=list[AdResponse],
    summary="List ads",
)
async def list_ads(session: CurrentSessionDep, storage: StorageDep) -> list[Ad]:
    """List ads uploaded by the logged-in user."""
    return storage.get_ads_by_user_id(session.user_id)


@router.post(
    "/upload",
    response_model=AdResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload ad",
    description="Upload an ad video (multipart) and create its record in pending status.",
)
async def upload_ad(
    session: CurrentSessionDep,
    services: ServicesDep,
    title: Annotated[str, Form(min_length=1, max_length=255)],
    file: Annotated[UploadFile | None, File()] = None,
    description: Annotated[str | None, Form()] = None,
    campaign_id: Annotated[str | None, Form(alias="campaignId")] = None,
) -> Ad:
    """Upload a new ad."""
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    parsed_campaign_id = _parse_campaign_id(campaign_id)
    try:
        services.uploads.check_type(file.content_type)
        _check_campaign(services.storage, session, parsed_campaign_id)
        stored = await services.uploads.save(
            file, UploadKind.AD, services.settings.ad_max_upload_bytes
        )
    except UploadRejectedError as e:
        logger.info("ad_upload_rejected", reason=e.message, content_type=file.content_type)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    ad = services.storage.create_ad(
        NewAd(
            user_id=session.user_id,
            campaign_id=parsed_campaign_id,
            title=title,
            description=description,
            file_path=str(stored.file_path),
            duration=services.settings.placeholder_ad_duration_seconds,
            status=AdStatus.PENDING,
        )
    )
    logger.info("ad_uploaded", ad_id=ad.id, user_id=session.user_id, size=stored.file_size_bytes)
    return ad


@router.get(
    "/{ad_id}",
    response_model=AdResponse,
    summary="Get ad",
)
async def get_ad(ad_id: int, session: CurrentSessionDep, storage: StorageDep) -> Ad:
    """Get one of the caller's ads."""
    return ensure_owned(storage.get_ad(ad_id), session, "ad")


@router.patch(
    "/{ad_id}",
    response_model=AdResponse,
    summary="Update ad",
    description=(
        "Partially update an ad. Approval is self-serve: the owning company sets "
        "the status, and only approved ads can be placed in videos."
    ),
)
async def update_ad(
    ad_id: int, patch: AdPatch, session: CurrentSessionDep, storage: StorageDep
) -> Ad:
    """Update an ad's metadata, campaign or status."""
    ensure_owned(storage.get_ad(ad_id), session, "ad", "update")
    if "campaign_id" in patch.model_fields_set:
        _check_campaign(storage, session, patch.campaign_id)
    ad = storage.update_ad(ad_id, patch)
    logger.info("ad_updated", ad_id=ad_id, fields=sorted(patch.changes()))
    return ad


@router.delete(
    "/{ad_id}",
    response_model=MessageResponse,
    summary="Delete ad",
    description="Delete an ad and its uploaded file. A file already gone is ignored.",
)
async def delete_ad(
    ad_id: int, session: CurrentSessionDep, services: ServicesDep
) -> MessageResponse:
    """Delete an ad."""
    ad = ensure_owned(services.storage.get_ad(ad_id), session, "ad", "delete")
    services.uploads.delete_file(ad.file_path)
    services.storage.delete_ad(ad_id)
    logger.info("ad_deleted", ad_id=ad_id)
    return MessageResponse(message="Ad deleted successfully")
