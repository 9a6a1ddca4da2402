"""Creator video endpoints, including ad placements within a video."""

import json
from datetime import datetime
from typing import Annotated, Any

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status
from pydantic import Field, field_validator
from pydantic_core import PydanticCustomError

from advidly.api.deps import CurrentSessionDep, ServicesDep, StorageDep, ensure_owned
from advidly.api.schemas import ApiModel, MessageResponse
from advidly.domain.enums import AdPlacement, AdStatus, UploadKind, VideoStatus
from advidly.domain.models import NewVideo, NewVideoAd, Video, VideoAd
from advidly.domain.patches import CamelModel, Patch, VideoPatch
from advidly.logging import get_logger
from advidly.services.storage import UploadRejectedError

router = APIRouter(prefix="/videos", tags=["Videos"])
logger = get_logger(__name__)


class VideoResponse(ApiModel):
    """Video response model."""

    id: int
    user_id: int
    title: str
    description: str | None
    category: str | None
    raw_file_path: str
    processed_file_path: str | None
    thumbnail_path: str | None
    duration: int | None
    status: VideoStatus
    ad_preferences: dict[str, Any]
    ad_placement: AdPlacement | None
    views: int
    created_at: datetime


class UpdateVideoRequest(Patch):
    """Fields a creator may edit. Processing outputs and counters are server-owned.

    The only status a creator may set is ``published``; the earlier steps
    belong to the processing job.
    """

    not_nullable = frozenset({"title", "status", "ad_preferences"})

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    category: str | None = None
    status: VideoStatus | None = None
    ad_preferences: dict[str, Any] | None = None
    ad_placement: AdPlacement | None = None

    @field_validator("status")
    @classmethod
    def only_publish(cls, v: VideoStatus | None) -> VideoStatus | None:
        if v is not None and v != VideoStatus.PUBLISHED:
            raise PydanticCustomError(
                "status_not_editable", "status can only be set to published"
            )
        return v


class DownloadResponse(ApiModel):
    message: str
    url: str


class CreatePlacementRequest(CamelModel):
    """Request to place an approved ad in a video."""

    ad_id: int
    placement_time: int | None = Field(None, ge=0)


class PlacementResponse(ApiModel):
    id: int
    video_id: int
    ad_id: int
    placement_time: int | None
    views: int
    clicks: int
    created_at: datetime


def _parse_placement(raw: str | None) -> AdPlacement | None:
    if raw is None or not raw.strip():
        return None
    try:
        return AdPlacement(raw)
    except ValueError:
        allowed = ", ".join(p.value for p in AdPlacement)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"adPlacement must be one of: {allowed}",
        )


def _parse_preferences(raw: str | None) -> dict[str, Any]:
    if raw is None or not raw.strip():
        return {}
    try:
        preferences = json.loads(raw)
    except json.JSONDecodeError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="adPreferences must be valid JSON",
        )
    if not isinstance(preferences, dict):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="adPreferences must be a JSON object",
        )
    return preferences


@router.get(
    "",
    response_model=list[VideoResponse],
    summary="List videos",
)
async def list_videos(session: CurrentSessionDep, storage: StorageDep) -> list[Video]:
    """List videos uploaded by the logged-in user."""
    return storage.get_videos_by_user_id(session.user_id)


@router.post(
    "/upload",
    response_model=VideoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload video",
    description=(
        "Upload a video (multipart). The record is created in processing status "
        "and becomes ready once the processing job finishes."
    ),
)
async def upload_video(
    session: CurrentSessionDep,
    services: ServicesDep,
    title: Annotated[str, Form(min_length=1, max_length=255)],
    file: Annotated[UploadFile | None, File()] = None,
    description: Annotated[str | None, Form()] = None,
    category: Annotated[str | None, Form()] = None,
    ad_placement: Annotated[str | None, Form(alias="adPlacement")] = None,
    ad_preferences: Annotated[str | None, Form(alias="adPreferences")] = None,
) -> Video:
    """Upload a new video and queue it for processing."""
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    placement = _parse_placement(ad_placement)
    preferences = _parse_preferences(ad_preferences)
    try:
        stored = await services.uploads.save(
            file, UploadKind.VIDEO, services.settings.video_max_upload_bytes
        )
    except UploadRejectedError as e:
        logger.info("video_upload_rejected", reason=e.message, content_type=file.content_type)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    video = services.storage.create_video(
        NewVideo(
            user_id=session.user_id,
            title=title,
            description=description,
            category=category,
            raw_file_path=str(stored.file_path),
            status=VideoStatus.PROCESSING,
            ad_placement=placement,
            ad_preferences=preferences,
        )
    )
    services.processing.enqueue(video)

    logger.info(
        "video_uploaded",
        video_id=video.id,
        user_id=session.user_id,
        size=stored.file_size_bytes,
    )
    return video


@router.get(
    "/{video_id}",
    response_model=VideoResponse,
    summary="Get video",
)
async def get_video(video_id: int, session: CurrentSessionDep, storage: StorageDep) -> Video:
    """Get one of the caller's videos."""
    return ensure_owned(storage.get_video(video_id), session, "video")


@router.get(
    "/{video_id}/download",
    response_model=DownloadResponse,
    summary="Download video",
    description="Return the location of a processed video. Fails until processing is done.",
)
async def download_video(
    video_id: int, session: CurrentSessionDep, storage: StorageDep
) -> DownloadResponse:
    """Get the download location of a ready video."""
    video = ensure_owned(storage.get_video(video_id), session, "video", "download")
    if not video.status.is_downloadable:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Video is not ready for download",
        )
    return DownloadResponse(
        message="Download started",
        url=video.processed_file_path or video.raw_file_path,
    )


@router.patch(
    "/{video_id}",
    response_model=VideoResponse,
    summary="Update video",
)
async def update_video(
    video_id: int,
    request: UpdateVideoRequest,
    session: CurrentSessionDep,
    storage: StorageDep,
) -> Video:
    """Update a video's metadata, status or ad preferences."""
    current = ensure_owned(storage.get_video(video_id), session, "video", "update")
    if request.status is not None and not current.status.is_downloadable:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only ready videos can be published",
        )
    video = storage.update_video(video_id, VideoPatch(**request.changes()))
    logger.info("video_updated", video_id=video_id, fields=sorted(request.changes()))
    return video


@router.delete(
    "/{video_id}",
    response_model=MessageResponse,
    summary="Delete video",
    description=(
        "Delete a video, cancel its processing job if still running and remove "
        "its files. Files already gone are ignored."
    ),
)
async def delete_video(
    video_id: int, session: CurrentSessionDep, services: ServicesDep
) -> MessageResponse:
    """Delete a video."""
    video = ensure_owned(services.storage.get_video(video_id), session, "video", "delete")
    services.processing.cancel(video_id)
    for path in video.file_paths:
        services.uploads.delete_file(path)
    services.storage.delete_video(video_id)
    logger.info("video_deleted", video_id=video_id)
    return MessageResponse(message="Video deleted successfully")


@router.get(
    "/{video_id}/ads",
    response_model=list[PlacementResponse],
    summary="List ad placements",
)
async def list_placements(
    video_id: int, session: CurrentSessionDep, storage: StorageDep
) -> list[VideoAd]:
    """List the ads placed in one of the caller's videos."""
    ensure_owned(storage.get_video(video_id), session, "video")
    return storage.get_video_ads_by_video_id(video_id)


@router.post(
    "/{video_id}/ads",
    response_model=PlacementResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Place an ad",
    description="Place an approved ad in one of the caller's videos.",
)
async def create_placement(
    video_id: int,
    request: CreatePlacementRequest,
    session: CurrentSessionDep,
    storage: StorageDep,
) -> VideoAd:
    """Attach an ad to a video."""
    ensure_owned(storage.get_video(video_id), session, "video", "update")
    ad = storage.get_ad(request.ad_id)
    if ad is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ad not found")
    if ad.status != AdStatus.APPROVED:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only approved ads can be placed",
        )

    placement = storage.create_video_ad(
        NewVideoAd(video_id=video_id, ad_id=ad.id, placement_time=request.placement_time)
    )
    logger.info("ad_placed", video_id=video_id, ad_id=ad.id, placement_id=placement.id)
    return placement


@router.delete(
    "/{video_id}/ads/{placement_id}",
    response_model=MessageResponse,
    summary="Remove an ad placement",
)
async def delete_placement(
    video_id: int, placement_id: int, session: CurrentSessionDep, storage: StorageDep
) -> MessageResponse:
    """Remove an ad from a video."""
    ensure_owned(storage.get_video(video_id), session, "video", "update")
    placement = storage.get_video_ad(placement_id)
    if placement is None or placement.video_id != video_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Placement not found")
    storage.delete_video_ad(placement_id)
    logger.info("ad_placement_removed", video_id=video_id, placement_id=placement_id)
    return MessageResponse(message="Placement removed successfully")
