"""Profile endpoints for the logged-in user."""

from typing import Any

from fastapi import APIRouter, Body, HTTPException, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from advidly.api.deps import CurrentSessionDep, StorageDep
from advidly.api.schemas import ApiModel
from advidly.db.storage import MemStorage
from advidly.domain.enums import UserType
from advidly.domain.models import CompanyProfile, CreatorProfile
from advidly.domain.patches import CompanyProfilePatch, CreatorProfilePatch
from advidly.logging import get_logger
from advidly.services.sessions import Session

router = APIRouter(prefix="/profile", tags=["Profiles"])
logger = get_logger(__name__)


class CompanyProfileResponse(ApiModel):
    id: int
    user_id: int
    company_name: str
    industry: str | None
    website: str | None
    description: str | None


class CreatorProfileResponse(ApiModel):
    id: int
    user_id: int
    bio: str | None
    niche: str | None
    youtube_channel: str | None


ProfileResponse = CompanyProfileResponse | CreatorProfileResponse


def _load_profile(storage: MemStorage, session: Session) -> CompanyProfile | CreatorProfile:
    if session.user_type == UserType.COMPANY:
        profile = storage.get_company_profile_by_user_id(session.user_id)
    else:
        profile = storage.get_creator_profile_by_user_id(session.user_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return profile


def _to_response(profile: CompanyProfile | CreatorProfile) -> ProfileResponse:
    if isinstance(profile, CompanyProfile):
        return CompanyProfileResponse.model_validate(profile)
    return CreatorProfileResponse.model_validate(profile)


@router.get(
    "",
    response_model=ProfileResponse,
    summary="Get profile",
    description="The company or creator profile of the logged-in user.",
)
async def get_profile(session: CurrentSessionDep, storage: StorageDep) -> ProfileResponse:
    """Get the caller's profile."""
    return _to_response(_load_profile(storage, session))


@router.patch(
    "",
    response_model=ProfileResponse,
    summary="Update profile",
    description="Accepts company fields for company accounts and creator fields for creators.",
)
async def update_profile(
    session: CurrentSessionDep,
    storage: StorageDep,
    body: dict[str, Any] = Body(...),
) -> ProfileResponse:
    """Update the caller's profile."""
    profile = _load_profile(storage, session)
    try:
        if isinstance(profile, CompanyProfile):
            patch = CompanyProfilePatch.model_validate(body)
            updated = storage.update_company_profile(profile.id, patch)
        else:
            patch = CreatorProfilePatch.model_validate(body)
            updated = storage.update_creator_profile(profile.id, patch)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))

    logger.info("profile_updated", user_id=session.user_id, fields=sorted(patch.changes()))
    return _to_response(updated)
