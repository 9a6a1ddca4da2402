"""Partial-update structs, one per entity.

A patch lists only the fields that may change after creation. Identifiers,
owners and creation timestamps are deliberately absent, so they can never be
overwritten by a merge. Only fields explicitly set on a patch are applied.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from advidly.domain.enums import AdPlacement, AdStatus, CampaignStatus, VideoStatus


class CamelModel(BaseModel):
    """Base model speaking camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Patch(CamelModel):
    """Base class for partial updates."""

    model_config = ConfigDict(extra="forbid")

    # Fields that may be omitted but never explicitly cleared
    not_nullable: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_cleared_required_fields(self) -> "Patch":
        for name in self.model_fields_set & self.not_nullable:
            if getattr(self, name) is None:
                raise PydanticCustomError(
                    "not_nullable", "{field} cannot be null", {"field": to_camel(name)}
                )
        return self

    def changes(self) -> dict[str, Any]:
        """Field values explicitly set on this patch, keyed by attribute name."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class UserPatch(Patch):
    """Mutable user fields. ``user_type`` is fixed at registration."""

    not_nullable = frozenset({"email", "username", "password", "full_name"})

    email: str | None = None
    username: str | None = Field(None, min_length=1, max_length=64)
    password: str | None = None
    full_name: str | None = Field(None, min_length=1, max_length=255)


class CompanyProfilePatch(Patch):
    not_nullable = frozenset({"company_name"})

    company_name: str | None = Field(None, min_length=1, max_length=255)
    industry: str | None = None
    website: str | None = None
    description: str | None = None


class CreatorProfilePatch(Patch):
    bio: str | None = None
    niche: str | None = None
    youtube_channel: str | None = None


class CampaignPatch(Patch):
    not_nullable = frozenset({"name", "status", "budget", "spent", "start_date"})

    name: str | None = Field(None, min_length=1, max_length=255)
    status: CampaignStatus | None = None
    budget: Decimal | None = Field(None, ge=0)
    spent: Decimal | None = Field(None, ge=0)
    start_date: datetime | None = None
    end_date: datetime | None = None
    target_audience: str | None = None


class AdPatch(Patch):
    """Mutable ad fields.

    There is no reviewer role: the owning company moves its own ad between
    ``pending``, ``approved`` and ``rejected``, and only approved ads can be
    placed in videos.
    """

    not_nullable = frozenset({"title", "duration", "status"})

    campaign_id: int | None = None
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    duration: int | None = Field(None, ge=0)
    status: AdStatus | None = None


class VideoPatch(Patch):
    """Mutable video fields, including the outputs of processing."""

    not_nullable = frozenset({"title", "status", "ad_preferences", "views"})

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    category: str | None = None
    status: VideoStatus | None = None
    ad_preferences: dict[str, Any] | None = None
    ad_placement: AdPlacement | None = None
    processed_file_path: str | None = None
    thumbnail_path: str | None = None
    duration: int | None = Field(None, ge=0)
    views: int | None = Field(None, ge=0)


class VideoAdPatch(Patch):
    not_nullable = frozenset({"views", "clicks"})

    placement_time: int | None = Field(None, ge=0)
    views: int | None = Field(None, ge=0)
    clicks: int | None = Field(None, ge=0)
