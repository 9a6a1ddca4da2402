"""Tests for domain models, enums and patches."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from advidly.domain.enums import AdPlacement, VideoStatus
from advidly.domain.models import NewVideo
from advidly.domain.patches import AdPatch, CampaignPatch, VideoPatch


def test_new_video_defaults() -> None:
    """Test a NewVideo starts processing with empty ad preferences."""
    new = NewVideo(user_id=1, title="Clip", raw_file_path="uploads/videos/a.mp4")

    assert new.status == VideoStatus.PROCESSING
    assert new.ad_preferences == {}
    assert new.ad_placement is None


def test_video_status_downloadable() -> None:
    """Only ready and published videos can be downloaded."""
    assert VideoStatus.READY.is_downloadable
    assert VideoStatus.PUBLISHED.is_downloadable
    assert not VideoStatus.PROCESSING.is_downloadable
    assert not VideoStatus.UPLOADED.is_downloadable


def test_ad_placement_values() -> None:
    """Test placement values use their wire spelling."""
    assert AdPlacement("pre-roll") == AdPlacement.PRE_ROLL
    assert AdPlacement.MID_ROLL.value == "mid-roll"


def test_patch_changes_only_set_fields() -> None:
    """Test a patch reports only the fields the caller provided."""
    patch = CampaignPatch.model_validate({"name": "Summer", "targetAudience": None})

    assert patch.changes() == {"name": "Summer", "target_audience": None}


def test_patch_accepts_field_names() -> None:
    """Test patches can be built in Python with attribute names."""
    patch = VideoPatch(status=VideoStatus.READY, duration=120)

    assert patch.changes() == {"status": VideoStatus.READY, "duration": 120}


def test_patch_rejects_unknown_fields() -> None:
    """Test identifiers and owners cannot be smuggled into a patch."""
    with pytest.raises(ValidationError):
        CampaignPatch.model_validate({"userId": 2})

    with pytest.raises(ValidationError):
        AdPatch.model_validate({"id": 5})


def test_patch_rejects_clearing_required_field() -> None:
    """Test a required field may be omitted but not set to null."""
    with pytest.raises(ValidationError) as exc_info:
        CampaignPatch.model_validate({"name": None})

    assert "name cannot be null" in str(exc_info.value)


def test_patch_allows_clearing_optional_field() -> None:
    """Test optional fields can be cleared."""
    patch = AdPatch.model_validate({"campaignId": None})

    assert patch.changes() == {"campaign_id": None}


def test_campaign_patch_rejects_negative_budget() -> None:
    """Test money fields must not go negative."""
    with pytest.raises(ValidationError):
        CampaignPatch.model_validate({"budget": "-1"})

    assert CampaignPatch.model_validate({"budget": "10.50"}).budget == Decimal("10.50")
