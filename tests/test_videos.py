"""Tests for creator video endpoints."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from fastapi.testclient import TestClient

from advidly.config import Settings
from advidly.db.storage import MemStorage
from advidly.domain.enums import UserType
from advidly.domain.models import NewVideo


def test_upload_video_starts_processing(
    client: TestClient,
    login_as: Callable[..., dict[str, Any]],
    upload_video: Callable[..., Any],
    settings: Settings,
) -> None:
    """Test an upload is stored and created in processing status."""
    user = login_as("jane", UserType.INDIVIDUAL)

    response = upload_video(
        title="Unboxing",
        category="tech",
        adPlacement="mid-roll",
        adPreferences='{"categories": ["tech"]}',
    )

    assert response.status_code == 201, response.text
    video = response.json()
    assert video["userId"] == user["id"]
    assert video["status"] == "processing"
    assert video["adPlacement"] == "mid-roll"
    assert video["adPreferences"] == {"categories": ["tech"]}
    assert video["processedFilePath"] is None
    assert video["views"] == 0
    assert Path(video["rawFilePath"]).parent == settings.upload_dir / "videos"
    assert Path(video["rawFilePath"]).exists()


def test_video_becomes_ready(
    client: TestClient,
    login_as: Callable[..., dict[str, Any]],
    upload_video: Callable[..., Any],
    wait_for_status: Callable[..., dict[str, Any]],
) -> None:
    """Test the background job moves the video to ready with its outputs."""
    login_as("jane", UserType.INDIVIDUAL)
    video = upload_video().json()

    ready = wait_for_status(video["id"], "ready")

    assert ready["status"] == "ready"
    assert ready["processedFilePath"] == f"{video['rawFilePath']}-processed"
    assert ready["thumbnailPath"] == f"{video['rawFilePath']}-thumbnail"
    assert 60 <= ready["duration"] < 660


def test_upload_rejects_non_video(
    client: TestClient,
    login_as: Callable[..., dict[str, Any]],
    upload_video: Callable[..., Any],
    storage: MemStorage,
) -> None:
    """Test a PDF is refused and no video is created."""
    login_as("jane", UserType.INDIVIDUAL)

    response = upload_video(content=b"%PDF-1.4", content_type="application/pdf")

    assert response.status_code == 400
    assert response.json()["message"] == "Only video files are allowed"
    assert len(storage.videos) == 0


def test_upload_rejects_bad_preferences(
    client: TestClient,
    login_as: Callable[..., dict[str, Any]],
    upload_video: Callable[..., Any],
) -> None:
    """Test ad preferences must be a JSON object."""
    login_as("jane", UserType.INDIVIDUAL)

    not_json = upload_video(adPreferences="{oops")
    not_object = upload_video(adPreferences="[1, 2]")
    bad_placement = upload_video(adPlacement="half-time")

    assert not_json.status_code == 400
    assert not_object.status_code == 400
    assert bad_placement.status_code == 400


def test_download_before_ready(
    client: TestClient,
    login_as: Callable[..., dict[str, Any]],
    storage: MemStorage,
) -> None:
    """Test a processing video cannot be downloaded."""
    user = login_as("jane", UserType.INDIVIDUAL)
    video = storage.create_video(
        NewVideo(user_id=user["id"], title="Raw", raw_file_path="raw.mp4")
    )

    response = client.get(f"/api/videos/{video.id}/download")

    assert response.status_code == 400
    assert response.json()["message"] == "Video is not ready for download"


def test_download_ready_video(
    client: TestClient,
    login_as: Callable[..., dict[str, Any]],
    upload_video: Callable[..., Any],
    wait_for_status: Callable[..., dict[str, Any]],
) -> None:
    """Test a ready video reports its processed location."""
    login_as("jane", UserType.INDIVIDUAL)
    video = upload_video().json()
    ready = wait_for_status(video["id"], "ready")

    response = client.get(f"/api/videos/{video['id']}/download")

    assert response.status_code == 200
    assert response.json()["url"] == ready["processedFilePath"]


def test_video_ownership(
    client: TestClient,
    login_as: Callable[..., dict[str, Any]],
    upload_video: Callable[..., Any],
) -> None:
    """Test creators cannot read, edit or delete each other's videos."""
    login_as("jane", UserType.INDIVIDUAL)
    video = upload_video().json()
    login_as("john", UserType.INDIVIDUAL)

    assert client.get("/api/videos").json() == []
    assert client.get(f"/api/videos/{video['id']}").status_code == 403
    assert client.get(f"/api/videos/{video['id']}/download").status_code == 403
    assert client.patch(f"/api/videos/{video['id']}", json={"title": "x"}).status_code == 403
    assert client.delete(f"/api/videos/{video['id']}").status_code == 403
    assert client.get("/api/videos/999").status_code == 404


def test_update_video(
    client: TestClient,
    login_as: Callable[..., dict[str, Any]],
    upload_video: Callable[..., Any],
) -> None:
    """Test metadata edits apply only the given fields."""
    login_as("jane", UserType.INDIVIDUAL)
    video = upload_video(title="Draft").json()

    response = client.patch(
        f"/api/videos/{video['id']}",
        json={"title": "Final cut", "adPreferences": {"maxAds": 2}},
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["title"] == "Final cut"
    assert updated["adPreferences"] == {"maxAds": 2}
    assert updated["rawFilePath"] == video["rawFilePath"]


def test_update_rejects_server_owned_fields(
    client: TestClient,
    login_as: Callable[..., dict[str, Any]],
    upload_video: Callable[..., Any],
) -> None:
    """Test view counters and processing outputs are not client-editable."""
    login_as("jane", UserType.INDIVIDUAL)
    video = upload_video().json()

    response = client.patch(f"/api/videos/{video['id']}", json={"views": 1000000})

    assert response.status_code == 400


def test_delete_video_removes_files(
    client: TestClient,
    login_as: Callable[..., dict[str, Any]],
    upload_video: Callable[..., Any],
    wait_for_status: Callable[..., dict[str, Any]],
) -> None:
    """Test deleting a video removes its upload, tolerating missing outputs."""
    login_as("jane", UserType.INDIVIDUAL)
    video = upload_video().json()
    # The stub processor reports output paths without writing them
    wait_for_status(video["id"], "ready")

    response = client.delete(f"/api/videos/{video['id']}")

    assert response.status_code == 200
    assert response.json()["message"] == "Video deleted successfully"
    assert not Path(video["rawFilePath"]).exists()
    assert client.get(f"/api/videos/{video['id']}").status_code == 404


def test_delete_while_processing(
    client: TestClient,
    login_as: Callable[..., dict[str, Any]],
    upload_video: Callable[..., Any],
    app: Any,
) -> None:
    """Test deleting a processing video cancels its job."""
    login_as("jane", UserType.INDIVIDUAL)
    video = upload_video().json()

    response = client.delete(f"/api/videos/{video['id']}")

    assert response.status_code == 200
    assert video["id"] not in app.state.services.processing.pending


def _approved_ad(client: TestClient, upload_ad: Callable[..., Any]) -> dict[str, Any]:
    ad = upload_ad().json()
    response = client.patch(f"/api/ads/{ad['id']}", json={"status": "approved"})
    assert response.status_code == 200, response.text
    return response.json()


def test_place_ad_in_video(
    client: TestClient,
    login_as: Callable[..., dict[str, Any]],
    upload_video: Callable[..., Any],
    upload_ad: Callable[..., Any],
) -> None:
    """Test a creator can place approved ads and remove them again."""
    login_as("acme")
    approved = _approved_ad(client, upload_ad)
    pending = upload_ad(title="Pending").json()

    login_as("jane", UserType.INDIVIDUAL)
    video = upload_video().json()

    placed = client.post(
        f"/api/videos/{video['id']}/ads", json={"adId": approved["id"], "placementTime": 45}
    )
    assert placed.status_code == 201, placed.text
    placement = placed.json()
    assert placement["videoId"] == video["id"]
    assert placement["placementTime"] == 45
    assert placement["views"] == 0

    not_approved = client.post(f"/api/videos/{video['id']}/ads", json={"adId": pending["id"]})
    assert not_approved.status_code == 400
    assert not_approved.json()["message"] == "Only approved ads can be placed"

    missing = client.post(f"/api/videos/{video['id']}/ads", json={"adId": 999})
    assert missing.status_code == 404

    listed = client.get(f"/api/videos/{video['id']}/ads").json()
    assert [p["id"] for p in listed] == [placement["id"]]

    removed = client.delete(f"/api/videos/{video['id']}/ads/{placement['id']}")
    assert removed.status_code == 200
    assert client.get(f"/api/videos/{video['id']}/ads").json() == []
    assert client.delete(f"/api/videos/{video['id']}/ads/{placement['id']}").status_code == 404


def test_end_to_end(
    client: TestClient,
    login_as: Callable[..., dict[str, Any]],
    upload_video: Callable[..., Any],
    wait_for_status: Callable[..., dict[str, Any]],
) -> None:
    """Test register, log in, upload, wait for processing, then download."""
    login_as("jane", UserType.INDIVIDUAL)

    video = upload_video(title="Day in the life").json()
    assert video["status"] == "processing"

    assert wait_for_status(video["id"], "ready")["status"] == "ready"

    listed = client.get("/api/videos").json()
    assert [v["title"] for v in listed] == ["Day in the life"]

    download = client.get(f"/api/videos/{video['id']}/download")
    assert download.status_code == 200
    assert download.json()["url"].endswith("-processed")


def test_publish_ready_video(
    client: TestClient,
    login_as: Callable[..., dict[str, Any]],
    upload_video: Callable[..., Any],
    wait_for_status: Callable[..., dict[str, Any]],
) -> None:
    """Test a ready video can be published by its creator."""
    login_as("jane", UserType.INDIVIDUAL)
    video = upload_video().json()
    wait_for_status(video["id"], "ready")

    response = client.patch(f"/api/videos/{video['id']}", json={"status": "published"})

    assert response.status_code == 200
    assert response.json()["status"] == "published"


def test_publish_refused_while_processing(
    client: TestClient,
    login_as: Callable[..., dict[str, Any]],
    upload_video: Callable[..., Any],
    wait_for_status: Callable[..., dict[str, Any]],
) -> None:
    """Test a video still processing cannot be published."""
    login_as("jane", UserType.INDIVIDUAL)
    video = upload_video().json()

    response = client.patch(f"/api/videos/{video['id']}", json={"status": "published"})

    assert response.status_code == 400
    assert response.json()["message"] == "Only ready videos can be published"
    assert wait_for_status(video["id"], "ready")["status"] == "ready"


def test_status_cannot_move_backwards(
    client: TestClient,
    login_as: Callable[..., dict[str, Any]],
    upload_video: Callable[..., Any],
    wait_for_status: Callable[..., dict[str, Any]],
) -> None:
    """Test creators cannot set the statuses owned by processing."""
    login_as("jane", UserType.INDIVIDUAL)
    video = upload_video().json()
    wait_for_status(video["id"], "ready")

    for target in ("uploaded", "processing", "ready"):
        response = client.patch(f"/api/videos/{video['id']}", json={"status": target})
        assert response.status_code == 400
        assert response.json()["message"].startswith("status")

    assert client.get(f"/api/videos/{video['id']}").json()["status"] == "ready"
    summary = client.get("/api/analytics/creator/summary").json()
    assert summary["processingVideos"] == 0
