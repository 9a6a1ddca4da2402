"""Pytest configuration and fixtures."""

import os
import time
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Set test environment before importing app modules
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["BCRYPT_ROUNDS"] = "4"

from advidly.config import Settings  # noqa: E402
from advidly.db.storage import MemStorage  # noqa: E402
from advidly.domain.enums import UserType  # noqa: E402

PASSWORD = "secret123"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings with a temporary upload dir, fast hashing and fast processing."""
    return Settings(
        log_level="WARNING",
        upload_dir=tmp_path / "uploads",
        bcrypt_rounds=4,
        video_processing_delay_seconds=0.05,
        ad_max_upload_bytes=64 * 1024,
        video_max_upload_bytes=256 * 1024,
    )


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """A fresh application with empty storage."""
    from advidly.main import create_app

    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Create a test client; the context keeps the event loop alive for background jobs."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def storage(app: FastAPI) -> MemStorage:
    """Direct access to the application's storage."""
    return app.state.services.storage


@pytest.fixture
def register(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Register a user through the API and return the response body."""

    def _register(
        username: str,
        user_type: UserType = UserType.COMPANY,
        **overrides: Any,
    ) -> dict[str, Any]:
        payload = {
            "email": f"{username}@example.com",
            "username": username,
            "password": PASSWORD,
            "confirmPassword": PASSWORD,
            "fullName": username.title(),
            "userType": user_type.value,
            **overrides,
        }
        response = client.post("/api/auth/register", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def login_as(
    client: TestClient, register: Callable[..., dict[str, Any]]
) -> Callable[..., dict[str, Any]]:
    """Switch the client to a user, registering it on first use."""
    registered: dict[str, dict[str, Any]] = {}

    def _login_as(username: str, user_type: UserType = UserType.COMPANY) -> dict[str, Any]:
        if username not in registered:
            registered[username] = register(username, user_type)
        client.cookies.clear()
        response = client.post(
            "/api/auth/login",
            json={"email": f"{username}@example.com", "password": PASSWORD},
        )
        assert response.status_code == 200, response.text
        return registered[username]

    return _login_as


@pytest.fixture
def upload_video(client: TestClient) -> Callable[..., Any]:
    """Upload a small video as the current user."""

    def _upload_video(
        title: str = "My clip",
        content: bytes = b"\x00" * 2048,
        content_type: str = "video/mp4",
        **fields: str,
    ):
        return client.post(
            "/api/videos/upload",
            data={"title": title, **fields},
            files={"file": ("clip.mp4", content, content_type)},
        )

    return _upload_video


@pytest.fixture
def upload_ad(client: TestClient) -> Callable[..., Any]:
    """Upload a small ad as the current user."""

    def _upload_ad(
        title: str = "Spring sale",
        content: bytes = b"\x00" * 2048,
        content_type: str = "video/mp4",
        **fields: str,
    ):
        return client.post(
            "/api/ads/upload",
            data={"title": title, **fields},
            files={"file": ("ad.mp4", content, content_type)},
        )

    return _upload_ad


@pytest.fixture
def wait_for_status(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Poll a video until it reaches a status."""

    def _wait(video_id: int, status: str = "ready", timeout: float = 5.0) -> dict[str, Any]:
        deadline = time.monotonic() + timeout
        while True:
            video = client.get(f"/api/videos/{video_id}").json()
            if video["status"] == status or time.monotonic() > deadline:
                return video
            time.sleep(0.02)

    return _wait
