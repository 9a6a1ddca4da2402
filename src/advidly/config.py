"""Application configuration via environment variables."""

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MB = 1024 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )

    # API Server
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=5000, description="API server port")
    api_reload: bool = Field(default=False, description="Enable auto-reload for development")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API with credentials",
    )

    # Sessions
    session_cookie_name: str = Field(default="advidly.sid", description="Session cookie name")
    session_ttl_seconds: int = Field(
        default=24 * 60 * 60,
        description="Session lifetime in seconds (no refresh or rotation)",
    )
    session_prune_interval_seconds: float = Field(
        default=24 * 60 * 60,
        description="Seconds between sweeps that drop expired sessions",
    )
    session_cookie_secure: bool = Field(
        default=False,
        description="Only send the session cookie over HTTPS",
    )

    # Uploads
    upload_dir: Path = Field(default=Path("uploads"), description="Root directory for uploads")
    ad_max_upload_bytes: int = Field(default=100 * MB, description="Size ceiling for ad uploads")
    video_max_upload_bytes: int = Field(
        default=2048 * MB,
        description="Size ceiling for creator video uploads",
    )
    allowed_video_mime_types: list[str] = Field(
        default_factory=lambda: [
            "video/mp4",
            "video/mpeg",
            "video/quicktime",
            "video/webm",
            "video/x-matroska",
            "video/x-msvideo",
        ],
        description="MIME types accepted by both upload endpoints",
    )
    placeholder_ad_duration_seconds: int = Field(
        default=30,
        description="Duration recorded for uploaded ads (files are not probed)",
    )

    # Processing
    video_processing_delay_seconds: float = Field(
        default=10.0,
        description="Simulated processing time before an uploaded video becomes ready",
    )

    # Auth
    bcrypt_rounds: int = Field(default=10, ge=4, le=31, description="bcrypt work factor")

    # Analytics
    creator_cpm: Decimal = Field(
        default=Decimal("2.00"),
        description="Creator earnings per 1000 ad placement views",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


# Convenience alias
settings = get_settings()
