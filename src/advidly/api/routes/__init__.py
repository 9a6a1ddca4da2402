"""API route modules."""

from advidly.api.routes import (
    ads,
    analytics,
    auth,
    campaigns,
    health,
    profiles,
    videos,
)

__all__ = ["ads", "analytics", "auth", "campaigns", "health", "profiles", "videos"]
