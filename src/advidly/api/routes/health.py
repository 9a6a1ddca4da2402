"""Health check endpoints."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from advidly import __version__
from advidly.api.deps import ServicesDep

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    ready: bool
    processor: str
    pending_jobs: int
    active_sessions: int


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Basic health check endpoint that verifies the API is running.",
)
async def health_check() -> HealthResponse:
    """Basic health check - is the API up?"""
    return HealthResponse(status="healthy", version=__version__)


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Checks the video processor and reports queue and session counts.",
)
async def readiness_check(services: ServicesDep) -> ReadinessResponse:
    """Readiness check including the processing backend."""
    processor = services.processing.processor
    return ReadinessResponse(
        ready=await processor.health_check(),
        processor=processor.name,
        pending_jobs=len(services.processing.pending),
        active_sessions=len(services.sessions),
    )


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    description="Simple liveness probe for Kubernetes.",
)
async def liveness_check() -> dict[str, str]:
    """Kubernetes liveness probe - is the process alive?"""
    return {"status": "alive"}
