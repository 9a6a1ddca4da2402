"""FastAPI application entry point."""

import asyncio
import contextlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from advidly import __version__
from advidly.adapters.processor import StubVideoProcessor, VideoProcessor
from advidly.api.deps import AppServices
from advidly.api.errors import register_exception_handlers
from advidly.api.middleware import SessionMiddleware
from advidly.api.routes import ads, analytics, auth, campaigns, health, profiles, videos
from advidly.config import Settings, get_settings
from advidly.db.storage import MemStorage
from advidly.logging import get_logger, setup_logging
from advidly.services.analytics import AnalyticsService
from advidly.services.auth import AuthService
from advidly.services.processing import ProcessingQueue
from advidly.services.sessions import SessionStore
from advidly.services.storage import UploadStorage

logger = get_logger(__name__)


def build_services(
    settings: Settings,
    processor: VideoProcessor | None = None,
) -> AppServices:
    """Construct a fresh, empty set of application services."""
    storage = MemStorage()
    processor = processor or StubVideoProcessor(
        delay_seconds=settings.video_processing_delay_seconds
    )
    return AppServices(
        settings=settings,
        storage=storage,
        sessions=SessionStore(ttl=timedelta(seconds=settings.session_ttl_seconds)),
        uploads=UploadStorage(settings.upload_dir, settings.allowed_video_mime_types),
        processing=ProcessingQueue(storage, processor),
        auth=AuthService(storage, bcrypt_rounds=settings.bcrypt_rounds),
        analytics=AnalyticsService(storage, creator_cpm=settings.creator_cpm),
    )


def create_app(
    settings: Settings | None = None,
    processor: VideoProcessor | None = None,
) -> FastAPI:
    """Create an application with its own storage, sessions and processing queue."""
    settings = settings or get_settings()
    setup_logging(settings)
    services = build_services(settings, processor)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler."""
        logger.info("application_starting", version=__version__)
        pruner = asyncio.create_task(
            services.sessions.run_pruner(settings.session_prune_interval_seconds)
        )

        yield

        logger.info("application_shutting_down")
        pruner.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await pruner
        await services.processing.shutdown()

    app = FastAPI(
        title="AdVidly",
        description="Marketplace connecting advertisers with video creators",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.services = services

    register_exception_handlers(app)

    app.add_middleware(
        SessionMiddleware,
        store=services.sessions,
        cookie_name=settings.session_cookie_name,
        secure=settings.session_cookie_secure,
    )
    # Added last so it wraps the session middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(auth.router, prefix="/api")
    app.include_router(profiles.router, prefix="/api")
    app.include_router(campaigns.router, prefix="/api")
    app.include_router(ads.router, prefix="/api")
    app.include_router(videos.router, prefix="/api")
    app.include_router(analytics.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        """Service banner."""
        return {
            "name": "AdVidly",
            "version": __version__,
            "docs": "/docs",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "advidly.main:app",
        host=_settings.api_host,
        port=_settings.api_port,
        reload=_settings.api_reload,
    )
