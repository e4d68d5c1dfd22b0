"""
Main FastAPI application.

Following Sandi Metz:
- Single Responsibility: Application setup and configuration
- Small methods: Each lifecycle stage isolated
- Clear naming: Descriptive function names
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI

from searchcache import __version__
from searchcache.api.middleware import (
    RequestLoggingMiddleware,
    default_logging_config,
)
from searchcache.api.routes import cache, health, search, stats
from searchcache.api.routes.docs import API_DESCRIPTION, TAGS_METADATA
from searchcache.config import AppConfig, config
from searchcache.services.factory import build_search_service
from searchcache.services.search_service import SearchService
from searchcache.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


class ApplicationState:
    """
    Manages application-wide state.

    Single Responsibility: Lifecycle management of the search service.
    """

    def __init__(
        self, settings: AppConfig, service: Optional[SearchService] = None
    ) -> None:
        self.settings = settings
        self.service = service

    async def startup(self) -> None:
        """Initialize application resources."""
        logger.info("Starting SearchCache", env=self.settings.app_env)
        try:
            if self.service is None:
                self.service = build_search_service(self.settings)
            logger.info("SearchCache started successfully")
        except Exception as e:
            logger.error("Failed to initialize SearchCache", error=str(e))
            raise

    async def shutdown(self) -> None:
        """Cleanup application resources."""
        logger.info("Shutting down SearchCache")
        if self.service is None:
            return
        try:
            await self.service.close()
            logger.info("SearchCache shut down successfully")
        except Exception as e:
            logger.error("Error during shutdown", error=str(e))


def create_application(
    settings: Optional[AppConfig] = None,
    service: Optional[SearchService] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Configuration (defaults to the process configuration)
        service: Prebuilt search service (built at startup when None)

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler."""
        state = ApplicationState(settings, service)
        await state.startup()
        app.state.app_state = state

        yield

        await state.shutdown()

    app = FastAPI(
        title=settings.app_name,
        description=API_DESCRIPTION,
        version=__version__,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_tags=TAGS_METADATA,
        lifespan=lifespan,
    )

    app.add_middleware(
        RequestLoggingMiddleware,
        config=default_logging_config,
    )

    app.include_router(health.router, tags=["health"])
    app.include_router(search.router, prefix="/api/v1", tags=["search"])
    app.include_router(stats.router, prefix="/api/v1", tags=["stats"])
    app.include_router(cache.router, prefix="/api/v1", tags=["cache"])

    return app


def run(settings: Optional[AppConfig] = None) -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    settings = settings or config
    setup_logging(settings.effective_log_level)
    uvicorn.run(
        create_application(settings),
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
