"""
Health check endpoints.

Sandi Metz Principles:
- Single Responsibility: Health check logic only
- Small functions: Each check isolated
- Clear naming: Descriptive endpoint names
"""

import time
from typing import Dict, Literal, Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from searchcache import __version__
from searchcache.models.response import HealthResponse
from searchcache.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


class ComponentHealth(BaseModel):
    """Health status of a component."""

    status: Literal["healthy", "unhealthy"] = Field(..., description="Component status")
    latency_ms: Optional[float] = Field(None, description="Check latency in ms")
    message: Optional[str] = Field(None, description="Status message")


class DetailedHealthResponse(BaseModel):
    """Detailed health check response."""

    status: Literal["healthy", "unhealthy"] = Field(..., description="Overall status")
    environment: str = Field(..., description="Environment name")
    version: str = Field(..., description="Application version")
    components: Dict[str, ComponentHealth] = Field(
        default_factory=dict, description="Component health status"
    )


def app_environment(request: Request) -> str:
    """Get environment name from the settings the app was created with."""
    app_state = getattr(request.app.state, "app_state", None)
    settings = getattr(app_state, "settings", None)
    return settings.app_env if settings is not None else "unknown"


async def check_cache_health(request: Request) -> ComponentHealth:
    """Check cache store health."""
    app_state = getattr(request.app.state, "app_state", None)
    service = getattr(app_state, "service", None)
    if service is None:
        return ComponentHealth(status="unhealthy", message="Service not initialized")

    start = time.time()
    try:
        is_healthy = await service.health_check()
    except Exception as e:
        logger.error("Cache health check failed", error=str(e))
        return ComponentHealth(status="unhealthy", message=str(e))
    latency = (time.time() - start) * 1000

    if is_healthy:
        return ComponentHealth(status="healthy", latency_ms=round(latency, 2))
    return ComponentHealth(status="unhealthy", message="Cache store unreachable")


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """
    Basic liveness check endpoint.

    Returns:
        Health status response
    """
    return HealthResponse(
        status="healthy",
        environment=app_environment(request),
        version=__version__,
    )


@router.get("/ready", response_model=DetailedHealthResponse)
async def readiness_check(request: Request) -> DetailedHealthResponse:
    """
    Readiness check endpoint.

    Checks the cache store and returns detailed status.

    Returns:
        Detailed health status response
    """
    components = {"cache": await check_cache_health(request)}

    statuses = [c.status for c in components.values()]
    overall_status = "healthy" if all(s == "healthy" for s in statuses) else "unhealthy"

    return DetailedHealthResponse(
        status=overall_status,
        environment=app_environment(request),
        version=__version__,
        components=components,
    )
