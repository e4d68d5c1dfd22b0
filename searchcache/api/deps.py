"""
API dependency injection.

Sandi Metz Principles:
- Single Responsibility: Dependency lookup and injection
- Dependency Inversion: Routes receive the service, never build it
"""

from fastapi import HTTPException, Request

from searchcache.models.error import ErrorResponse
from searchcache.services.search_service import SearchService


async def get_search_service(request: Request) -> SearchService:
    """
    Get the application's search service.

    Args:
        request: FastAPI request

    Returns:
        Search service built at startup

    Raises:
        HTTPException: If the service has not been initialized
    """
    app_state = getattr(request.app.state, "app_state", None)
    service = getattr(app_state, "service", None)
    if service is None:
        error = ErrorResponse.service_unavailable("search service")
        raise HTTPException(status_code=503, detail=error.model_dump(mode="json"))
    return service
