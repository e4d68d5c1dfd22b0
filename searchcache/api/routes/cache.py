"""
Cache management endpoints.

Sandi Metz Principles:
- Single Responsibility: Cache administration over HTTP
- Small functions: Minimal logic in endpoints
- Dependency Injection: Service injected
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from searchcache.api.deps import get_search_service
from searchcache.api.routes.search import error_detail
from searchcache.exceptions import CacheError, InvalidQueryError
from searchcache.models.error import ErrorResponse
from searchcache.models.query import InvalidateRequest
from searchcache.models.response import (
    CacheStatusResponse,
    ClearResponse,
    InvalidateResponse,
)
from searchcache.services.search_service import SearchService
from searchcache.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.get("/cache", response_model=CacheStatusResponse)
async def cache_status(
    service: SearchService = Depends(get_search_service),  # noqa: B008
) -> CacheStatusResponse:
    """Get cache backend and entry count."""
    try:
        entries = await service.cache_size()
    except CacheError as e:
        raise HTTPException(
            status_code=503, detail=error_detail(ErrorResponse.cache_unavailable(str(e)))
        )

    return CacheStatusResponse(
        backend=service.store.get_name(),
        entries=entries,
        default_ttl_seconds=service.default_ttl_seconds,
    )


@router.delete("/cache", response_model=ClearResponse)
async def clear_cache(
    reset_stats: bool = Query(False, description="Also clear analytics records"),
    service: SearchService = Depends(get_search_service),  # noqa: B008
) -> ClearResponse:
    """
    Remove all cache entries.

    Args:
        reset_stats: Also clear analytics records
        service: Search service (injected)

    Returns:
        Counts of removed entries and records
    """
    try:
        cleared_entries = await service.clear_cache()
    except CacheError as e:
        logger.error("Cache clear failed", error=str(e))
        raise HTTPException(
            status_code=503, detail=error_detail(ErrorResponse.cache_unavailable(str(e)))
        )

    cleared_records = await service.reset_stats() if reset_stats else 0
    return ClearResponse(
        cleared_entries=cleared_entries, cleared_records=cleared_records
    )


@router.post("/cache/invalidate", response_model=InvalidateResponse)
async def invalidate(
    request: InvalidateRequest,
    service: SearchService = Depends(get_search_service),  # noqa: B008
) -> InvalidateResponse:
    """
    Drop the cached result for one query.

    Args:
        request: Query to invalidate
        service: Search service (injected)

    Returns:
        Cache key and whether an entry was removed
    """
    try:
        removed = await service.invalidate(request.query)
    except InvalidQueryError as e:
        raise HTTPException(
            status_code=400, detail=error_detail(ErrorResponse.invalid_query(str(e)))
        )
    except CacheError as e:
        raise HTTPException(
            status_code=503, detail=error_detail(ErrorResponse.cache_unavailable(str(e)))
        )

    return InvalidateResponse(cache_key=service.cache_key(request.query), removed=removed)
