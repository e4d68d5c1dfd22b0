"""
Lookup statistics endpoints.

Sandi Metz Principles:
- Single Responsibility: Analytics exposure
- Small functions: Minimal logic in endpoints
- Dependency Injection: Service injected
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from searchcache.api.deps import get_search_service
from searchcache.api.routes.search import error_detail
from searchcache.exceptions import ValidationError
from searchcache.models.analytics import AnalyticsSummary
from searchcache.models.error import ErrorResponse
from searchcache.models.response import ClearResponse
from searchcache.services.search_service import SearchService
from searchcache.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.get("/stats", response_model=AnalyticsSummary)
async def get_stats(
    window_seconds: Optional[float] = Query(None, description="Window length"),
    top_n: Optional[int] = Query(None, description="Number of top queries"),
    service: SearchService = Depends(get_search_service),  # noqa: B008
) -> AnalyticsSummary:
    """
    Get hit/miss statistics.

    Args:
        window_seconds: Only count lookups from the last N seconds
        top_n: Number of top queries to return
        service: Search service (injected)

    Returns:
        Analytics summary
    """
    try:
        return await service.get_stats(window_seconds=window_seconds, top_n=top_n)
    except ValidationError as e:
        raise HTTPException(
            status_code=400, detail=error_detail(ErrorResponse.validation_error(str(e)))
        )


@router.delete("/stats", response_model=ClearResponse)
async def reset_stats(
    service: SearchService = Depends(get_search_service),  # noqa: B008
) -> ClearResponse:
    """
    Clear all analytics records.

    Args:
        service: Search service (injected)

    Returns:
        Number of records removed
    """
    cleared = await service.reset_stats()
    logger.info("Stats reset via API", count=cleared)
    return ClearResponse(cleared_entries=0, cleared_records=cleared)
