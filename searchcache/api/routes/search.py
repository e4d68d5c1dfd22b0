"""
Search lookup endpoint.

Sandi Metz Principles:
- Single Responsibility: HTTP request handling
- Small functions: Minimal logic in endpoints
- Dependency Injection: Service injected
"""

from fastapi import APIRouter, Depends, HTTPException

from searchcache.api.deps import get_search_service
from searchcache.exceptions import (
    InvalidQueryError,
    SearchFailedError,
    SearchTimeoutError,
    ValidationError,
)
from searchcache.models.error import ErrorResponse
from searchcache.models.query import SearchRequest
from searchcache.models.response import SearchResponse
from searchcache.services.search_service import SearchService
from searchcache.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


def error_detail(error: ErrorResponse) -> dict:
    """Serialize error body for HTTPException."""
    return error.model_dump(mode="json")


@router.post("/search", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    service: SearchService = Depends(get_search_service),  # noqa: B008
) -> SearchResponse:
    """
    Answer a query from cache or external search.

    Args:
        request: Search request
        service: Search service (injected)

    Returns:
        Search response

    Raises:
        HTTPException: If the query is invalid or the search fails
    """
    try:
        return await service.lookup(
            request.query,
            ttl_seconds=request.ttl_seconds,
            force_refresh=request.force_refresh,
        )
    except InvalidQueryError as e:
        raise HTTPException(
            status_code=400, detail=error_detail(ErrorResponse.invalid_query(str(e)))
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=400, detail=error_detail(ErrorResponse.validation_error(str(e)))
        )
    except SearchTimeoutError as e:
        raise HTTPException(
            status_code=504, detail=error_detail(ErrorResponse.search_timeout(str(e)))
        )
    except SearchFailedError as e:
        logger.error("Search failed", error=str(e))
        raise HTTPException(
            status_code=502, detail=error_detail(ErrorResponse.search_failed(str(e)))
        )
    except Exception as e:
        logger.error("Unexpected error", error=str(e))
        raise HTTPException(
            status_code=500, detail=error_detail(ErrorResponse.internal_error())
        )
