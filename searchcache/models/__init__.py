"""
Models package for SearchCache.

Exports all model classes for easy imports throughout the application.
"""

# Analytics models
from searchcache.models.analytics import (
    AnalyticsRecord,
    AnalyticsSummary,
    LookupOutcome,
    QueryFrequency,
)

# Cache models
from searchcache.models.cache_entry import CacheEntry

# Error models
from searchcache.models.error import ErrorCode, ErrorResponse

# Request models
from searchcache.models.query import InvalidateRequest, SearchRequest

# Response models
from searchcache.models.response import (
    CacheInfo,
    CacheStatusResponse,
    ClearResponse,
    HealthResponse,
    InvalidateResponse,
    SearchResponse,
)

__all__ = [
    # Analytics
    "AnalyticsRecord",
    "AnalyticsSummary",
    "LookupOutcome",
    "QueryFrequency",
    # Cache
    "CacheEntry",
    # Errors
    "ErrorCode",
    "ErrorResponse",
    # Requests
    "InvalidateRequest",
    "SearchRequest",
    # Responses
    "CacheInfo",
    "CacheStatusResponse",
    "ClearResponse",
    "HealthResponse",
    "InvalidateResponse",
    "SearchResponse",
]
