"""
Services module for SearchCache.

Contains the cache gate and its construction from configuration.
"""

from searchcache.services.factory import (
    build_search_service,
    create_cache_store,
    create_recorder,
)
from searchcache.services.search_service import SearchService

__all__ = [
    "SearchService",
    "build_search_service",
    "create_cache_store",
    "create_recorder",
]
