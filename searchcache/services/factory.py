"""
Search service construction.

Sandi Metz Principles:
- Single Responsibility: Wire collaborators from configuration
- Dependency Inversion: Callers receive a fully built service
"""

from typing import Optional

from searchcache.analytics.file_recorder import FileAnalyticsRecorder
from searchcache.analytics.recorder import AnalyticsRecorder
from searchcache.cache.base import BaseCacheStore, Clock
from searchcache.cache.file_store import FileCacheStore
from searchcache.cache.memory_store import InMemoryCacheStore
from searchcache.cache.redis_store import RedisCacheStore, create_redis_pool
from searchcache.config import AppConfig
from searchcache.search.factory import create_search_provider
from searchcache.search.provider import BaseSearchProvider
from searchcache.search.retry import RetryConfig, RetryHandler
from searchcache.search.timeout_handler import TimeoutHandler
from searchcache.services.search_service import SearchService
from searchcache.utils.logger import get_logger

logger = get_logger(__name__)


def create_cache_store(
    settings: AppConfig, clock: Optional[Clock] = None
) -> BaseCacheStore:
    """
    Create the configured cache store.

    Args:
        settings: Application configuration
        clock: Optional time source

    Returns:
        Cache store instance
    """
    if settings.cache_backend == "memory":
        return InMemoryCacheStore(max_entries=settings.cache_max_entries, clock=clock)

    if settings.cache_backend == "redis":
        pool = create_redis_pool(settings.redis_url, settings.redis_max_connections)
        return RedisCacheStore.from_pool(
            pool, namespace=settings.cache_namespace, clock=clock
        )

    return FileCacheStore(
        settings.cache_path, namespace=settings.cache_namespace, clock=clock
    )


def create_recorder(
    settings: AppConfig, clock: Optional[Clock] = None
) -> AnalyticsRecorder:
    """
    Create the configured analytics recorder.

    Args:
        settings: Application configuration
        clock: Optional time source

    Returns:
        Analytics recorder instance
    """
    if settings.analytics_backend == "memory":
        return AnalyticsRecorder(
            max_records=settings.analytics_max_records,
            top_queries_limit=settings.top_queries_limit,
            clock=clock,
        )

    return FileAnalyticsRecorder(
        settings.analytics_path,
        max_records=settings.analytics_max_records,
        top_queries_limit=settings.top_queries_limit,
        clock=clock,
    )


def build_search_service(
    settings: AppConfig,
    provider: Optional[BaseSearchProvider] = None,
    clock: Optional[Clock] = None,
    require_provider: bool = True,
) -> SearchService:
    """
    Build a search service from configuration.

    Args:
        settings: Application configuration
        provider: Search provider (built from settings when None)
        clock: Optional time source shared by store and recorder
        require_provider: Fail when no provider can be built; otherwise the
            service runs cache-only (stats, clear, hits)

    Returns:
        Search service

    Raises:
        ConfigurationError: If no provider is given and none is configured
    """
    search_provider = provider
    if search_provider is None and (require_provider or settings.search_command):
        search_provider = create_search_provider(settings)

    retry = RetryHandler(
        RetryConfig(
            max_attempts=settings.search_max_attempts,
            initial_delay=settings.search_retry_initial_delay,
            max_delay=settings.search_retry_max_delay,
        )
    )

    service = SearchService(
        store=create_cache_store(settings, clock),
        recorder=create_recorder(settings, clock),
        provider=search_provider,
        default_ttl_seconds=settings.cache_ttl_seconds,
        namespace=settings.cache_namespace,
        timeout_handler=TimeoutHandler(settings.search_timeout_seconds),
        retry_handler=retry,
    )

    logger.info(
        "Search service built",
        cache_backend=settings.cache_backend,
        analytics_backend=settings.analytics_backend,
        provider=search_provider.get_name() if search_provider else None,
        ttl_seconds=settings.cache_ttl_seconds,
    )
    return service
