"""
Search lookup service.

Orchestrates cache checking, external search calls and analytics.

Sandi Metz Principles:
- Single Responsibility: Lookup orchestration
- Small methods: Each step isolated
- Dependency Injection: Store, recorder and provider injected
"""

import asyncio
import time
import weakref
from typing import Any, Optional

from searchcache.analytics.recorder import AnalyticsRecorder
from searchcache.cache.base import BaseCacheStore
from searchcache.exceptions import (
    CacheError,
    ConfigurationError,
    SearchFailedError,
    ValidationError,
)
from searchcache.models.analytics import AnalyticsSummary, LookupOutcome
from searchcache.models.cache_entry import CacheEntry
from searchcache.models.response import CacheInfo, SearchResponse
from searchcache.pipeline.query_validator import QueryValidator
from searchcache.search.provider import BaseSearchProvider
from searchcache.search.retry import RetryHandler
from searchcache.search.timeout_handler import TimeoutHandler
from searchcache.utils.hasher import DEFAULT_NAMESPACE, generate_cache_key
from searchcache.utils.logger import (
    get_logger,
    log_cache_hit,
    log_cache_miss,
    log_error,
    log_search_call,
)

logger = get_logger(__name__)

DEFAULT_TTL_SECONDS = 3600.0


class SearchService:
    """
    Cache gate in front of an external search.

    Order: validate -> cache -> search -> store. Cache failures degrade to
    the miss path; search failures propagate as SearchFailedError.
    """

    def __init__(
        self,
        store: BaseCacheStore,
        recorder: AnalyticsRecorder,
        provider: Optional[BaseSearchProvider],
        default_ttl_seconds: float = DEFAULT_TTL_SECONDS,
        namespace: str = DEFAULT_NAMESPACE,
        validator: Optional[QueryValidator] = None,
        timeout_handler: Optional[TimeoutHandler] = None,
        retry_handler: Optional[RetryHandler] = None,
    ):
        """
        Initialize service.

        Args:
            store: Cache store
            recorder: Analytics recorder
            provider: External search provider (None for cache-only use)
            default_ttl_seconds: TTL used when a lookup gives none
            namespace: Cache key prefix
            validator: Query validator
            timeout_handler: Timeout around each search attempt
            retry_handler: Retry policy around the search call
        """
        if default_ttl_seconds <= 0:
            raise ValueError("default_ttl_seconds must be positive")

        self._store = store
        self._recorder = recorder
        self._provider = provider
        self._default_ttl = default_ttl_seconds
        self._namespace = namespace
        self._validator = validator or QueryValidator()
        self._timeout = timeout_handler or TimeoutHandler()
        self._retry = retry_handler or RetryHandler()
        self._key_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    @property
    def store(self) -> BaseCacheStore:
        """Get cache store."""
        return self._store

    @property
    def recorder(self) -> AnalyticsRecorder:
        """Get analytics recorder."""
        return self._recorder

    @property
    def default_ttl_seconds(self) -> float:
        """Get default TTL."""
        return self._default_ttl

    def cache_key(self, query: str) -> str:
        """Get cache key for query."""
        return generate_cache_key(query, self._namespace)

    async def lookup(
        self,
        query: str,
        ttl_seconds: Optional[float] = None,
        force_refresh: bool = False,
    ) -> SearchResponse:
        """
        Answer query from cache or external search.

        Args:
            query: Query text
            ttl_seconds: TTL override for a newly stored result
            force_refresh: Skip the cache read and refresh the entry

        Returns:
            Search response

        Raises:
            InvalidQueryError: If query is empty or malformed
            ValidationError: If ttl_seconds is not positive
            SearchFailedError: If the external search fails or times out
            ConfigurationError: On a miss when no provider is configured
        """
        self._validator.validate_or_raise(query)
        ttl = self._resolve_ttl(ttl_seconds)
        key = self.cache_key(query)
        start_time = time.perf_counter()

        # Same-key lookups queue here, so a waiter finds the stored result.
        async with self._lock_for(key):
            if not force_refresh:
                entry = await self._read_cache(key)
                if entry is not None:
                    return await self._serve_hit(query, entry, start_time)

            log_cache_miss(query, key, refresh=force_refresh)
            value = await self._search_or_record_error(query, start_time)
            entry = await self._write_cache(key, query, value, ttl)

            latency_ms = self._elapsed_ms(start_time)
            await self._recorder.record(LookupOutcome.MISS, query, latency_ms)

            return SearchResponse(
                query=query,
                result=value,
                cache_info=CacheInfo.miss(key, entry, self._store.now()),
                latency_ms=latency_ms,
            )

    async def invalidate(self, query: str) -> bool:
        """
        Drop cached entry for query.

        Args:
            query: Query text

        Returns:
            True if an entry was removed

        Raises:
            InvalidQueryError: If query is empty or malformed
            CacheUnavailableError: If the store cannot be written
        """
        self._validator.validate_or_raise(query)
        key = self.cache_key(query)
        removed = await self._store.delete(key)
        logger.info("Cache entry invalidated", key=key, removed=removed)
        return removed

    async def get_stats(
        self, window_seconds: Optional[float] = None, top_n: Optional[int] = None
    ) -> AnalyticsSummary:
        """
        Get lookup statistics.

        Args:
            window_seconds: Window length (None = all records)
            top_n: Number of top queries

        Returns:
            Analytics summary
        """
        return await self._recorder.summary(window_seconds=window_seconds, top_n=top_n)

    async def clear_cache(self) -> int:
        """
        Remove all cache entries.

        Returns:
            Number of entries removed

        Raises:
            CacheUnavailableError: If the store cannot be cleared
        """
        count = await self._store.clear()
        logger.info("Cache cleared", count=count)
        return count

    async def reset_stats(self) -> int:
        """
        Clear all analytics records.

        Returns:
            Number of records removed
        """
        return await self._recorder.reset()

    async def cache_size(self) -> int:
        """Get number of stored entries."""
        return await self._store.size()

    async def health_check(self) -> bool:
        """Check the cache store is reachable."""
        return await self._store.ping()

    async def close(self) -> None:
        """Release store, recorder and provider resources."""
        await self._store.close()
        await self._recorder.close()
        if self._provider is not None:
            await self._provider.close()

    def _resolve_ttl(self, ttl_seconds: Optional[float]) -> float:
        if ttl_seconds is None:
            return self._default_ttl
        if ttl_seconds <= 0:
            raise ValidationError("ttl_seconds must be positive")
        return float(ttl_seconds)

    def _lock_for(self, key: str) -> asyncio.Lock:
        lock = self._key_locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._key_locks[key] = lock
        return lock

    async def _read_cache(self, key: str) -> Optional[CacheEntry]:
        try:
            return await self._store.get(key)
        except CacheError as e:
            log_error(e, "cache_read", key=key)
            return None

    async def _write_cache(
        self, key: str, query: str, value: Any, ttl: float
    ) -> Optional[CacheEntry]:
        try:
            return await self._store.put(key, query, value, ttl)
        except CacheError as e:
            log_error(e, "cache_write", key=key)
            return None

    async def _serve_hit(
        self, query: str, entry: CacheEntry, start_time: float
    ) -> SearchResponse:
        latency_ms = self._elapsed_ms(start_time)
        log_cache_hit(query, entry.key)
        await self._recorder.record(LookupOutcome.HIT, query, latency_ms)

        return SearchResponse(
            query=query,
            result=entry.value,
            cache_info=CacheInfo.hit(entry, self._store.now()),
            latency_ms=latency_ms,
        )

    async def _search_or_record_error(self, query: str, start_time: float) -> Any:
        if self._provider is None:
            raise ConfigurationError("No search provider configured")

        try:
            value = await self._retry.execute(
                lambda: self._timeout.execute(lambda: self._provider.search(query))
            )
        except SearchFailedError as e:
            await self._record_error(query, start_time, e)
            raise
        except Exception as e:
            await self._record_error(query, start_time, e)
            raise SearchFailedError(
                f"Search via {self._provider.get_name()} failed: {e}"
            ) from e

        log_search_call(self._provider.get_name(), query, self._elapsed_ms(start_time))
        return value

    async def _record_error(
        self, query: str, start_time: float, error: Exception
    ) -> None:
        log_error(error, "search", query=query[:100])
        await self._recorder.record(
            LookupOutcome.ERROR, query, self._elapsed_ms(start_time)
        )

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        return (time.perf_counter() - start_time) * 1000
