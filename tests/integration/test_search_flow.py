"""
Integration tests for the search lookup flow.

Tests the full lookup path on real time:
- File cache store
- File analytics recorder
- TTL expiry
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from searchcache.analytics.file_recorder import FileAnalyticsRecorder
from searchcache.cache.file_store import FileCacheStore
from searchcache.search.callable_provider import CallableSearchProvider
from searchcache.services.search_service import SearchService

pytestmark = pytest.mark.integration


class TestSearchFlow:
    """Integration tests for cache expiry on the wall clock."""

    @pytest.fixture
    def backend(self):
        """Create mock search backend."""
        return AsyncMock(side_effect=lambda query: {"query": query, "results": [1]})

    @pytest.fixture
    def service(self, tmp_path, backend):
        """Create service over file backends with a one second TTL."""
        return SearchService(
            store=FileCacheStore(tmp_path / "cache"),
            recorder=FileAnalyticsRecorder(tmp_path / "cache" / "analytics.jsonl"),
            provider=CallableSearchProvider(backend),
            default_ttl_seconds=1,
        )

    @pytest.mark.asyncio
    async def test_should_expire_entry_after_ttl(self, service, backend):
        """Test hit within TTL, miss after it."""
        first = await service.lookup("python packaging")
        second = await service.lookup("python packaging")

        await asyncio.sleep(2)
        third = await service.lookup("python packaging")

        assert first.cache_info.cache_hit is False
        assert second.cache_info.cache_hit is True
        assert second.result == {"query": "python packaging", "results": [1]}
        assert third.cache_info.cache_hit is False
        assert backend.call_count == 2

        summary = await service.get_stats()
        assert summary.hits == 1
        assert summary.misses == 2

    @pytest.mark.asyncio
    async def test_should_share_cache_between_services(self, tmp_path, service, backend):
        """Test a second process reuses stored entries and history."""
        await service.lookup("python packaging", ttl_seconds=60)

        other = SearchService(
            store=FileCacheStore(tmp_path / "cache"),
            recorder=FileAnalyticsRecorder(tmp_path / "cache" / "analytics.jsonl"),
            provider=CallableSearchProvider(AsyncMock()),
            default_ttl_seconds=60,
        )
        response = await other.lookup("Python   Packaging")

        assert response.cache_info.cache_hit is True
        assert (await other.get_stats()).total_lookups == 2
