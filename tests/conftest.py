"""
Pytest configuration and fixtures.

Provides common fixtures for testing.
"""

from unittest.mock import AsyncMock

import pytest

from searchcache.analytics.recorder import AnalyticsRecorder
from searchcache.cache.memory_store import InMemoryCacheStore
from searchcache.config import AppConfig
from searchcache.search.callable_provider import CallableSearchProvider
from searchcache.services.search_service import SearchService


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """
    Create fake clock.

    Returns:
        Clock starting at a fixed epoch time
    """
    return FakeClock()


@pytest.fixture
def test_config(tmp_path) -> AppConfig:
    """
    Create test configuration.

    Returns:
        Test configuration instance
    """
    return AppConfig(
        app_env="development",
        cache_backend="memory",
        cache_dir=str(tmp_path / "cache"),
        analytics_backend="memory",
        search_command="",
    )


@pytest.fixture
def memory_store(clock) -> InMemoryCacheStore:
    """Create in-memory store on the fake clock."""
    return InMemoryCacheStore(clock=clock)


@pytest.fixture
def recorder(clock) -> AnalyticsRecorder:
    """Create in-memory recorder on the fake clock."""
    return AnalyticsRecorder(clock=clock)


@pytest.fixture
def search_backend() -> AsyncMock:
    """
    Mock external search.

    Returns:
        AsyncMock answering "result for <query>"
    """
    return AsyncMock(side_effect=lambda query: f"result for {query}")


@pytest.fixture
def search_service(memory_store, recorder, search_backend) -> SearchService:
    """Create search service over the in-memory store and mocked search."""
    return SearchService(
        store=memory_store,
        recorder=recorder,
        provider=CallableSearchProvider(search_backend, name="mock"),
        default_ttl_seconds=3600,
    )


@pytest.fixture
def sample_query() -> str:
    """
    Sample query for testing.

    Returns:
        Sample query text
    """
    return "Python asyncio timeout best practices"
