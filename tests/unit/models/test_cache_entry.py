"""Test cache entry model."""

import pytest
from pydantic import ValidationError

from searchcache.models.cache_entry import CacheEntry


@pytest.fixture
def entry():
    """Create entry stored at t=1000 with a 60s TTL."""
    return CacheEntry(
        key="search:abc",
        query="What is Python?",
        value={"results": ["python.org"]},
        created_at=1000.0,
        ttl_seconds=60,
    )


class TestCacheEntry:
    """Test cache entry model."""

    def test_should_be_valid_within_ttl(self, entry):
        """Test validity before expiry."""
        assert entry.is_valid(1000.0)
        assert entry.is_valid(1059.999)

    def test_should_be_stale_at_ttl_boundary(self, entry):
        """Test entry expires exactly at created_at + ttl."""
        assert entry.is_stale(1060.0)
        assert not entry.is_valid(1060.0)

    def test_should_compute_age_and_remaining(self, entry):
        """Test derived timings."""
        assert entry.expires_at == 1060.0
        assert entry.age_seconds(1015.0) == 15.0
        assert entry.remaining_seconds(1015.0) == 45.0
        assert entry.remaining_seconds(2000.0) == 0.0

    def test_should_reject_non_positive_ttl(self):
        """Test TTL validation."""
        with pytest.raises(ValidationError):
            CacheEntry(key="k", query="q", value="v", ttl_seconds=0)

    def test_should_round_trip_json(self, entry):
        """Test entry serialization used by persistent stores."""
        restored = CacheEntry.model_validate_json(entry.model_dump_json())
        assert restored == entry
