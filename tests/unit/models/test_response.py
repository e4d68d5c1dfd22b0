"""Test response and error models."""

from searchcache.models.cache_entry import CacheEntry
from searchcache.models.error import ErrorCode, ErrorResponse
from searchcache.models.response import CacheInfo, SearchResponse


def make_entry() -> CacheEntry:
    return CacheEntry(
        key="search:abc", query="q", value="v", created_at=100.0, ttl_seconds=50
    )


class TestCacheInfo:
    """Test cache info factories."""

    def test_should_describe_hit(self):
        """Test hit info."""
        info = CacheInfo.hit(make_entry(), now=110.0)

        assert info.cache_hit is True
        assert info.source == "cache"
        assert info.age_seconds == 10.0
        assert info.expires_in_seconds == 40.0

    def test_should_describe_stored_miss(self):
        """Test miss info when the result was cached."""
        info = CacheInfo.miss("search:abc", make_entry(), now=100.0)

        assert info.cache_hit is False
        assert info.source == "search"
        assert info.stored is True
        assert info.expires_in_seconds == 50.0

    def test_should_describe_unstored_miss(self):
        """Test miss info when the store was unavailable."""
        info = CacheInfo.miss("search:abc", None, now=100.0)

        assert info.stored is False
        assert info.expires_in_seconds is None

    def test_response_should_report_cache_origin(self):
        """Test from_cache property."""
        response = SearchResponse(
            query="q",
            result="v",
            cache_info=CacheInfo.hit(make_entry(), now=101.0),
            latency_ms=0.4,
        )
        assert response.from_cache is True


class TestErrorResponse:
    """Test error response factories."""

    def test_should_build_invalid_query_error(self):
        """Test invalid query error."""
        error = ErrorResponse.invalid_query()
        assert error.error_code == ErrorCode.INVALID_QUERY
        assert "empty" in error.detail

    def test_should_build_search_errors(self):
        """Test search error codes."""
        assert ErrorResponse.search_failed().error_code == ErrorCode.SEARCH_FAILED
        assert ErrorResponse.search_timeout("slow").detail == "slow"

    def test_should_serialize_timestamp(self):
        """Test JSON serialization."""
        data = ErrorResponse.cache_unavailable().model_dump(mode="json")
        assert data["error_code"] == "CACHE_UNAVAILABLE"
        assert isinstance(data["timestamp"], str)
