"""Test analytics models."""

import pytest
from pydantic import ValidationError

from searchcache.models.analytics import (
    AnalyticsRecord,
    AnalyticsSummary,
    LookupOutcome,
    QueryFrequency,
)


class TestAnalyticsSummary:
    """Test analytics summary model."""

    def test_should_create_with_factory_method(self):
        """Test summary creation with derived fields."""
        summary = AnalyticsSummary.create(
            hits=3,
            misses=1,
            errors=2,
            top_queries=[QueryFrequency(query="python", count=4)],
            avg_hit_latency_ms=1.0,
            avg_miss_latency_ms=250.0,
        )

        assert summary.total_lookups == 4
        assert summary.hit_rate == 0.75
        assert summary.hit_rate_percent == 75.0
        assert summary.errors == 2
        assert summary.searches_saved == 3
        assert summary.estimated_time_saved_ms == 750.0

    def test_should_exclude_errors_from_hit_rate(self):
        """Test errors do not dilute the hit rate."""
        summary = AnalyticsSummary.create(hits=1, misses=1, errors=10, top_queries=[])
        assert summary.hit_rate == 0.5

    def test_should_create_empty_summary(self):
        """Test empty summary."""
        summary = AnalyticsSummary.empty()

        assert summary.total_lookups == 0
        assert summary.hit_rate == 0.0
        assert summary.top_queries == []
        assert summary.cache_efficiency == "very_low"

    def test_should_reject_inconsistent_totals(self):
        """Test consistency validator."""
        with pytest.raises(ValidationError):
            AnalyticsSummary(
                hits=1, misses=1, errors=0, total_lookups=5, hit_rate=0.5
            )

    @pytest.mark.parametrize(
        "hits,misses,rating",
        [(9, 1, "excellent"), (7, 3, "good"), (5, 5, "moderate"), (1, 9, "very_low")],
    )
    def test_should_rate_cache_efficiency(self, hits, misses, rating):
        """Test efficiency rating thresholds."""
        summary = AnalyticsSummary.create(
            hits=hits, misses=misses, errors=0, top_queries=[]
        )
        assert summary.cache_efficiency == rating


class TestAnalyticsRecord:
    """Test analytics record model."""

    def test_should_accept_string_outcome(self):
        """Test outcome coercion."""
        record = AnalyticsRecord(query="q", outcome="error", timestamp=1.0)
        assert record.outcome is LookupOutcome.ERROR

    def test_should_reject_unknown_outcome(self):
        """Test outcome validation."""
        with pytest.raises(ValidationError):
            AnalyticsRecord(query="q", outcome="partial", timestamp=1.0)
