"""
Lookup analytics models.

Sandi Metz Principles:
- Small classes with clear purpose
- Computed properties for derived metrics
- Clear naming conventions
"""

import time
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class LookupOutcome(str, Enum):
    """Outcome of a single cache lookup."""

    HIT = "hit"
    MISS = "miss"
    ERROR = "error"


class AnalyticsRecord(BaseModel):
    """Single recorded lookup."""

    query: str = Field(..., description="Original query text")
    outcome: LookupOutcome = Field(..., description="Lookup outcome")
    timestamp: float = Field(
        default_factory=time.time, description="Lookup time (epoch seconds)"
    )
    latency_ms: float = Field(default=0.0, ge=0.0, description="Lookup latency")


class QueryFrequency(BaseModel):
    """Query with its lookup count."""

    query: str = Field(..., description="Normalized query text")
    count: int = Field(..., ge=1, description="Number of lookups")


class AnalyticsSummary(BaseModel):
    """Aggregated lookup statistics for a time window."""

    window_seconds: Optional[float] = Field(
        None, gt=0, description="Window length (None = all records)"
    )
    hits: int = Field(..., ge=0, description="Cache hits")
    misses: int = Field(..., ge=0, description="Cache misses")
    errors: int = Field(..., ge=0, description="Failed searches")
    total_lookups: int = Field(..., ge=0, description="Hits plus misses")
    hit_rate: float = Field(..., ge=0.0, le=1.0, description="hits / (hits + misses)")
    top_queries: List[QueryFrequency] = Field(
        default_factory=list, description="Most frequent queries"
    )
    avg_hit_latency_ms: float = Field(default=0.0, ge=0.0)
    avg_miss_latency_ms: float = Field(default=0.0, ge=0.0)
    estimated_time_saved_ms: float = Field(
        default=0.0, ge=0.0, description="hits * average miss latency"
    )

    @model_validator(mode="after")
    def validate_summary_consistency(self) -> "AnalyticsSummary":
        """Validate totals match outcome counts."""
        if self.total_lookups != self.hits + self.misses:
            raise ValueError(
                f"total_lookups ({self.total_lookups}) must equal hits "
                f"({self.hits}) + misses ({self.misses})"
            )
        return self

    @classmethod
    def create(
        cls,
        hits: int,
        misses: int,
        errors: int,
        top_queries: List[QueryFrequency],
        avg_hit_latency_ms: float = 0.0,
        avg_miss_latency_ms: float = 0.0,
        window_seconds: Optional[float] = None,
    ) -> "AnalyticsSummary":
        """
        Create summary with derived hit rate and savings.

        Args:
            hits: Cache hits
            misses: Cache misses
            errors: Failed searches
            top_queries: Most frequent queries
            avg_hit_latency_ms: Average hit latency
            avg_miss_latency_ms: Average miss latency
            window_seconds: Window the counts cover

        Returns:
            AnalyticsSummary instance
        """
        total = hits + misses
        hit_rate = hits / total if total > 0 else 0.0

        return cls(
            window_seconds=window_seconds,
            hits=hits,
            misses=misses,
            errors=errors,
            total_lookups=total,
            hit_rate=hit_rate,
            top_queries=top_queries,
            avg_hit_latency_ms=round(avg_hit_latency_ms, 2),
            avg_miss_latency_ms=round(avg_miss_latency_ms, 2),
            estimated_time_saved_ms=round(hits * avg_miss_latency_ms, 2),
        )

    @classmethod
    def empty(cls, window_seconds: Optional[float] = None) -> "AnalyticsSummary":
        """Create empty summary (no lookups recorded yet)."""
        return cls.create(
            hits=0, misses=0, errors=0, top_queries=[], window_seconds=window_seconds
        )

    @property
    def hit_rate_percent(self) -> float:
        """Get hit rate as a percentage."""
        return round(self.hit_rate * 100.0, 2)

    @property
    def searches_saved(self) -> int:
        """Get number of external searches avoided."""
        return self.hits

    @property
    def cache_efficiency(self) -> str:
        """Get human-readable cache efficiency rating."""
        if self.hit_rate >= 0.8:
            return "excellent"
        elif self.hit_rate >= 0.6:
            return "good"
        elif self.hit_rate >= 0.4:
            return "moderate"
        elif self.hit_rate >= 0.2:
            return "low"
        else:
            return "very_low"
