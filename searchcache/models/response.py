"""
Search response models.

Sandi Metz Principles:
- Small classes with clear purpose
- Immutable response data
- Clear naming conventions
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from searchcache.models.cache_entry import CacheEntry


class CacheInfo(BaseModel):
    """Cache lookup information."""

    cache_hit: bool = Field(..., description="Whether cache was hit")
    source: Literal["cache", "search"] = Field(..., description="Where result came from")
    cache_key: str = Field(..., description="Cache key for the query")
    age_seconds: Optional[float] = Field(None, ge=0.0, description="Entry age")
    expires_in_seconds: Optional[float] = Field(
        None, ge=0.0, description="Seconds until entry expires"
    )
    stored: bool = Field(default=False, description="Whether result was cached")

    @classmethod
    def hit(cls, entry: CacheEntry, now: float) -> "CacheInfo":
        """Create cache hit info."""
        return cls(
            cache_hit=True,
            source="cache",
            cache_key=entry.key,
            age_seconds=round(entry.age_seconds(now), 3),
            expires_in_seconds=round(entry.remaining_seconds(now), 3),
            stored=True,
        )

    @classmethod
    def miss(cls, key: str, entry: Optional[CacheEntry], now: float) -> "CacheInfo":
        """Create cache miss info (entry is None when storing failed)."""
        if entry is None:
            return cls(cache_hit=False, source="search", cache_key=key)
        return cls(
            cache_hit=False,
            source="search",
            cache_key=key,
            age_seconds=0.0,
            expires_in_seconds=round(entry.remaining_seconds(now), 3),
            stored=True,
        )


class SearchResponse(BaseModel):
    """Search lookup response."""

    query: str = Field(..., description="Query as submitted")
    result: Any = Field(..., description="Search result payload")
    cache_info: CacheInfo = Field(..., description="Cache information")
    latency_ms: float = Field(..., ge=0, description="Lookup latency in milliseconds")

    @property
    def from_cache(self) -> bool:
        """Check if response came from cache."""
        return self.cache_info.cache_hit


class ClearResponse(BaseModel):
    """Result of a cache/stats reset."""

    cleared_entries: int = Field(..., ge=0, description="Cache entries removed")
    cleared_records: int = Field(..., ge=0, description="Analytics records removed")


class InvalidateResponse(BaseModel):
    """Result of invalidating a single query."""

    cache_key: str = Field(..., description="Cache key for the query")
    removed: bool = Field(..., description="Whether an entry was removed")


class CacheStatusResponse(BaseModel):
    """Cache store status."""

    backend: str = Field(..., description="Cache store backend")
    entries: int = Field(..., ge=0, description="Stored entries (stale included)")
    default_ttl_seconds: float = Field(..., gt=0, description="Default TTL")


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "unhealthy"] = Field(..., description="Service status")
    environment: str = Field(..., description="Environment name")
    version: str = Field(..., description="Application version")
