"""
Cache entry models.

Sandi Metz Principles:
- Single Responsibility: Cache data structure
- Clear naming: Descriptive fields
- Validity is computed against a caller-supplied clock
"""

import time
from typing import Any

from pydantic import BaseModel, Field


class CacheEntry(BaseModel):
    """Cache entry for storing search results."""

    key: str = Field(..., min_length=1, description="Hash-derived cache key")
    query: str = Field(..., description="Original query text")
    value: Any = Field(..., description="Cached search result payload")
    created_at: float = Field(
        default_factory=time.time, description="Insertion time (epoch seconds)"
    )
    ttl_seconds: float = Field(..., gt=0, description="Time-to-live in seconds")

    @property
    def expires_at(self) -> float:
        """Get expiry time (epoch seconds)."""
        return self.created_at + self.ttl_seconds

    def is_valid(self, now: float) -> bool:
        """Check whether entry is still within its TTL."""
        return now - self.created_at < self.ttl_seconds

    def is_stale(self, now: float) -> bool:
        """Check whether entry has outlived its TTL."""
        return not self.is_valid(now)

    def age_seconds(self, now: float) -> float:
        """Calculate entry age in seconds."""
        return max(0.0, now - self.created_at)

    def remaining_seconds(self, now: float) -> float:
        """Calculate seconds left before expiry."""
        return max(0.0, self.expires_at - now)
