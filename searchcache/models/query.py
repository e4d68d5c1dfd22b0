"""
Search request models.

Sandi Metz Principles:
- Small classes focused on data validation
- Clear property names
- Single responsibility per model
"""

from typing import Optional

from pydantic import BaseModel, Field


class SearchRequest(BaseModel):
    """Incoming search request."""

    # Content checks happen in the service so that empty queries surface as
    # INVALID_QUERY rather than a generic validation failure.
    query: str = Field(
        ...,
        description="Search query text",
        examples=["python asyncio timeout best practices"],
    )

    ttl_seconds: Optional[float] = Field(
        None, gt=0, description="TTL override in seconds (defaults to config)"
    )

    force_refresh: bool = Field(
        default=False, description="Skip cache lookup and refresh the entry"
    )


class InvalidateRequest(BaseModel):
    """Request to drop a single cached query."""

    query: str = Field(..., description="Query whose cache entry is removed")
