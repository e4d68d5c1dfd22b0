"""
Error response models.

Sandi Metz Principles:
- Small classes with clear purpose
- Consistent error handling
- Clear naming conventions
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Standard error codes for API responses."""

    INVALID_QUERY = "INVALID_QUERY"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SEARCH_FAILED = "SEARCH_FAILED"
    SEARCH_TIMEOUT = "SEARCH_TIMEOUT"
    CACHE_UNAVAILABLE = "CACHE_UNAVAILABLE"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorResponse(BaseModel):
    """Standard error response format."""

    detail: str = Field(..., description="Error message describing what went wrong")
    error_code: ErrorCode = Field(..., description="Standard error code")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Error timestamp (ISO 8601)",
    )

    @classmethod
    def invalid_query(cls, detail: str = "Query text is empty or invalid") -> "ErrorResponse":
        """Create invalid query error."""
        return cls(detail=detail, error_code=ErrorCode.INVALID_QUERY)

    @classmethod
    def validation_error(cls, detail: str) -> "ErrorResponse":
        """Create validation error."""
        return cls(detail=detail, error_code=ErrorCode.VALIDATION_ERROR)

    @classmethod
    def search_failed(cls, detail: Optional[str] = None) -> "ErrorResponse":
        """Create search failure error."""
        return cls(
            detail=detail or "External search failed",
            error_code=ErrorCode.SEARCH_FAILED,
        )

    @classmethod
    def search_timeout(cls, detail: Optional[str] = None) -> "ErrorResponse":
        """Create search timeout error."""
        return cls(
            detail=detail or "External search timed out",
            error_code=ErrorCode.SEARCH_TIMEOUT,
        )

    @classmethod
    def cache_unavailable(cls, detail: Optional[str] = None) -> "ErrorResponse":
        """Create cache unavailable error."""
        return cls(
            detail=detail or "Cache storage unavailable",
            error_code=ErrorCode.CACHE_UNAVAILABLE,
        )

    @classmethod
    def service_unavailable(cls, service: str) -> "ErrorResponse":
        """Create service unavailable error."""
        return cls(
            detail=f"Required service unavailable: {service}",
            error_code=ErrorCode.SERVICE_UNAVAILABLE,
        )

    @classmethod
    def internal_error(cls, detail: Optional[str] = None) -> "ErrorResponse":
        """Create internal server error."""
        return cls(
            detail=detail or "Internal server error",
            error_code=ErrorCode.INTERNAL_ERROR,
        )
