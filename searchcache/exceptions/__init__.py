"""
Custom exceptions for the application.
"""


class AppError(Exception):
    """Base exception for application errors."""

    pass


class ValidationError(AppError):
    """Raised when validation fails."""

    pass


class InvalidQueryError(ValidationError):
    """Raised when a query is empty or malformed."""

    pass


class CacheError(AppError):
    """Raised when cache operations fail."""

    pass


class CacheUnavailableError(CacheError):
    """Raised when the cache storage layer cannot be read or written."""

    pass


class SearchFailedError(AppError):
    """Raised when the external search call fails."""

    pass


class SearchTimeoutError(SearchFailedError):
    """Raised when the external search call times out."""

    pass


class ConfigurationError(AppError):
    """Raised when configuration is invalid."""

    pass
