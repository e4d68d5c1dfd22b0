"""
Structured logging configuration.

Following Sandi Metz principles:
- Single Responsibility: Logging setup and configuration
- Small functions: Each setup step isolated
- Clear naming: Descriptive function names
"""

import logging
import sys
from typing import Any

import structlog


def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.KeyValueRenderer(
                key_order=["timestamp", "level", "event", "logger"]
            ),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structured logger
    """
    return structlog.get_logger(name)


def log_cache_hit(query: str, key: str, **kwargs: Any) -> None:
    """
    Log cache hit.

    Args:
        query: Query text
        key: Cache key
        **kwargs: Additional context
    """
    logger = get_logger("cache")
    logger.info("cache_hit", query=query[:100], key=key, **kwargs)


def log_cache_miss(query: str, key: str, **kwargs: Any) -> None:
    """
    Log cache miss.

    Args:
        query: Query text
        key: Cache key
        **kwargs: Additional context
    """
    logger = get_logger("cache")
    logger.info("cache_miss", query=query[:100], key=key, **kwargs)


def log_search_call(provider: str, query: str, latency_ms: float, **kwargs: Any) -> None:
    """
    Log external search call.

    Args:
        provider: Search provider name
        query: Query text
        latency_ms: Call latency in milliseconds
        **kwargs: Additional context
    """
    logger = get_logger("search")
    logger.info(
        "search_call",
        provider=provider,
        query=query[:100],
        latency_ms=round(latency_ms, 2),
        **kwargs,
    )


def log_error(error: Exception, context: str, **kwargs: Any) -> None:
    """
    Log error with context.

    Args:
        error: Exception that occurred
        context: Error context
        **kwargs: Additional context
    """
    logger = get_logger("error")
    logger.error(
        "error_occurred",
        error=str(error),
        error_type=type(error).__name__,
        context=context,
        **kwargs
    )
