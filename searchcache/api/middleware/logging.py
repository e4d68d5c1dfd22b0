"""
Request logging middleware.

Binds a request ID into the structlog context so every event logged while
serving a request (cache hits, misses, search calls) carries it.

Sandi Metz Principles:
- Single Responsibility: Request correlation and timing
- Non-intrusive: Only adds the X-Request-ID header
- Configurable: Excluded paths and slow threshold
"""

import time
import uuid
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from searchcache.utils.logger import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@dataclass
class LoggingConfig:
    """Request logging settings."""

    enabled: bool = True
    log_headers: bool = False
    excluded_paths: List[str] = field(default_factory=lambda: ["/health", "/ready"])
    slow_request_threshold_ms: float = 1000.0

    def is_excluded(self, path: str) -> bool:
        """Check if path is skipped."""
        return not self.enabled or path in self.excluded_paths


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log one start and one completion event per request.

    A caller-supplied X-Request-ID is reused, otherwise a short one is
    generated. Requests slower than the threshold are logged as warnings.
    """

    def __init__(self, app, config: Optional[LoggingConfig] = None):
        super().__init__(app)
        self._config = config or LoggingConfig()

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]

        if self._config.is_excluded(request.url.path):
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            response = await self._timed(request, call_next)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    async def _timed(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        extra = {"headers": dict(request.headers)} if self._config.log_headers else {}
        logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
            query=str(request.query_params) or None,
            client=request.client.host if request.client else "unknown",
            **extra,
        )

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error("Request failed", duration_ms=_since(start), error=str(e))
            raise

        duration_ms = _since(start)
        # Misses wait on the external search, so slow requests are expected there
        if duration_ms > self._config.slow_request_threshold_ms:
            logger.warning(
                "Slow request", status=response.status_code, duration_ms=duration_ms
            )
        else:
            logger.info(
                "Request completed", status=response.status_code, duration_ms=duration_ms
            )
        return response


def _since(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


default_logging_config = LoggingConfig(slow_request_threshold_ms=5000.0)
