"""
Search timeout handler.

Sandi Metz Principles:
- Single Responsibility: Handle request timeouts
- Small methods: Each method < 10 lines
- Clear naming: Self-documenting code
"""

import asyncio
from typing import Awaitable, Callable, TypeVar

from searchcache.exceptions import SearchTimeoutError
from searchcache.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class TimeoutHandler:
    """
    Handler for managing search timeouts.

    Wraps async operations with timeout protection.
    """

    def __init__(self, timeout_seconds: float = 60.0):
        """
        Initialize timeout handler.

        Args:
            timeout_seconds: Timeout in seconds (default: 60)
        """
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        self._timeout_seconds = timeout_seconds

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        timeout_seconds: float | None = None,
    ) -> T:
        """
        Execute operation with timeout.

        Args:
            operation: Async function to execute
            timeout_seconds: Optional override timeout

        Returns:
            Operation result

        Raises:
            SearchTimeoutError: If operation times out
        """
        timeout = timeout_seconds or self._timeout_seconds

        try:
            return await asyncio.wait_for(operation(), timeout=timeout)
        except asyncio.TimeoutError as e:
            logger.error("Search timeout", timeout=timeout)
            raise SearchTimeoutError(
                f"Search timed out after {timeout} seconds"
            ) from e

    def get_timeout(self) -> float:
        """
        Get configured timeout value.

        Returns:
            Timeout in seconds
        """
        return self._timeout_seconds
