"""
Retry logic for search calls.

Sandi Metz Principles:
- Single Responsibility: Manage retry logic
- Small methods: Each method < 10 lines
- Dependency Injection: Configuration injected
"""

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Tuple, Type, TypeVar

from searchcache.exceptions import SearchFailedError
from searchcache.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class RetryConfig:
    """Retry configuration."""

    max_attempts: int = 1
    initial_delay: float = 1.0
    max_delay: float = 30.0
    exponential_base: float = 2.0
    retry_on: Tuple[Type[BaseException], ...] = field(
        default_factory=lambda: (SearchFailedError,)
    )


class RetryHandler:
    """
    Exponential backoff retry handler.

    Retries failed operations with increasing delays. With the default
    single attempt, failures propagate immediately.
    """

    def __init__(self, config: RetryConfig | None = None):
        """
        Initialize retry handler.

        Args:
            config: Retry configuration (uses defaults if None)
        """
        self._config = config or RetryConfig()
        if self._config.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    async def execute(self, func: Callable[[], Awaitable[T]]) -> T:
        """
        Execute function with retry logic.

        Args:
            func: Async function to execute

        Returns:
            Function result

        Raises:
            Exception: The last failure once all attempts are exhausted
        """
        for attempt in range(1, self._config.max_attempts + 1):
            try:
                return await func()
            except self._config.retry_on as e:
                if attempt == self._config.max_attempts:
                    if attempt > 1:
                        logger.error(f"All {attempt} attempts failed", error=str(e))
                    raise

                delay = self.calculate_delay(attempt)
                logger.warning(
                    f"Attempt {attempt} failed, retrying in {delay:.2f}s", error=str(e)
                )
                await asyncio.sleep(delay)

        raise AssertionError("unreachable")

    def calculate_delay(self, attempt: int) -> float:
        """
        Calculate delay for attempt using exponential backoff.

        Args:
            attempt: Current attempt number (1-indexed)

        Returns:
            Delay in seconds
        """
        delay = self._config.initial_delay * (
            self._config.exponential_base ** (attempt - 1)
        )
        return min(delay, self._config.max_delay)
