"""
Callable-backed search provider.

Wraps a plain function or coroutine function so library users can put the
cache in front of any search client.
"""

import asyncio
import inspect
from typing import Any, Callable

from searchcache.exceptions import SearchFailedError
from searchcache.search.provider import BaseSearchProvider


class CallableSearchProvider(BaseSearchProvider):
    """Search provider delegating to a callable."""

    def __init__(self, func: Callable[[str], Any], name: str = "callable"):
        self._func = func
        self._name = name
        self._is_async = inspect.iscoroutinefunction(func)

    async def search(self, query: str) -> Any:
        try:
            if self._is_async:
                return await self._func(query)
            # Sync callables run in a worker thread to keep the loop free.
            result = await asyncio.to_thread(self._func, query)
            if inspect.isawaitable(result):
                return await result
            return result
        except SearchFailedError:
            raise
        except Exception as e:
            raise SearchFailedError(
                self._build_error_message(e, f"Search via {self._name} failed")
            ) from e

    def get_name(self) -> str:
        return self._name
