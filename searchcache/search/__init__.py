"""
External search collaborators and call protection (timeout, retry).
"""

from searchcache.search.callable_provider import CallableSearchProvider
from searchcache.search.command_provider import CommandSearchProvider
from searchcache.search.factory import create_search_provider
from searchcache.search.provider import BaseSearchProvider
from searchcache.search.retry import RetryConfig, RetryHandler
from searchcache.search.timeout_handler import TimeoutHandler

__all__ = [
    "BaseSearchProvider",
    "CallableSearchProvider",
    "CommandSearchProvider",
    "RetryConfig",
    "RetryHandler",
    "TimeoutHandler",
    "create_search_provider",
]
