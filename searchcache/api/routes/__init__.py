"""
API Routes module.

Contains all API endpoint routers.
"""

from searchcache.api.routes import cache, health, search, stats

__all__ = ["cache", "health", "search", "stats"]
