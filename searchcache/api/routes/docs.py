"""
API Documentation configuration.

OpenAPI tags and description for the SearchCache API.
"""

# API Tags metadata for OpenAPI documentation
TAGS_METADATA = [
    {
        "name": "health",
        "description": "Health check endpoints for monitoring service status.",
    },
    {
        "name": "search",
        "description": "Search lookups answered from cache or the external search agent.",
    },
    {
        "name": "stats",
        "description": "Hit/miss analytics, top queries and estimated savings.",
    },
    {
        "name": "cache",
        "description": "Cache management: status, clear and per-query invalidation.",
    },
]


API_DESCRIPTION = """
# SearchCache API

**TTL result cache** in front of an external web-search agent.

## Features

- **Content-addressed cache**: queries are normalized and hashed, so equivalent
  queries share one cache entry
- **TTL expiry**: entries are served for `CACHE_TTL_SECONDS` (default one hour)
- **Analytics**: every lookup is recorded as a hit, miss or error
- **Graceful degradation**: an unavailable cache store never fails a lookup

## Error Responses

```json
{
    "detail": {
        "detail": "Query cannot be empty",
        "error_code": "INVALID_QUERY",
        "timestamp": "2024-01-01T00:00:00Z"
    }
}
```

Error codes: `INVALID_QUERY`, `VALIDATION_ERROR`, `SEARCH_FAILED`,
`SEARCH_TIMEOUT`, `CACHE_UNAVAILABLE`, `SERVICE_UNAVAILABLE`, `INTERNAL_ERROR`.
"""
