"""
Cache key generation utilities.

Sandi Metz Principles:
- Single Responsibility: Hash generation
- Small functions: Each does one thing
- Pure functions: No side effects
"""

import hashlib
import re
import unicodedata

DEFAULT_NAMESPACE = "search"

_WHITESPACE = re.compile(r"\s+")


def normalize_query(query: str) -> str:
    """
    Normalize query for comparison.

    Applies NFKC, case-folding, trimming and whitespace collapsing.

    Args:
        query: Query text

    Returns:
        Normalized query
    """
    text = unicodedata.normalize("NFKC", query)
    text = text.casefold()
    return _WHITESPACE.sub(" ", text).strip()


def hash_query(query: str) -> str:
    """
    Hash normalized query.

    Args:
        query: Query text

    Returns:
        SHA-256 hex digest of the normalized query
    """
    normalized = normalize_query(query)
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


def generate_cache_key(query: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    """
    Generate cache key for query.

    Args:
        query: Query text
        namespace: Key prefix

    Returns:
        Cache key (namespace:sha256hash)
    """
    return f"{namespace}:{hash_query(query)}"


def key_digest(key: str) -> str:
    """
    Strip the namespace from a cache key.

    Args:
        key: Cache key

    Returns:
        Hash part of the key
    """
    return key.rsplit(":", 1)[-1]
