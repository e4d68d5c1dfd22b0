"""
Query pre-processing pipeline.
"""

from searchcache.pipeline.query_validator import QueryValidator, ValidationResult

__all__ = [
    "QueryValidator",
    "ValidationResult",
]
