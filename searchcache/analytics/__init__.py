"""
Lookup analytics.

Records cache hits, misses and search errors, and summarizes them.
"""

from searchcache.analytics.file_recorder import FileAnalyticsRecorder
from searchcache.analytics.recorder import AnalyticsRecorder, summarize_records

__all__ = [
    "AnalyticsRecorder",
    "FileAnalyticsRecorder",
    "summarize_records",
]
