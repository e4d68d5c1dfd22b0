"""
Lookup analytics recorder.

Sandi Metz Principles:
- Single Responsibility: Record outcomes and aggregate them
- Small methods: Aggregation is a pure function
- Dependency Injection: Clock injected
"""

import asyncio
import time
from collections import Counter, deque
from typing import Deque, Iterable, List, Optional, Union

from searchcache.cache.base import Clock
from searchcache.exceptions import ValidationError
from searchcache.models.analytics import (
    AnalyticsRecord,
    AnalyticsSummary,
    LookupOutcome,
    QueryFrequency,
)
from searchcache.utils.hasher import normalize_query
from searchcache.utils.logger import get_logger

logger = get_logger(__name__)


def summarize_records(
    records: Iterable[AnalyticsRecord],
    now: float,
    window_seconds: Optional[float] = None,
    top_n: int = 10,
) -> AnalyticsSummary:
    """
    Aggregate records into a summary.

    Args:
        records: Recorded lookups
        now: Current time (epoch seconds)
        window_seconds: Only count records newer than now - window_seconds
        top_n: Number of top queries to include

    Returns:
        Analytics summary
    """
    if window_seconds is not None:
        cutoff = now - window_seconds
        records = [r for r in records if r.timestamp >= cutoff]

    hit_latencies: List[float] = []
    miss_latencies: List[float] = []
    errors = 0
    frequency: Counter = Counter()
    last_seen = {}

    for record in records:
        if record.outcome == LookupOutcome.HIT:
            hit_latencies.append(record.latency_ms)
        elif record.outcome == LookupOutcome.MISS:
            miss_latencies.append(record.latency_ms)
        else:
            errors += 1

        normalized = normalize_query(record.query)
        frequency[normalized] += 1
        last_seen[normalized] = max(last_seen.get(normalized, 0.0), record.timestamp)

    ranked = sorted(frequency.items(), key=lambda kv: (-kv[1], -last_seen[kv[0]]))
    top_queries = [QueryFrequency(query=q, count=c) for q, c in ranked[:top_n]]

    return AnalyticsSummary.create(
        hits=len(hit_latencies),
        misses=len(miss_latencies),
        errors=errors,
        top_queries=top_queries,
        avg_hit_latency_ms=_mean(hit_latencies),
        avg_miss_latency_ms=_mean(miss_latencies),
        window_seconds=window_seconds,
    )


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


class AnalyticsRecorder:
    """
    Append-only in-memory record of lookup outcomes.

    Keeps at most max_records records; the oldest are dropped first.
    """

    def __init__(
        self,
        max_records: int = 10000,
        top_queries_limit: int = 10,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize recorder.

        Args:
            max_records: Records kept for summaries
            top_queries_limit: Default number of top queries in summaries
            clock: Time source in epoch seconds
        """
        self._max_records = max_records
        self._top_queries_limit = top_queries_limit
        self._clock = clock or time.time
        self._records: Deque[AnalyticsRecord] = deque(maxlen=max_records)
        self._lock = asyncio.Lock()

    async def record(
        self,
        outcome: Union[LookupOutcome, str],
        query: str,
        latency_ms: float = 0.0,
    ) -> AnalyticsRecord:
        """
        Append a lookup outcome.

        Args:
            outcome: hit, miss or error
            query: Original query text
            latency_ms: Lookup latency

        Returns:
            Recorded entry
        """
        record = AnalyticsRecord(
            query=query,
            outcome=LookupOutcome(outcome),
            timestamp=self._clock(),
            latency_ms=max(0.0, latency_ms),
        )

        async with self._lock:
            await self._ensure_loaded()
            self._records.append(record)
            await self._append(record)

        logger.debug("Lookup recorded", outcome=record.outcome.value)
        return record

    async def summary(
        self, window_seconds: Optional[float] = None, top_n: Optional[int] = None
    ) -> AnalyticsSummary:
        """
        Summarize recorded lookups.

        Args:
            window_seconds: Window length in seconds (None = all records)
            top_n: Number of top queries (defaults to configured limit)

        Returns:
            Analytics summary

        Raises:
            ValidationError: If window or top_n is not positive
        """
        if window_seconds is not None and window_seconds <= 0:
            raise ValidationError("window_seconds must be positive")
        if top_n is not None and top_n < 1:
            raise ValidationError("top_n must be at least 1")

        async with self._lock:
            await self._ensure_loaded()
            records = list(self._records)

        return summarize_records(
            records,
            now=self._clock(),
            window_seconds=window_seconds,
            top_n=top_n or self._top_queries_limit,
        )

    async def reset(self) -> int:
        """
        Clear all records.

        Returns:
            Number of records removed
        """
        async with self._lock:
            await self._ensure_loaded()
            count = len(self._records)
            self._records.clear()
            await self._truncate()

        logger.info("Analytics reset", count=count)
        return count

    async def records(self) -> List[AnalyticsRecord]:
        """Get snapshot of recorded lookups, oldest first."""
        async with self._lock:
            await self._ensure_loaded()
            return list(self._records)

    async def close(self) -> None:
        """Release recorder resources."""
        return None

    # Storage hooks, called with the lock held.

    async def _ensure_loaded(self) -> None:
        return None

    async def _append(self, record: AnalyticsRecord) -> None:
        return None

    async def _truncate(self) -> None:
        return None
