"""SearchCache Metrics Collector - Read-Through Cache Metrics.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, Dict, List

logger = logging.getLogger(__name__)


@dataclass
class CacheMetrics:
    """Cache metrics snapshot.

    Attributes:
        hits: Calls served from a valid snapshot
        misses: Calls that ran the fetch
        waits: Calls that joined an in-flight fetch
        fetches: Successful fetches
        fetch_failures: Failed fetches
        entry_count: Published entries
        fetch_latency_avg_ms: Average fetch latency
        fetch_latency_p99_ms: P99 fetch latency
        ops_per_second: get() calls per second
    """

    hits: int = 0
    misses: int = 0
    waits: int = 0
    fetches: int = 0
    fetch_failures: int = 0
    entry_count: int = 0
    fetch_latency_avg_ms: float = 0.0
    fetch_latency_p99_ms: float = 0.0
    ops_per_second: float = 0.0

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate."""
        total = self.hits + self.misses + self.waits
        return self.hits / total if total > 0 else 0.0

    @property
    def total_ops(self) -> int:
        """Get total get() calls."""
        return self.hits + self.misses + self.waits

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "waits": self.waits,
            "fetches": self.fetches,
            "fetch_failures": self.fetch_failures,
            "hit_rate": self.hit_rate,
            "entry_count": self.entry_count,
            "fetch_latency_avg_ms": self.fetch_latency_avg_ms,
            "fetch_latency_p99_ms": self.fetch_latency_p99_ms,
            "ops_per_second": self.ops_per_second,
        }


class MetricsCollector:
    """Collects and aggregates read-through cache metrics.

    Example:
        collector = MetricsCollector()
        cache = ReadThroughCache(ReadThroughConfig(metrics=collector))

        metrics = collector.get_metrics()
        print(f"Hit rate: {metrics.hit_rate:.2%}")
    """

    def __init__(
        self,
        window_seconds: int = 60,
        max_samples: int = 10000,
    ):
        """Initialize collector.

        Args:
            window_seconds: Window for rate calculations
            max_samples: Fetch latency samples kept
        """
        self.window_seconds = window_seconds

        self._hits = 0
        self._misses = 0
        self._waits = 0
        self._fetches = 0
        self._fetch_failures = 0
        self._entry_count = 0

        self._ops_window: Deque[float] = deque()
        self._latencies: Deque[float] = deque(maxlen=max_samples)

        self._lock = threading.RLock()
        self._exporters: List[Callable[[CacheMetrics], None]] = []

    def record_hit(self) -> None:
        """Record a cache hit."""
        with self._lock:
            self._hits += 1
            self._record_op()

    def record_miss(self) -> None:
        """Record a call that ran the fetch."""
        with self._lock:
            self._misses += 1
            self._record_op()

    def record_wait(self) -> None:
        """Record a call that joined an in-flight fetch."""
        with self._lock:
            self._waits += 1
            self._record_op()

    def record_fetch(self, ms: float) -> None:
        """Record a successful fetch.

        Args:
            ms: Fetch latency in milliseconds
        """
        with self._lock:
            self._fetches += 1
            self._latencies.append(ms)

    def record_fetch_failure(self) -> None:
        """Record a failed fetch."""
        with self._lock:
            self._fetch_failures += 1

    def set_entry_count(self, count: int) -> None:
        """Set current entry count."""
        self._entry_count = count

    def _record_op(self) -> None:
        now = time.time()
        self._ops_window.append(now)
        self._trim_window(now)

    def _trim_window(self, now: float) -> None:
        cutoff = now - self.window_seconds
        while self._ops_window and self._ops_window[0] < cutoff:
            self._ops_window.popleft()

    def _calculate_ops_per_second(self) -> float:
        if not self._ops_window:
            return 0.0

        now = time.time()
        self._trim_window(now)
        if not self._ops_window:
            return 0.0

        elapsed = now - self._ops_window[0]
        if elapsed == 0:
            return 0.0
        return len(self._ops_window) / elapsed

    def _calculate_latency_avg(self) -> float:
        if not self._latencies:
            return 0.0
        return sum(self._latencies) / len(self._latencies)

    def _calculate_latency_p99(self) -> float:
        if not self._latencies:
            return 0.0

        sorted_latencies = sorted(self._latencies)
        idx = int(len(sorted_latencies) * 0.99)
        return sorted_latencies[min(idx, len(sorted_latencies) - 1)]

    def get_metrics(self) -> CacheMetrics:
        """Get current metrics."""
        with self._lock:
            return CacheMetrics(
                hits=self._hits,
                misses=self._misses,
                waits=self._waits,
                fetches=self._fetches,
                fetch_failures=self._fetch_failures,
                entry_count=self._entry_count,
                fetch_latency_avg_ms=self._calculate_latency_avg(),
                fetch_latency_p99_ms=self._calculate_latency_p99(),
                ops_per_second=self._calculate_ops_per_second(),
            )

    def reset(self) -> None:
        """Reset all metrics."""
        with self._lock:
            self._hits = 0
            self._misses = 0
            self._waits = 0
            self._fetches = 0
            self._fetch_failures = 0
            self._entry_count = 0
            self._ops_window.clear()
            self._latencies.clear()

    def add_exporter(self, exporter: Callable[[CacheMetrics], None]) -> None:
        """Add metrics exporter.

        Args:
            exporter: Callback to receive metrics
        """
        self._exporters.append(exporter)

    def export(self) -> None:
        """Export metrics to all exporters."""
        metrics = self.get_metrics()
        for exporter in self._exporters:
            try:
                exporter(metrics)
            except Exception as e:
                logger.error(f"Exporter error: {e}")

    def to_prometheus(self, prefix: str = "readthrough") -> str:
        """Export metrics in Prometheus text format.

        Args:
            prefix: Metric name prefix

        Returns:
            Prometheus-formatted metrics
        """
        metrics = self.get_metrics()
        rows = [
            ("hits_total", "counter", "Calls served from cache", metrics.hits),
            ("misses_total", "counter", "Calls that ran the fetch", metrics.misses),
            ("waits_total", "counter", "Calls that joined an in-flight fetch", metrics.waits),
            ("fetches_total", "counter", "Successful fetches", metrics.fetches),
            ("fetch_failures_total", "counter", "Failed fetches", metrics.fetch_failures),
            ("hit_rate", "gauge", "Cache hit rate", f"{metrics.hit_rate:.4f}"),
            ("entries", "gauge", "Published entries", metrics.entry_count),
            ("fetch_latency_avg_ms", "gauge", "Average fetch latency",
             f"{metrics.fetch_latency_avg_ms:.2f}"),
            ("fetch_latency_p99_ms", "gauge", "P99 fetch latency",
             f"{metrics.fetch_latency_p99_ms:.2f}"),
        ]
        lines = []
        for name, kind, help_text, value in rows:
            lines.append(f"# HELP {prefix}_{name} {help_text}")
            lines.append(f"# TYPE {prefix}_{name} {kind}")
            lines.append(f"{prefix}_{name} {value}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        metrics = self.get_metrics()
        return f"MetricsCollector(hits={metrics.hits}, hit_rate={metrics.hit_rate:.2%})"


class Timer:
    """Context manager recording a fetch latency."""

    def __init__(self, collector: MetricsCollector):
        self._collector = collector
        self._start: float = 0.0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None:
            self._collector.record_fetch_failure()
            return
        elapsed_ms = (time.perf_counter() - self._start) * 1000
        self._collector.record_fetch(elapsed_ms)


__all__ = [
    "MetricsCollector",
    "CacheMetrics",
    "Timer",
]
