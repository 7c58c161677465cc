"""Metrics module - Cache metrics and monitoring."""

from searchcache_core.metrics.collector import (
    MetricsCollector,
    CacheMetrics,
    Timer,
)

__all__ = [
    "MetricsCollector",
    "CacheMetrics",
    "Timer",
]
