"""Cache module - Read-through caching with single-flight fetches.

This module provides the read-through cache and its snapshot entries.
"""

from searchcache_core.cache.entry import (
    CacheEntry,
    EntryState,
)
from searchcache_core.cache.singleflight import SingleFlight
from searchcache_core.cache.readthrough import (
    ReadThroughCache,
    ReadThroughConfig,
    ReadThroughStats,
)
from searchcache_core.cache.aio import AsyncReadThroughCache
from searchcache_core.cache.decorator import read_through

__all__ = [
    "CacheEntry",
    "EntryState",
    "SingleFlight",
    "ReadThroughCache",
    "ReadThroughConfig",
    "ReadThroughStats",
    "AsyncReadThroughCache",
    "read_through",
]
