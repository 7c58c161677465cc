"""SearchCache - Read-Through Snapshot Cache for Users Search Benchmarks.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Compares storage backends for substring search over a synthetic users
dataset. Each backend loads the full dataset, which is held as an immutable
snapshot in a read-through cache with one fetch in flight per key:
- Lock-free reads of published snapshots
- Single-flight fetches, waiters share the result or the error
- Lazy TTL expiry, failed fetches are never cached
- Thread and asyncio variants
- Blob, table and SQL dataset sources
- Capped linear substring search
- Cache statistics and Prometheus export

Architecture:
    ┌─────────────────────────────────────────────────────────────────┐
    │                       SearchCache System                        │
    ├─────────────────────────────────────────────────────────────────┤
    │  ┌─────────────┐  ┌─────────────┐  ┌─────────────┐             │
    │  │   Search    │  │   Matcher   │  │   Models    │   SEARCH    │
    │  │ search/count│  │ scan / cap  │  │ User/Options│   LAYER     │
    │  └──────┬──────┘  └─────────────┘  └─────────────┘             │
    │         │                                                       │
    │  ┌──────┴────────────────────────────────────────┐             │
    │  │             Read-Through Cache                 │             │
    │  │   ┌──────────┐  ┌──────────────┐  ┌───────┐   │   CACHE     │
    │  │   │  Entry   │  │ SingleFlight │  │ Async │   │   LAYER     │
    │  │   └──────────┘  └──────────────┘  └───────┘   │             │
    │  └──────────────────────┬────────────────────────┘             │
    │                         │ fetch                                 │
    │  ┌──────────────────────┴────────────────────────┐             │
    │  │              Dataset Sources                   │             │
    │  │   ┌────────┐  ┌────────┐  ┌────────┐         │   SOURCE    │
    │  │   │  Blob  │  │ Table  │  │  SQL   │         │   LAYER     │
    │  │   └────────┘  └────────┘  └────────┘         │             │
    │  └──────────────────────────────────────────────┘             │
    └─────────────────────────────────────────────────────────────────┘

Example Usage:
    from searchcache_core import ReadThroughCache, SearchOptions, SqlSource
    from searchcache_core import UserSearchService

    # Plain read-through cache
    cache = ReadThroughCache()
    users = cache.get("users", 300, fetch_all_users)

    # Search service per backend, sharing one cache
    sql = UserSearchService(SqlSource(fetch_rows), cache=cache)
    result = sql.search(SearchOptions.from_query({"name": "ann"}))
"""

__version__ = "1.0.0"
__author__ = "BlackRoad OS"

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
from searchcache_core.config import SearchConfig
from searchcache_core.exceptions import (
    SearchCacheError,
    InvalidQueryError,
    DatasetDecodeError,
    ConfigError,
)
from searchcache_core.metrics.collector import (
    MetricsCollector,
    CacheMetrics,
)
from searchcache_core.protocol.serializer import (
    Serializer,
    JSONSerializer,
    MsgPackSerializer,
)
from searchcache_core.search.models import (
    User,
    SearchOptions,
    SearchResult,
)
from searchcache_core.search.sources import (
    DatasetSource,
    BlobSource,
    TableSource,
    SqlSource,
)
from searchcache_core.search.service import UserSearchService

__all__ = [
    # Cache
    "CacheEntry",
    "EntryState",
    "SingleFlight",
    "ReadThroughCache",
    "ReadThroughConfig",
    "ReadThroughStats",
    "AsyncReadThroughCache",
    "read_through",
    # Config
    "SearchConfig",
    # Errors
    "SearchCacheError",
    "InvalidQueryError",
    "DatasetDecodeError",
    "ConfigError",
    # Metrics
    "MetricsCollector",
    "CacheMetrics",
    # Protocol
    "Serializer",
    "JSONSerializer",
    "MsgPackSerializer",
    # Search
    "User",
    "SearchOptions",
    "SearchResult",
    "DatasetSource",
    "BlobSource",
    "TableSource",
    "SqlSource",
    "UserSearchService",
]
