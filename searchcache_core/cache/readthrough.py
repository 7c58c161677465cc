"""SearchCache Read-Through - Single-Flight Read-Through Cache.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from searchcache_core.cache.entry import CacheEntry, EntryState
from searchcache_core.cache.singleflight import SingleFlight

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ReadThroughConfig:
    """Read-through cache configuration.

    Attributes:
        name: Cache name used in logs
        default_ttl: TTL in seconds used when get() is called without one
        clock: Monotonic clock returning seconds
        metrics: Optional MetricsCollector to report to
    """

    name: str = "readthrough"
    default_ttl: Optional[float] = None
    clock: Callable[[], float] = time.monotonic
    metrics: Optional[Any] = None  # MetricsCollector

    def __post_init__(self):
        if self.default_ttl is not None and not (
            math.isfinite(self.default_ttl) and self.default_ttl > 0
        ):
            raise ValueError(
                f"default_ttl must be positive and finite, got {self.default_ttl}"
            )


@dataclass
class ReadThroughStats:
    """Read-through cache statistics.

    Attributes:
        hits: Calls served from a valid snapshot
        misses: Calls that ran the fetch function
        waits: Calls that joined another caller's fetch
        fetches: Successful fetches
        fetch_failures: Fetches that raised
        refreshes: Successful fetches that replaced an expired snapshot
        started_at: When the cache was created
    """

    hits: int = 0
    misses: int = 0
    waits: int = 0
    fetches: int = 0
    fetch_failures: int = 0
    refreshes: int = 0
    started_at: Optional[datetime] = None

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate."""
        total = self.hits + self.misses + self.waits
        return self.hits / total if total > 0 else 0.0

    def reset(self) -> None:
        """Reset statistics."""
        self.hits = 0
        self.misses = 0
        self.waits = 0
        self.fetches = 0
        self.fetch_failures = 0
        self.refreshes = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "waits": self.waits,
            "fetches": self.fetches,
            "fetch_failures": self.fetch_failures,
            "refreshes": self.refreshes,
            "hit_rate": self.hit_rate,
        }


class ReadThroughCache(Generic[T]):
    """Read-through cache with one fetch in flight per key.

    Valid snapshots are served without taking a lock. On a miss, the first
    caller for a key runs the fetch function while later callers for the
    same key block and receive the same value, or the same exception.
    Failed fetches are never cached.

    Example:
        cache = ReadThroughCache()
        users = cache.get("users", 300, fetch_all_users)
    """

    def __init__(self, config: Optional[ReadThroughConfig] = None):
        """Initialize cache.

        Args:
            config: Cache configuration
        """
        self.config = config or ReadThroughConfig()
        self._clock = self.config.clock
        self._metrics = self.config.metrics

        # Values are replaced by reference, never mutated
        self._entries: Dict[str, CacheEntry[T]] = {}
        self._flights = SingleFlight()

        self._stats = ReadThroughStats(started_at=datetime.now())
        self._stats_lock = threading.Lock()

    def get(
        self,
        key: str,
        ttl: Optional[float],
        fetch: Callable[[], T],
    ) -> T:
        """Get the snapshot for key, fetching it if missing or expired.

        Args:
            key: Cache key
            ttl: TTL in seconds, or None for config.default_ttl
            fetch: Zero-argument function producing the snapshot

        Returns:
            Cached or freshly fetched snapshot

        Raises:
            ValueError: If key is empty or the TTL is not positive
            Exception: Whatever fetch raised, unchanged
        """
        if not key:
            raise ValueError("key must be a non-empty string")
        ttl = self.resolve_ttl(ttl)

        entry = self._entries.get(key)
        if entry is not None and entry.is_valid(self._clock()):
            self._record_hit(key)
            return entry.value

        value, shared = self._flights.do(
            key, lambda: self._fetch_and_publish(key, ttl, fetch)
        )
        if shared:
            with self._stats_lock:
                self._stats.waits += 1
            if self._metrics:
                self._metrics.record_wait()
            logger.debug(f"Cache {self.config.name}: {key!r} served from shared fetch")
        return value

    def _fetch_and_publish(
        self,
        key: str,
        ttl: float,
        fetch: Callable[[], T],
    ) -> T:
        """Fetch and publish under the key's flight."""
        # Double-check: a previous flight may have published since our read
        previous = self._entries.get(key)
        if previous is not None and previous.is_valid(self._clock()):
            self._record_hit(key)
            return previous.value

        with self._stats_lock:
            self._stats.misses += 1
        if self._metrics:
            self._metrics.record_miss()

        started = time.perf_counter()
        try:
            value = fetch()
        except Exception as e:
            with self._stats_lock:
                self._stats.fetch_failures += 1
            if self._metrics:
                self._metrics.record_fetch_failure()
            logger.warning(f"Cache {self.config.name}: fetch for {key!r} failed: {e!r}")
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000

        self._entries[key] = CacheEntry(
            key=key,
            value=value,
            created_at=self._clock(),
            ttl_seconds=ttl,
        )

        with self._stats_lock:
            self._stats.fetches += 1
            if previous is not None:
                self._stats.refreshes += 1
        if self._metrics:
            self._metrics.record_fetch(elapsed_ms)
            self._metrics.set_entry_count(len(self._entries))

        logger.info(
            f"Cache {self.config.name}: {'refreshed' if previous else 'populated'} "
            f"{key!r} in {elapsed_ms:.1f}ms (ttl={ttl}s)"
        )
        return value

    def resolve_ttl(self, ttl: Optional[float]) -> float:
        """Get the effective TTL, falling back to config.default_ttl.

        Raises:
            ValueError: If no TTL is available or it is not positive and finite
        """
        if ttl is None:
            ttl = self.config.default_ttl
        if ttl is None:
            raise ValueError("ttl is required when no default_ttl is configured")
        if not (math.isfinite(ttl) and ttl > 0):
            raise ValueError(f"ttl must be positive and finite, got {ttl}")
        return ttl

    def _record_hit(self, key: str) -> None:
        with self._stats_lock:
            self._stats.hits += 1
        if self._metrics:
            self._metrics.record_hit()
        logger.debug(f"Cache {self.config.name}: hit {key!r}")

    def peek(self, key: str) -> Optional[T]:
        """Get a valid snapshot without fetching.

        Args:
            key: Cache key

        Returns:
            Snapshot or None if missing or expired
        """
        entry = self._entries.get(key)
        if entry is None or entry.is_expired(self._clock()):
            return None
        return entry.value

    def get_entry(self, key: str) -> Optional[CacheEntry[T]]:
        """Get the published entry, expired or not."""
        return self._entries.get(key)

    def state(self, key: str) -> EntryState:
        """Get the state of a key.

        Args:
            key: Cache key

        Returns:
            EntryState for the key
        """
        if self._flights.in_flight(key):
            return EntryState.FETCHING
        entry = self._entries.get(key)
        if entry is None:
            return EntryState.EMPTY
        if entry.is_expired(self._clock()):
            return EntryState.EXPIRED
        return EntryState.POPULATED

    def keys(self) -> List[str]:
        """Get keys with a published entry."""
        return list(self._entries.keys())

    def clear(self) -> int:
        """Drop every published entry.

        In-flight fetches are untouched and still publish when they finish.

        Returns:
            Number of entries dropped
        """
        count = len(self._entries)
        self._entries = {}
        if self._metrics:
            self._metrics.set_entry_count(0)
        logger.info(f"Cache {self.config.name} cleared {count} entries")
        return count

    def get_stats(self) -> ReadThroughStats:
        """Get cache statistics."""
        return self._stats

    def reset_stats(self) -> None:
        """Reset statistics."""
        with self._stats_lock:
            self._stats.reset()

    def __contains__(self, key: str) -> bool:
        """Check if key has a valid snapshot."""
        entry = self._entries.get(key)
        return entry is not None and entry.is_valid(self._clock())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ReadThroughCache(name={self.config.name!r}, entries={len(self._entries)})"


__all__ = ["ReadThroughCache", "ReadThroughConfig", "ReadThroughStats"]
