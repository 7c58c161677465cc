"""SearchCache Async - Read-Through Cache for asyncio Callers.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import asyncio
import logging
import math
import time
from typing import Awaitable, Callable, Dict, Generic, List, Optional, TypeVar

from searchcache_core.cache.entry import CacheEntry, EntryState
from searchcache_core.cache.readthrough import ReadThroughConfig, ReadThroughStats

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AsyncReadThroughCache(Generic[T]):
    """Read-through cache for coroutine fetch functions.

    Bound to the event loop it is used from. The first task to miss a key
    creates a Future and runs the fetch; other tasks await that Future. A
    waiter being cancelled does not cancel the shared fetch.

    Example:
        cache = AsyncReadThroughCache()
        users = await cache.get("users", 300, fetch_all_users)
    """

    def __init__(self, config: Optional[ReadThroughConfig] = None):
        self.config = config or ReadThroughConfig(name="aio-readthrough")
        self._clock = self.config.clock
        self._metrics = self.config.metrics

        self._entries: Dict[str, CacheEntry[T]] = {}
        self._in_flight: Dict[str, asyncio.Future] = {}
        self._stats = ReadThroughStats()

    async def get(
        self,
        key: str,
        ttl: Optional[float],
        fetch: Callable[[], Awaitable[T]],
    ) -> T:
        """Get the snapshot for key, awaiting one shared fetch on a miss.

        Args:
            key: Cache key
            ttl: TTL in seconds, or None for config.default_ttl
            fetch: Zero-argument coroutine function producing the snapshot

        Returns:
            Cached or freshly fetched snapshot

        Raises:
            ValueError: If key is empty or the TTL is not positive
            Exception: Whatever fetch raised, unchanged
        """
        if not key:
            raise ValueError("key must be a non-empty string")
        if ttl is None:
            ttl = self.config.default_ttl
        if ttl is None or not (math.isfinite(ttl) and ttl > 0):
            raise ValueError(f"ttl must be positive and finite, got {ttl}")

        # No await between the checks and registering the flight
        entry = self._entries.get(key)
        if entry is not None and entry.is_valid(self._clock()):
            self._stats.hits += 1
            if self._metrics:
                self._metrics.record_hit()
            return entry.value

        flight = self._in_flight.get(key)
        if flight is not None:
            self._stats.waits += 1
            if self._metrics:
                self._metrics.record_wait()
            return await asyncio.shield(flight)

        flight = asyncio.get_running_loop().create_future()
        self._in_flight[key] = flight
        self._stats.misses += 1
        if self._metrics:
            self._metrics.record_miss()

        started = time.perf_counter()
        try:
            value = await fetch()
        except Exception as e:
            self._in_flight.pop(key, None)
            self._stats.fetch_failures += 1
            if self._metrics:
                self._metrics.record_fetch_failure()
            logger.warning(f"Cache {self.config.name}: fetch for {key!r} failed: {e!r}")
            flight.set_exception(e)
            # Mark retrieved so an unawaited flight does not log a warning
            flight.exception()
            raise
        except BaseException:
            # Cancellation, SystemExit and the like: waiters are cancelled
            self._in_flight.pop(key, None)
            flight.cancel()
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000

        self._entries[key] = CacheEntry(
            key=key,
            value=value,
            created_at=self._clock(),
            ttl_seconds=ttl,
        )
        self._in_flight.pop(key, None)
        self._stats.fetches += 1
        if entry is not None:
            self._stats.refreshes += 1
        if self._metrics:
            self._metrics.record_fetch(elapsed_ms)
            self._metrics.set_entry_count(len(self._entries))

        flight.set_result(value)
        logger.info(f"Cache {self.config.name}: fetched {key!r} in {elapsed_ms:.1f}ms")
        return value

    def peek(self, key: str) -> Optional[T]:
        """Get a valid snapshot without fetching."""
        entry = self._entries.get(key)
        if entry is None or entry.is_expired(self._clock()):
            return None
        return entry.value

    def state(self, key: str) -> EntryState:
        """Get the state of a key."""
        if key in self._in_flight:
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
        """Drop every published entry."""
        count = len(self._entries)
        self._entries = {}
        return count

    def get_stats(self) -> ReadThroughStats:
        """Get cache statistics."""
        return self._stats

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"AsyncReadThroughCache(name={self.config.name!r}, entries={len(self._entries)})"


__all__ = ["AsyncReadThroughCache"]
