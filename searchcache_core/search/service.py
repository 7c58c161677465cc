"""SearchCache Service - Substring Search over a Cached Users Snapshot.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from searchcache_core.cache.readthrough import ReadThroughCache, ReadThroughConfig
from searchcache_core.config import SearchConfig
from searchcache_core.search.matcher import count_matches, scan
from searchcache_core.search.models import SearchOptions, SearchResult
from searchcache_core.search.sources import BlobSource, DatasetSource, Snapshot

logger = logging.getLogger(__name__)


class UserSearchService:
    """Searches one backend's users through a read-through cache.

    The full dataset is loaded once per TTL and scanned linearly for every
    request. Several services can share one cache; each uses its own key.

    Example:
        cache = ReadThroughCache()
        service = UserSearchService(SqlSource(fetch_rows), cache=cache)
        result = service.search(SearchOptions(name="ann"))
    """

    def __init__(
        self,
        source: DatasetSource,
        cache: Optional[ReadThroughCache] = None,
        config: Optional[SearchConfig] = None,
    ):
        """Initialize service.

        Args:
            source: Backend dataset source
            cache: Shared read-through cache, a private one when omitted
            config: Search configuration
        """
        self.source = source
        self.config = config or SearchConfig()
        # An empty cache is falsy, so test for None explicitly
        if cache is None:
            cache = ReadThroughCache(ReadThroughConfig(name=f"search-{source.name}"))
        self.cache = cache
        self.cache_key = f"{self.config.cache_key_prefix}:{source.name}"

    @classmethod
    def for_blob(
        cls,
        reader: Callable[[], bytes],
        cache: Optional[ReadThroughCache] = None,
        config: Optional[SearchConfig] = None,
    ) -> "UserSearchService":
        """Build a service over a blob in ``config.dataset_format``."""
        config = config or SearchConfig()
        return cls(BlobSource(reader, config.dataset_format), cache=cache, config=config)

    def snapshot(self) -> Snapshot:
        """Get the cached users snapshot, loading it if needed.

        Raises:
            Exception: Whatever the source raised, unchanged
        """
        return self.cache.get(self.cache_key, self.config.cache_ttl_seconds, self.source.load)

    def search(self, options: SearchOptions) -> SearchResult:
        """Find users matching every given criterion.

        Args:
            options: Search criteria

        Returns:
            At most ``config.result_limit`` users in dataset order
        """
        result = scan(self.snapshot(), options, limit=self.config.result_limit)
        logger.debug(
            f"Search {options.to_dict()} on {self.source.name}: "
            f"{len(result)} users, truncated={result.truncated}"
        )
        return result

    def count(self, options: SearchOptions) -> int:
        """Count every user matching the criteria, uncapped."""
        return count_matches(self.snapshot(), options)

    def __repr__(self) -> str:
        return f"UserSearchService(source={self.source.name!r}, key={self.cache_key!r})"


__all__ = ["UserSearchService"]
