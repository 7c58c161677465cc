"""SearchCache Decorators - Read-Through Decorators.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Optional, TypeVar

from searchcache_core.cache.readthrough import ReadThroughCache

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def read_through(
    cache: Optional[ReadThroughCache] = None,
    key: Optional[str] = None,
    ttl: Optional[float] = None,
) -> Callable[[F], F]:
    """Route every call of a zero-argument loader through a cache.

    Args:
        cache: Cache to use; a private cache is created when omitted
        key: Cache key, defaults to the function's module and qualname
        ttl: TTL in seconds, or None for the cache's default_ttl

    Returns:
        Decorated function

    Raises:
        ValueError: If neither ttl nor the cache's default_ttl is set

    Example:
        @read_through(cache, key="users", ttl=300)
        def load_users() -> tuple:
            return tuple(read_all_rows())
    """
    def decorator(func: F) -> F:
        func_cache = cache if cache is not None else ReadThroughCache()
        cache_key = key or f"{func.__module__}:{func.__qualname__}"
        func_cache.resolve_ttl(ttl)

        @functools.wraps(func)
        def wrapper():
            return func_cache.get(cache_key, ttl, func)

        def peek() -> Any:
            """Get the cached snapshot without fetching."""
            return func_cache.peek(cache_key)

        wrapper.cache = func_cache
        wrapper.cache_key = cache_key
        wrapper.peek = peek
        wrapper.__wrapped__ = func

        return wrapper  # type: ignore

    return decorator


__all__ = ["read_through"]
