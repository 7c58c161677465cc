"""SearchCache Matcher - Linear Substring Scan.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from typing import Iterable, Optional

from searchcache_core.search.models import SearchOptions, SearchResult, User

DEFAULT_LIMIT = 100


def matches(user: User, options: SearchOptions) -> bool:
    """Check a user against every given criterion.

    Args:
        user: User to test
        options: Search criteria

    Returns:
        True if all given criteria match
    """
    if options.name is not None and options.name.casefold() not in user.name.casefold():
        return False
    if (
        options.location is not None
        and options.location.casefold() not in user.location.casefold()
    ):
        return False
    if options.reputation is not None and user.reputation < options.reputation:
        return False
    return True


def scan(
    users: Iterable[User],
    options: SearchOptions,
    limit: Optional[int] = DEFAULT_LIMIT,
) -> SearchResult:
    """Scan users in order and stop after ``limit`` matches.

    Args:
        users: Dataset snapshot
        options: Search criteria
        limit: Maximum matches, None for no cap

    Returns:
        SearchResult with truncated set when a further match exists
    """
    if limit is not None and limit < 0:
        raise ValueError(f"limit must not be negative, got {limit}")

    found = []
    for user in users:
        if not matches(user, options):
            continue
        if limit is not None and len(found) >= limit:
            return SearchResult(users=tuple(found), truncated=True)
        found.append(user)
    return SearchResult(users=tuple(found), truncated=False)


def count_matches(users: Iterable[User], options: SearchOptions) -> int:
    """Count every matching user, uncapped."""
    return sum(1 for user in users if matches(user, options))


__all__ = ["DEFAULT_LIMIT", "matches", "scan", "count_matches"]
