"""SearchCache Entry - Immutable Snapshot with TTL and State.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, Generic, TypeVar

T = TypeVar("T")


class EntryState(Enum):
    """Observable state of a cache key."""

    EMPTY = auto()       # Nothing fetched yet
    FETCHING = auto()    # A fetch is in flight
    POPULATED = auto()   # Valid snapshot published
    EXPIRED = auto()     # Snapshot published but past its TTL


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A published snapshot.

    Entries are never mutated. A refresh publishes a new entry and the
    dict slot is swapped by reference.

    Attributes:
        key: Cache key
        value: Snapshot value
        created_at: Clock reading when the fetch completed
        ttl_seconds: Time to live in seconds
    """

    key: str
    value: T
    created_at: float
    ttl_seconds: float

    @property
    def expires_at(self) -> float:
        """Get expiration timestamp."""
        return self.created_at + self.ttl_seconds

    def is_expired(self, now: float) -> bool:
        """Check whether the entry is past its TTL.

        Args:
            now: Current clock reading

        Returns:
            True once ``now - created_at >= ttl``
        """
        return now - self.created_at >= self.ttl_seconds

    def is_valid(self, now: float) -> bool:
        """Check whether the entry can be served."""
        return not self.is_expired(now)

    def age(self, now: float) -> float:
        """Get entry age in seconds."""
        return now - self.created_at

    def remaining_ttl(self, now: float) -> float:
        """Get remaining TTL in seconds."""
        return max(0.0, self.expires_at - now)

    def to_dict(self) -> Dict[str, Any]:
        """Describe the entry without its value."""
        return {
            "key": self.key,
            "created_at": self.created_at,
            "ttl_seconds": self.ttl_seconds,
            "expires_at": self.expires_at,
        }

    def __repr__(self) -> str:
        return (
            f"CacheEntry(key={self.key!r}, created_at={self.created_at:.3f}, "
            f"ttl={self.ttl_seconds}s)"
        )


__all__ = ["CacheEntry", "EntryState"]
