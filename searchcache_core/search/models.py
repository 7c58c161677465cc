"""SearchCache Models - Users, Search Options and Results.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from searchcache_core.exceptions import DatasetDecodeError, InvalidQueryError


@dataclass(frozen=True)
class User:
    """A user record from the synthetic dataset.

    Attributes:
        id: User id
        name: Display name
        location: Free-text location
        reputation: Reputation score
    """

    id: str
    name: str
    location: str = ""
    reputation: int = 0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "User":
        """Create from a decoded document or table entity.

        Accepts camelCase or snake_case keys. Table entities without an
        ``id`` fall back to their ``RowKey``.

        Args:
            data: Field mapping

        Returns:
            User instance

        Raises:
            DatasetDecodeError: If id or name is missing or reputation is not an int
        """
        user_id = _first(data, "id", "Id", "userId", "user_id", "RowKey")
        name = _first(data, "name", "Name", "displayName", "display_name")
        if user_id is None or name is None:
            raise DatasetDecodeError(f"User record missing id or name: {dict(data)!r}")

        location = _first(data, "location", "Location") or ""
        reputation = _first(data, "reputation", "Reputation")
        try:
            reputation = int(reputation) if reputation is not None else 0
        except (TypeError, ValueError) as e:
            raise DatasetDecodeError(
                f"User {user_id!r} has non-integer reputation {reputation!r}"
            ) from e

        return cls(
            id=str(user_id),
            name=str(name),
            location=str(location),
            reputation=reputation,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "reputation": self.reputation,
        }


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


@dataclass(frozen=True)
class SearchOptions:
    """Search criteria. Absent criteria match every user.

    Attributes:
        name: Case-insensitive substring of the user name
        location: Case-insensitive substring of the location
        reputation: Minimum reputation
    """

    name: Optional[str] = None
    location: Optional[str] = None
    reputation: Optional[int] = None

    @classmethod
    def from_query(cls, params: Mapping[str, Any]) -> "SearchOptions":
        """Build from request query parameters.

        Blank values are treated as absent.

        Args:
            params: Query parameter mapping

        Returns:
            SearchOptions instance

        Raises:
            InvalidQueryError: If reputation is not an integer
        """
        name = _blank_to_none(params.get("name"))
        location = _blank_to_none(params.get("location"))
        raw_reputation = _blank_to_none(params.get("reputation"))

        reputation = None
        if raw_reputation is not None:
            try:
                reputation = int(raw_reputation)
            except ValueError:
                raise InvalidQueryError("reputation", raw_reputation, "not an integer")

        return cls(name=name, location=location, reputation=reputation)

    @property
    def is_empty(self) -> bool:
        """Check whether no criteria are set."""
        return self.name is None and self.location is None and self.reputation is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "location": self.location,
            "reputation": self.reputation,
        }


def _blank_to_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass(frozen=True)
class SearchResult:
    """Capped search result.

    Attributes:
        users: Matching users in dataset order
        truncated: More matches existed beyond the cap
    """

    users: Tuple[User, ...]
    truncated: bool = False

    def __len__(self) -> int:
        return len(self.users)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "users": [u.to_dict() for u in self.users],
            "count": len(self.users),
            "truncated": self.truncated,
        }


__all__ = ["User", "SearchOptions", "SearchResult"]
