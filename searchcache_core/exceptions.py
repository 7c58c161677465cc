"""SearchCache Exceptions.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Fetch failures are not listed here: the read-through cache re-raises the
fetch function's own exception unchanged.
"""


class SearchCacheError(Exception):
    """Base class for SearchCache errors."""


class InvalidQueryError(SearchCacheError, ValueError):
    """Search parameters could not be parsed."""

    def __init__(self, field: str, value: str, reason: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field} {value!r}: {reason}")


class DatasetDecodeError(SearchCacheError):
    """A dataset blob or row could not be turned into users."""


class ConfigError(SearchCacheError, ValueError):
    """A configuration value is invalid."""


__all__ = [
    "SearchCacheError",
    "InvalidQueryError",
    "DatasetDecodeError",
    "ConfigError",
]
