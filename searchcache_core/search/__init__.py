"""Search module - Users search over a cached dataset snapshot."""

from searchcache_core.search.models import (
    User,
    SearchOptions,
    SearchResult,
)
from searchcache_core.search.matcher import (
    DEFAULT_LIMIT,
    matches,
    scan,
    count_matches,
)
from searchcache_core.search.sources import (
    DatasetSource,
    BlobSource,
    TableSource,
    SqlSource,
)
from searchcache_core.search.service import UserSearchService

__all__ = [
    "User",
    "SearchOptions",
    "SearchResult",
    "DEFAULT_LIMIT",
    "matches",
    "scan",
    "count_matches",
    "DatasetSource",
    "BlobSource",
    "TableSource",
    "SqlSource",
    "UserSearchService",
]
