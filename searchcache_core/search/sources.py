"""SearchCache Sources - Full-Dataset Loaders per Storage Backend.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Each source turns one storage backend's bulk read into an immutable tuple of
users. The storage client itself is supplied by the caller as a callable.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Mapping, Sequence, Tuple, Union

from searchcache_core.exceptions import DatasetDecodeError
from searchcache_core.protocol.serializer import Serializer, get_serializer
from searchcache_core.search.models import User

logger = logging.getLogger(__name__)

Snapshot = Tuple[User, ...]


class DatasetSource(ABC):
    """Abstract source for the full users dataset."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get backend name, used in cache keys."""
        pass

    @abstractmethod
    def load(self) -> Snapshot:
        """Load every user.

        Returns:
            Tuple of users in storage order
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class BlobSource(DatasetSource):
    """Users stored as one serialized document in object storage.

    The document is either a list of user objects or ``{"users": [...]}``,
    optionally gzip or zlib compressed.
    """

    def __init__(
        self,
        reader: Callable[[], bytes],
        serializer: Union[str, Serializer] = "json",
        name: str = "blob",
    ):
        """Initialize blob source.

        Args:
            reader: Function returning the raw blob bytes
            serializer: Serializer or registered format name
            name: Backend name
        """
        self._reader = reader
        self._serializer = (
            get_serializer(serializer) if isinstance(serializer, str) else serializer
        )
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def load(self) -> Snapshot:
        data = self._reader()
        logger.debug(f"Read {len(data)} bytes from {self._name}")

        document = self._serializer.load(data)
        if isinstance(document, Mapping):
            document = document.get("users")
        if not isinstance(document, list):
            raise DatasetDecodeError(
                f"Expected a list of users in {self._name}, got {type(document).__name__}"
            )

        users = tuple(User.from_mapping(record) for record in _mappings(document))
        logger.info(f"Loaded {len(users)} users from {self._name}")
        return users


class TableSource(DatasetSource):
    """Users stored as entities in a wide-column table."""

    def __init__(
        self,
        query_entities: Callable[[], Iterable[Mapping[str, Any]]],
        name: str = "table",
    ):
        """Initialize table source.

        Args:
            query_entities: Function returning every entity mapping
            name: Backend name
        """
        self._query_entities = query_entities
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def load(self) -> Snapshot:
        users = tuple(
            User.from_mapping(entity) for entity in _mappings(self._query_entities())
        )
        logger.info(f"Loaded {len(users)} users from {self._name}")
        return users


class SqlSource(DatasetSource):
    """Users stored as rows in a relational table."""

    def __init__(
        self,
        query_rows: Callable[[], Iterable[Sequence[Any]]],
        columns: Sequence[str] = ("id", "name", "location", "reputation"),
        name: str = "sql",
    ):
        """Initialize SQL source.

        Args:
            query_rows: Function returning every row as a sequence
            columns: Column names in row order
            name: Backend name
        """
        self._query_rows = query_rows
        self._columns = tuple(columns)
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def load(self) -> Snapshot:
        users = []
        for row in self._query_rows():
            if len(row) != len(self._columns):
                raise DatasetDecodeError(
                    f"Row has {len(row)} columns, expected {len(self._columns)}"
                )
            users.append(User.from_mapping(dict(zip(self._columns, row))))
        logger.info(f"Loaded {len(users)} users from {self._name}")
        return tuple(users)


def _mappings(records: Iterable[Any]) -> Iterable[Mapping[str, Any]]:
    for record in records:
        if not isinstance(record, Mapping):
            raise DatasetDecodeError(
                f"Expected a user object, got {type(record).__name__}"
            )
        yield record


__all__ = [
    "DatasetSource",
    "BlobSource",
    "TableSource",
    "SqlSource",
    "Snapshot",
]
