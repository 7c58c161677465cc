"""SearchCache SingleFlight - In-Flight Call Deduplication.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Flight:
    """A single in-flight call and its outcome."""

    __slots__ = ("done", "value", "error", "waiters")

    def __init__(self):
        self.done = threading.Event()
        self.value: Any = None
        self.error: Optional[BaseException] = None
        self.waiters = 0


class SingleFlight:
    """Collapses concurrent calls for the same key into one execution.

    The first caller for a key runs the function. Callers arriving while it
    runs block until it finishes and share its result, or its exception.
    Once the call returns the key is forgotten, so the next call runs the
    function again.

    Example:
        group = SingleFlight()
        value, shared = group.do("users", load_all_users)
    """

    def __init__(self):
        self._flights: Dict[str, _Flight] = {}
        self._lock = threading.Lock()

    def do(self, key: str, fn: Callable[[], T]) -> Tuple[T, bool]:
        """Run ``fn`` once per concurrent burst of callers for ``key``.

        Args:
            key: Deduplication key
            fn: Zero-argument callable

        Returns:
            (value, shared) where shared is True if another caller ran fn

        Raises:
            Whatever ``fn`` raised, unchanged, for every caller of the flight
        """
        with self._lock:
            flight = self._flights.get(key)
            if flight is not None:
                flight.waiters += 1
                leader = False
            else:
                flight = _Flight()
                self._flights[key] = flight
                leader = True

        if not leader:
            flight.done.wait()
            if flight.error is not None:
                raise flight.error
            return flight.value, True

        try:
            flight.value = fn()
        except BaseException as e:
            flight.error = e
            raise
        finally:
            with self._lock:
                del self._flights[key]
            flight.done.set()
            if flight.waiters:
                logger.debug(f"Flight {key!r} released {flight.waiters} waiters")

        return flight.value, False

    def in_flight(self, key: str) -> bool:
        """Check whether a call for ``key`` is running."""
        with self._lock:
            return key in self._flights

    def pending(self) -> List[str]:
        """Get keys with a call in flight."""
        with self._lock:
            return list(self._flights.keys())

    def __len__(self) -> int:
        return len(self._flights)

    def __repr__(self) -> str:
        return f"SingleFlight(in_flight={len(self._flights)})"


__all__ = ["SingleFlight"]
