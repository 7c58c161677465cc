"""Tests for SingleFlight and CacheEntry.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

import dataclasses
import threading

import pytest

from searchcache_core.cache.entry import CacheEntry
from searchcache_core.cache.singleflight import SingleFlight


class TestSingleFlight:
    """Tests for SingleFlight."""

    def test_sequential_calls_each_run(self):
        """Test the key is forgotten once a call returns."""
        group = SingleFlight()
        calls = [0]

        def fn():
            calls[0] += 1
            return calls[0]

        assert group.do("k", fn) == (1, False)
        assert group.do("k", fn) == (2, False)
        assert len(group) == 0

    def test_concurrent_calls_are_shared(self, wait_until):
        """Test callers arriving mid-flight share the leader's value."""
        group = SingleFlight()
        release = threading.Event()
        calls = [0]

        def fn():
            calls[0] += 1
            release.wait(5)
            return "value"

        results = []

        def caller():
            results.append(group.do("k", fn))

        threads = [threading.Thread(target=caller) for _ in range(5)]
        for t in threads:
            t.start()

        wait_until(lambda: group.in_flight("k") and group._flights["k"].waiters == 4)
        assert group.pending() == ["k"]
        release.set()
        for t in threads:
            t.join()

        assert calls[0] == 1
        assert sorted(shared for _, shared in results) == [False, True, True, True, True]
        assert all(value == "value" for value, _ in results)
        assert not group.in_flight("k")

    def test_error_propagates_and_clears(self):
        """Test an exception is re-raised and the key released."""
        group = SingleFlight()

        def fn():
            raise KeyError("missing")

        with pytest.raises(KeyError):
            group.do("k", fn)
        assert not group.in_flight("k")
        assert group.do("k", lambda: 1) == (1, False)

    def test_different_keys_run_independently(self, wait_until):
        """Test one key's flight does not hold up another key."""
        group = SingleFlight()
        release = threading.Event()

        t = threading.Thread(target=group.do, args=("a", lambda: release.wait(5)))
        t.start()
        wait_until(lambda: group.in_flight("a"))

        assert group.do("b", lambda: "b") == ("b", False)

        release.set()
        t.join()


class TestCacheEntry:
    """Tests for CacheEntry."""

    def test_expiry_boundary(self):
        """Test validity is now - created_at < ttl."""
        entry = CacheEntry(key="users", value=(), created_at=100.0, ttl_seconds=10.0)

        assert entry.is_valid(109.999)
        assert entry.is_expired(110.0)
        assert entry.expires_at == 110.0

    def test_age_and_remaining(self):
        """Test age and remaining TTL."""
        entry = CacheEntry(key="users", value=(), created_at=100.0, ttl_seconds=10.0)

        assert entry.age(104.0) == 4.0
        assert entry.remaining_ttl(104.0) == 6.0
        assert entry.remaining_ttl(200.0) == 0.0

    def test_entry_is_immutable(self):
        """Test entries cannot be modified in place."""
        entry = CacheEntry(key="users", value=(), created_at=100.0, ttl_seconds=10.0)

        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.value = ("changed",)

    def test_to_dict(self):
        """Test dictionary form omits the value."""
        entry = CacheEntry(key="users", value=(1, 2), created_at=5.0, ttl_seconds=1.0)

        assert entry.to_dict() == {
            "key": "users",
            "created_at": 5.0,
            "ttl_seconds": 1.0,
            "expires_at": 6.0,
        }


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
