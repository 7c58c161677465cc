"""Tests for MetricsCollector.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

import pytest

from searchcache_core.metrics.collector import CacheMetrics, MetricsCollector, Timer


class TestMetricsCollector:
    """Tests for MetricsCollector."""

    def test_counters(self):
        """Test counters and hit rate."""
        collector = MetricsCollector()

        collector.record_hit()
        collector.record_hit()
        collector.record_miss()
        collector.record_wait()
        collector.record_fetch(12.0)
        collector.record_fetch_failure()

        metrics = collector.get_metrics()
        assert metrics.hits == 2
        assert metrics.misses == 1
        assert metrics.waits == 1
        assert metrics.fetches == 1
        assert metrics.fetch_failures == 1
        assert metrics.total_ops == 4
        assert metrics.hit_rate == pytest.approx(0.5)

    def test_latency(self):
        """Test fetch latency aggregation."""
        collector = MetricsCollector()

        for ms in range(1, 101):
            collector.record_fetch(float(ms))

        metrics = collector.get_metrics()
        assert metrics.fetch_latency_avg_ms == pytest.approx(50.5)
        assert metrics.fetch_latency_p99_ms == 100.0

    def test_reset(self):
        """Test reset."""
        collector = MetricsCollector()
        collector.record_hit()
        collector.record_fetch(3.0)
        collector.set_entry_count(4)

        collector.reset()
        metrics = collector.get_metrics()
        assert metrics.hits == 0
        assert metrics.fetches == 0
        assert metrics.entry_count == 0
        assert metrics.fetch_latency_avg_ms == 0.0

    def test_exporters_isolated(self):
        """Test a failing exporter does not stop the others."""
        collector = MetricsCollector()
        received = []

        def broken(metrics):
            raise RuntimeError("exporter down")

        collector.add_exporter(broken)
        collector.add_exporter(received.append)
        collector.record_hit()
        collector.export()

        assert len(received) == 1
        assert isinstance(received[0], CacheMetrics)
        assert received[0].hits == 1

    def test_prometheus(self):
        """Test Prometheus text export."""
        collector = MetricsCollector()
        collector.record_miss()
        collector.record_fetch(5.0)

        text = collector.to_prometheus(prefix="users_cache")
        assert "# TYPE users_cache_fetches_total counter" in text
        assert "users_cache_fetches_total 1" in text
        assert "users_cache_misses_total 1" in text
        assert "users_cache_fetch_latency_avg_ms 5.00" in text

    def test_timer(self):
        """Test Timer records success and failure."""
        collector = MetricsCollector()

        with Timer(collector):
            pass
        with pytest.raises(ValueError):
            with Timer(collector):
                raise ValueError("bad row")

        metrics = collector.get_metrics()
        assert metrics.fetches == 1
        assert metrics.fetch_failures == 1

    def test_to_dict(self):
        """Test dictionary export."""
        data = CacheMetrics(hits=3, misses=1).to_dict()
        assert data["hits"] == 3
        assert data["hit_rate"] == pytest.approx(0.75)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
