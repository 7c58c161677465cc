"""Tests for SearchConfig.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

import pytest

from searchcache_core.config import SearchConfig
from searchcache_core.exceptions import ConfigError


class TestSearchConfig:
    """Tests for SearchConfig."""

    def test_defaults(self):
        """Test default values."""
        config = SearchConfig()
        assert config.cache_ttl_seconds == 300.0
        assert config.result_limit == 100
        assert config.cache_key_prefix == "users"
        assert config.dataset_format == "json"

    def test_from_env(self):
        """Test environment variables are parsed."""
        config = SearchConfig.from_env({
            "SEARCHCACHE_CACHE_TTL_SECONDS": "60",
            "SEARCHCACHE_RESULT_LIMIT": "25",
            "SEARCHCACHE_DATASET_FORMAT": "msgpack",
            "SEARCHCACHE_CACHE_KEY_PREFIX": "",
            "UNRELATED": "x",
        })
        assert config.cache_ttl_seconds == 60.0
        assert config.result_limit == 25
        assert config.dataset_format == "msgpack"
        assert config.cache_key_prefix == "users"

    def test_from_env_bad_number(self):
        """Test unparseable numbers raise ConfigError."""
        with pytest.raises(ConfigError):
            SearchConfig.from_env({"SEARCHCACHE_RESULT_LIMIT": "many"})

    def test_validation(self):
        """Test invalid values are rejected."""
        with pytest.raises(ConfigError):
            SearchConfig(cache_ttl_seconds=0)
        with pytest.raises(ConfigError):
            SearchConfig(result_limit=0)
        with pytest.raises(ValueError):
            SearchConfig(cache_key_prefix="")

    @pytest.mark.parametrize("ttl", [float("nan"), float("inf")])
    def test_non_finite_ttl(self, ttl):
        """Test NaN and infinite TTLs are rejected."""
        with pytest.raises(ConfigError):
            SearchConfig(cache_ttl_seconds=ttl)

    def test_from_env_nan_ttl(self):
        """Test a NaN TTL from the environment raises ConfigError."""
        with pytest.raises(ConfigError):
            SearchConfig.from_env({"SEARCHCACHE_CACHE_TTL_SECONDS": "nan"})

    def test_unknown_dataset_format(self):
        """Test formats without a registered serializer are rejected."""
        with pytest.raises(ConfigError):
            SearchConfig(dataset_format="xml")
        with pytest.raises(ConfigError):
            SearchConfig.from_env({"SEARCHCACHE_DATASET_FORMAT": "yaml"})

    def test_dict_roundtrip(self):
        """Test from_dict ignores unknown keys and to_dict reflects fields."""
        config = SearchConfig.from_dict({"result_limit": 10, "extra": True})
        assert config.to_dict() == {
            "cache_ttl_seconds": 300.0,
            "result_limit": 10,
            "cache_key_prefix": "users",
            "dataset_format": "json",
        }

    def test_from_dict_coerces_strings(self):
        """Test string values from JSON or INI files are converted."""
        config = SearchConfig.from_dict({"cache_ttl_seconds": "300", "result_limit": "25"})
        assert config.cache_ttl_seconds == 300.0
        assert config.result_limit == 25

    def test_from_dict_bad_values(self):
        """Test unconvertible values raise ConfigError."""
        with pytest.raises(ConfigError):
            SearchConfig.from_dict({"result_limit": "many"})
        with pytest.raises(ConfigError):
            SearchConfig.from_dict({"result_limit": 2.5})
        with pytest.raises(ConfigError):
            SearchConfig.from_dict({"dataset_format": 3})


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
