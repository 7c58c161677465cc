"""SearchCache Config - Search Service Configuration.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

from searchcache_core.exceptions import ConfigError
from searchcache_core.protocol.serializer import list_formats

ENV_PREFIX = "SEARCHCACHE_"


@dataclass
class SearchConfig:
    """Search service configuration.

    Attributes:
        cache_ttl_seconds: Snapshot TTL in seconds
        result_limit: Maximum users returned per search
        cache_key_prefix: Prefix of the per-backend cache key
        dataset_format: Serializer format of dataset blobs
    """

    cache_ttl_seconds: float = 300.0
    result_limit: int = 100
    cache_key_prefix: str = "users"
    dataset_format: str = "json"

    def __post_init__(self):
        if not (math.isfinite(self.cache_ttl_seconds) and self.cache_ttl_seconds > 0):
            raise ConfigError(
                f"cache_ttl_seconds must be positive and finite, got {self.cache_ttl_seconds}"
            )
        if self.result_limit < 1:
            raise ConfigError(f"result_limit must be at least 1, got {self.result_limit}")
        if not self.cache_key_prefix:
            raise ConfigError("cache_key_prefix must not be empty")
        if self.dataset_format not in list_formats():
            raise ConfigError(
                f"dataset_format must be one of {list_formats()}, got {self.dataset_format!r}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SearchConfig":
        """Create from dictionary, ignoring unknown keys.

        String values are converted like environment variables.

        Args:
            data: Configuration values

        Returns:
            SearchConfig instance

        Raises:
            ConfigError: If a numeric value cannot be converted
        """
        values: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name in data:
                values[f.name] = _coerce(f.name, f.type, data[f.name])
        return cls(**values)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SearchConfig":
        """Create from ``SEARCHCACHE_*`` environment variables.

        Args:
            environ: Environment mapping, defaults to os.environ

        Returns:
            SearchConfig instance

        Raises:
            ConfigError: If a variable is invalid
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        for f in fields(cls):
            raw = environ.get(f"{ENV_PREFIX}{f.name.upper()}")
            if raw is None or raw == "":
                continue
            values[f.name] = _coerce(f.name, f.type, raw)
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _coerce(name: str, type_name: Any, raw: Any) -> Any:
    # Annotations are strings under postponed evaluation
    type_name = getattr(type_name, "__name__", type_name)
    try:
        if type_name == "float":
            return float(raw)
        if type_name == "int":
            if isinstance(raw, float) and not raw.is_integer():
                raise ValueError("fractional value")
            return int(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name}={raw!r} is not a {type_name}") from e
    if type_name == "str" and not isinstance(raw, str):
        raise ConfigError(f"{name}={raw!r} is not a str")
    return raw


__all__ = ["SearchConfig", "ENV_PREFIX"]
