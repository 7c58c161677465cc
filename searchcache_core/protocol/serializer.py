"""SearchCache Serializer - Dataset Codecs.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import gzip
import json
import logging
import zlib
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Any, Optional

import msgpack

from searchcache_core.exceptions import DatasetDecodeError

logger = logging.getLogger(__name__)


class CompressionType(Enum):
    """Compression types."""

    NONE = auto()
    GZIP = auto()
    ZLIB = auto()


def detect_compression(data: bytes) -> CompressionType:
    """Detect compression from magic bytes.

    Args:
        data: Raw bytes

    Returns:
        Detected compression type
    """
    if data[:2] == b"\x1f\x8b":
        return CompressionType.GZIP
    # zlib header: CMF 0x78 with a valid FCHECK
    if len(data) >= 2 and data[0] == 0x78 and (data[0] * 256 + data[1]) % 31 == 0:
        return CompressionType.ZLIB
    return CompressionType.NONE


def decompress(data: bytes) -> bytes:
    """Decompress gzip or zlib data, passing plain data through.

    Args:
        data: Possibly compressed bytes

    Returns:
        Plain bytes
    """
    compression = detect_compression(data)
    try:
        if compression == CompressionType.GZIP:
            return gzip.decompress(data)
        if compression == CompressionType.ZLIB:
            return zlib.decompress(data)
    except (OSError, EOFError, zlib.error) as e:
        raise DatasetDecodeError(f"Corrupt {compression.name.lower()} data: {e}") from e
    return data


def compress(data: bytes, compression: CompressionType = CompressionType.GZIP) -> bytes:
    """Compress bytes.

    Args:
        data: Plain bytes
        compression: Compression type

    Returns:
        Compressed bytes
    """
    if compression == CompressionType.GZIP:
        return gzip.compress(data)
    if compression == CompressionType.ZLIB:
        return zlib.compress(data)
    return data


class Serializer(ABC):
    """Abstract serializer for dataset documents."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Get format name."""
        pass

    @abstractmethod
    def serialize(self, value: Any) -> bytes:
        """Serialize value to bytes.

        Args:
            value: Value to serialize

        Returns:
            Serialized bytes
        """
        pass

    @abstractmethod
    def deserialize(self, data: bytes) -> Any:
        """Deserialize bytes to value.

        Args:
            data: Serialized bytes

        Returns:
            Deserialized value

        Raises:
            DatasetDecodeError: If data is not valid for this format
        """
        pass

    def load(self, data: bytes) -> Any:
        """Deserialize, transparently decompressing gzip or zlib input.

        Args:
            data: Raw blob bytes

        Returns:
            Deserialized value
        """
        return self.deserialize(decompress(data))

    def dump(
        self,
        value: Any,
        compression: CompressionType = CompressionType.NONE,
    ) -> bytes:
        """Serialize and optionally compress.

        Args:
            value: Value to serialize
            compression: Compression type

        Returns:
            Blob bytes
        """
        return compress(self.serialize(value), compression)


class JSONSerializer(Serializer):
    """JSON serializer.

    The default format for dataset blobs.
    """

    @property
    def format_name(self) -> str:
        return "json"

    def serialize(self, value: Any) -> bytes:
        return json.dumps(value, default=str).encode("utf-8")

    def deserialize(self, data: bytes) -> Any:
        try:
            return json.loads(data.decode("utf-8-sig"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DatasetDecodeError(f"Invalid JSON document: {e}") from e


class MsgPackSerializer(Serializer):
    """MessagePack serializer.

    Compact binary format, faster than JSON.
    """

    @property
    def format_name(self) -> str:
        return "msgpack"

    def serialize(self, value: Any) -> bytes:
        return msgpack.packb(value, use_bin_type=True)

    def deserialize(self, data: bytes) -> Any:
        try:
            return msgpack.unpackb(data, raw=False)
        except (ValueError, TypeError, msgpack.exceptions.UnpackException) as e:
            raise DatasetDecodeError(f"Invalid MessagePack document: {e}") from e


class SerializerRegistry:
    """Registry of serializers."""

    def __init__(self):
        self._serializers: dict[str, Serializer] = {}
        self._default: str = "json"

        self.register(JSONSerializer())
        self.register(MsgPackSerializer())

    def register(self, serializer: Serializer) -> None:
        """Register a serializer.

        Args:
            serializer: Serializer to register
        """
        self._serializers[serializer.format_name] = serializer

    def get(self, format_name: str) -> Serializer:
        """Get serializer by format.

        Args:
            format_name: Format name

        Returns:
            Serializer instance

        Raises:
            KeyError: If format not found
        """
        if format_name not in self._serializers:
            raise KeyError(f"Unknown serializer format: {format_name}")
        return self._serializers[format_name]

    def get_default(self) -> Serializer:
        """Get default serializer."""
        return self._serializers[self._default]

    def list_formats(self) -> list[str]:
        """List available formats."""
        return list(self._serializers.keys())


_registry = SerializerRegistry()


def get_serializer(format_name: Optional[str] = None) -> Serializer:
    """Get serializer by format.

    Args:
        format_name: Format name or None for default

    Returns:
        Serializer instance
    """
    if format_name is None:
        return _registry.get_default()
    return _registry.get(format_name)


def list_formats() -> list[str]:
    """List registered serializer formats."""
    return _registry.list_formats()


__all__ = [
    "Serializer",
    "CompressionType",
    "JSONSerializer",
    "MsgPackSerializer",
    "SerializerRegistry",
    "get_serializer",
    "list_formats",
    "detect_compression",
    "compress",
    "decompress",
]
