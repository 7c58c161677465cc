"""Protocol module - Dataset serialization and codecs."""

from searchcache_core.protocol.serializer import (
    Serializer,
    CompressionType,
    JSONSerializer,
    MsgPackSerializer,
    get_serializer,
)

__all__ = [
    "Serializer",
    "CompressionType",
    "JSONSerializer",
    "MsgPackSerializer",
    "get_serializer",
]
