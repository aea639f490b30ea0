"""dnastore - growable byte buffers, aligned views, slot records and their file format."""

__version__ = "0.1.0"

from .core import (
    FLAG_EXHAUSTED,
    FLAG_OVERRIDE,
    BinaryCodec,
    ByteBuffer,
    Int32View,
    Int64View,
    SlotRecord,
    Tier,
    deserialize,
    serialize,
)
from .config import CodecConfig

__all__ = [
    "ByteBuffer",
    "Int32View",
    "Int64View",
    "SlotRecord",
    "Tier",
    "BinaryCodec",
    "serialize",
    "deserialize",
    "CodecConfig",
    "FLAG_EXHAUSTED",
    "FLAG_OVERRIDE",
]
