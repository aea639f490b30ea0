"""
Monitoring utilities for dnastore.
"""

from dnastore.monitoring.metrics import (
    BUFFER_GROWTHS,
    BUFFERS_DESERIALIZED,
    BUFFERS_SERIALIZED,
    BYTES_SERIALIZED,
    CODEC_FAILURES,
    CONTENT_TYPE_LATEST,
    SLOT_OVERRIDES,
    generate_latest,
)

__all__ = [
    "BUFFERS_SERIALIZED",
    "BYTES_SERIALIZED",
    "BUFFERS_DESERIALIZED",
    "CODEC_FAILURES",
    "BUFFER_GROWTHS",
    "SLOT_OVERRIDES",
    "CONTENT_TYPE_LATEST",
    "generate_latest",
]
