"""Prometheus metrics for dnastore components."""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    generate_latest,
)

# Codec counters
BUFFERS_SERIALIZED = Counter(
    "dnastore_buffers_serialized_total", "Number of buffers written to a stream"
)
BYTES_SERIALIZED = Counter(
    "dnastore_bytes_serialized_total", "Raw buffer bytes written (headers excluded)"
)
BUFFERS_DESERIALIZED = Counter(
    "dnastore_buffers_deserialized_total", "Number of buffers restored from a stream"
)
CODEC_FAILURES = Counter(
    "dnastore_codec_failures_total",
    "Aborted serialize/deserialize operations",
    ["operation", "reason"],
)

# Buffer / record counters
BUFFER_GROWTHS = Counter(
    "dnastore_buffer_growths_total", "Backing storage reallocations of byte buffers"
)
SLOT_OVERRIDES = Counter(
    "dnastore_slot_overrides_total",
    "Slot record inserts that evicted existing lanes",
    ["tier"],
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
