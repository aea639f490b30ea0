"""dnastore core functionality."""

from .buffer import ByteBuffer
from .codec import BinaryCodec, deserialize, serialize
from .constants import FLAG_EXHAUSTED, FLAG_OVERRIDE
from .errors import (
    AllocationFailure,
    CodecError,
    DnaStoreError,
    FormatMismatch,
    GrowthInvariantViolation,
    SlotExhausted,
    SlotOverridden,
    SlotRecordError,
    SlotTierMismatch,
    TruncatedRecord,
)
from .slot_record import Lane, SlotRecord, Tier
from .views import AlignedView, Int32View, Int64View

__all__ = [
    "ByteBuffer",
    "AlignedView",
    "Int32View",
    "Int64View",
    "SlotRecord",
    "Lane",
    "Tier",
    "BinaryCodec",
    "serialize",
    "deserialize",
    "FLAG_EXHAUSTED",
    "FLAG_OVERRIDE",
    "DnaStoreError",
    "AllocationFailure",
    "GrowthInvariantViolation",
    "CodecError",
    "FormatMismatch",
    "TruncatedRecord",
    "SlotRecordError",
    "SlotExhausted",
    "SlotTierMismatch",
    "SlotOverridden",
]
