"""
Exception hierarchy for dnastore.
"""


class DnaStoreError(Exception):
    """Base class for all dnastore exceptions."""


class AllocationFailure(DnaStoreError, MemoryError):
    """Raised when backing storage cannot be allocated."""


class GrowthInvariantViolation(DnaStoreError, ValueError):
    """Raised when a resize would drop bytes below the logical length."""

    def __init__(self, requested: int, length: int):
        self.requested = requested
        self.length = length
        super().__init__(
            f"Cannot resize buffer to {requested} bytes: length is {length}"
        )


class CodecError(DnaStoreError):
    """Base class for serialization errors; the whole batch is aborted."""


class FormatMismatch(CodecError, ValueError):
    """Raised when a tag or header field holds an unexpected value."""


class TruncatedRecord(CodecError, EOFError):
    """Raised when the stream ends before a declared field or payload."""

    def __init__(self, what: str, expected: int, got: int):
        self.what = what
        self.expected = expected
        self.got = got
        super().__init__(f"Truncated {what}: expected {expected} bytes, got {got}")


class SlotRecordError(DnaStoreError):
    """Base class for slot record insert errors."""


class SlotExhausted(SlotRecordError):
    """Raised when no lane is free and eviction was not requested."""


class SlotTierMismatch(SlotRecordError, ValueError):
    """Raised when a record holding one tier receives a value of another."""


class SlotOverridden(UserWarning):
    """Warning category: a forced insert evicted existing data."""
