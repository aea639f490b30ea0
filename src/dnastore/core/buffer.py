"""
Growable byte buffer (a DNA strand).
"""

from __future__ import annotations

from typing import Iterable

from dnastore.core.constants import (
    DEFAULT_CAPACITY,
    GROWTH_FACTOR,
    MAX_BUFFER_LENGTH,
    MAX_SEED,
)
from dnastore.core.errors import AllocationFailure, GrowthInvariantViolation
from dnastore.monitoring.metrics import BUFFER_GROWTHS
from dnastore.utils.logging import get_logger

logger = get_logger(__name__)


class ByteBuffer:
    """
    Byte array with a logical write cursor and an opaque 64-bit seed.

    Bytes in ``[0, length)`` are meaningful; ``[length, capacity)`` is zero
    padding. ``capacity >= length`` holds after every successful call.

    Views (``Int32View``, ``Int64View``) borrow a buffer without owning it.
    The buffer does no locking: callers must not interleave writes from
    several views or threads.
    """

    def __init__(self, seed: int, initial_capacity: int = DEFAULT_CAPACITY):
        """
        Args:
            seed: Identity of the buffer (0 <= seed < 2**64), never changes
            initial_capacity: Number of zeroed bytes to allocate up front

        Raises:
            ValueError: If seed or capacity is negative / out of range
            AllocationFailure: If the storage cannot be allocated
        """
        if not 0 <= seed <= MAX_SEED:
            raise ValueError(f"Seed out of range: {seed}")
        if initial_capacity < 0:
            raise ValueError(f"Invalid initial capacity: {initial_capacity}")

        self._seed = seed
        self._data = self._allocate(initial_capacity)
        self._length = 0

    @classmethod
    def from_bytes(cls, seed: int, data: bytes | bytearray | memoryview) -> "ByteBuffer":
        """Create a buffer holding a copy of ``data`` (length == capacity)."""
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("data must be bytes-like")
        buf = cls(seed, 0)
        buf._data = cls._allocate(len(data))
        buf._data[:] = data
        buf._length = len(buf._data)
        return buf

    @staticmethod
    def _allocate(size: int) -> bytearray:
        if size > MAX_BUFFER_LENGTH:
            raise AllocationFailure(
                f"Buffer capacity too large: {size} bytes (max {MAX_BUFFER_LENGTH})"
            )
        try:
            return bytearray(size)
        except MemoryError as e:
            raise AllocationFailure(f"Failed to allocate {size} bytes") from e

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def capacity(self) -> int:
        return len(self._data)

    @property
    def length(self) -> int:
        return self._length

    def resize(self, new_capacity: int) -> None:
        """
        Reallocate the backing storage to exactly ``new_capacity`` bytes.

        The logical prefix is copied over and the rest is zero-filled.

        Raises:
            GrowthInvariantViolation: If ``new_capacity`` < current length
                (the buffer is left unchanged)
            AllocationFailure: If the storage cannot be allocated
        """
        if new_capacity < self._length:
            raise GrowthInvariantViolation(new_capacity, self._length)

        new_data = self._allocate(new_capacity)
        new_data[: self._length] = self._data[: self._length]
        old_capacity = len(self._data)
        self._data = new_data

        BUFFER_GROWTHS.inc()
        logger.debug(
            "buffer_resized",
            seed=self._seed,
            length=self._length,
            old_capacity=old_capacity,
            new_capacity=new_capacity,
        )

    def set_byte(self, offset: int, value: int) -> None:
        """
        Set the byte at ``offset``, growing the storage as necessary.

        Writing at or past the current length moves the length to
        ``offset + 1``. When that exceeds the capacity the storage grows to
        twice the new length.

        Raises:
            IndexError: If offset is negative
            ValueError: If value is not in 0..255
            AllocationFailure: If growth would exceed the format limit
        """
        if offset < 0:
            raise IndexError(f"Negative offset: {offset}")
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Byte value out of range: {value}")

        new_length = max(self._length, offset + 1)
        if new_length > len(self._data):
            if new_length > MAX_BUFFER_LENGTH:
                raise AllocationFailure(
                    f"Buffer length too large: {new_length} bytes (max {MAX_BUFFER_LENGTH})"
                )
            self.resize(min(max(new_length * GROWTH_FACTOR, new_length), MAX_BUFFER_LENGTH))

        self._data[offset] = value
        self._length = new_length

    def append_byte(self, value: int) -> None:
        """Add ``value`` at the end of the logical data."""
        self.set_byte(self._length, value)

    def append_bytes(self, data: Iterable[int]) -> None:
        for value in data:
            self.set_byte(self._length, value)

    def byte_at(self, offset: int) -> int:
        """
        Read one byte. Offsets inside the padding read as zero.

        Raises:
            IndexError: If offset is outside ``[0, capacity)``
        """
        if not 0 <= offset < len(self._data):
            raise IndexError(
                f"Offset {offset} out of range (capacity {len(self._data)})"
            )
        return self._data[offset]

    def raw_bytes(self) -> memoryview:
        """Read-only view over the full backing array, padding included."""
        return memoryview(self._data).toreadonly()

    def data(self) -> bytes:
        """Copy of the meaningful prefix ``[0, length)``."""
        return bytes(self._data[: self._length])

    def hexdump(self) -> str:
        """Dash-separated decimal values of every allocated byte."""
        return "".join(f"{b}-" for b in self._data)

    def __len__(self) -> int:
        return self._length

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ByteBuffer):
            return NotImplemented
        return self._seed == other._seed and self.data() == other.data()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"ByteBuffer(seed={self._seed}, "
            f"length={self._length}, capacity={len(self._data)})"
        )
