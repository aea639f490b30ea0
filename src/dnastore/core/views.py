"""
Fixed-width aligned views over a ByteBuffer.
"""

from __future__ import annotations

from typing import Iterator

from dnastore.core.buffer import ByteBuffer


class AlignedView:
    """
    Reads and writes ``WIDTH``-byte little-endian values at ``WIDTH``-aligned
    offsets of a borrowed buffer.

    Offsets are measured in ``WIDTH``-byte units. The view keeps no state of
    its own: alignment is recomputed from the buffer length on every append,
    so several views (of different widths) may share one buffer as long as
    the caller serializes their calls.
    """

    WIDTH = 0

    def __init__(self, buffer: ByteBuffer):
        if self.WIDTH <= 0:
            raise TypeError("AlignedView must be subclassed with a positive WIDTH")
        self.buffer = buffer

    @property
    def max_value(self) -> int:
        return (1 << (8 * self.WIDTH)) - 1

    def next_aligned_slot(self) -> int:
        """Index of the first free aligned unit, i.e. ``ceil(length / WIDTH)``."""
        length = self.buffer.length
        return length // self.WIDTH + (length % self.WIDTH + self.WIDTH - 1) // self.WIDTH

    def set_value(self, unit_offset: int, value: int) -> None:
        """
        Write ``value`` as ``WIDTH`` little-endian bytes at ``unit_offset``.

        Each byte goes through ``ByteBuffer.set_byte``, which grows the
        buffer when the write runs past its capacity.

        Raises:
            IndexError: If unit_offset is negative
            ValueError: If value does not fit in ``WIDTH`` bytes
        """
        if unit_offset < 0:
            raise IndexError(f"Negative unit offset: {unit_offset}")
        if not 0 <= value <= self.max_value:
            raise ValueError(
                f"Value {value:#x} does not fit in {self.WIDTH * 8} bits"
            )

        offset = unit_offset * self.WIDTH
        for i in range(self.WIDTH):
            self.buffer.set_byte(offset + i, value & 0xFF)
            value >>= 8

    def append_value(self, value: int) -> int:
        """Write ``value`` at the next aligned slot and return that slot."""
        unit_offset = self.next_aligned_slot()
        self.set_value(unit_offset, value)
        return unit_offset

    def read_value(self, unit_offset: int) -> int:
        """
        Decode the ``WIDTH`` little-endian bytes at ``unit_offset``.

        Raises:
            IndexError: If the unit extends past the buffer capacity
        """
        if unit_offset < 0:
            raise IndexError(f"Negative unit offset: {unit_offset}")

        offset = unit_offset * self.WIDTH
        value = 0
        for i in range(self.WIDTH):
            value |= self.buffer.byte_at(offset + i) << (8 * i)
        return value

    def unit_count(self) -> int:
        return self.next_aligned_slot()

    def values(self) -> Iterator[int]:
        """Yield every unit touched by the logical data that fits in capacity."""
        last = min(self.unit_count(), self.buffer.capacity // self.WIDTH)
        for unit_offset in range(last):
            yield self.read_value(unit_offset)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.buffer!r})"


class Int32View(AlignedView):
    """32-bit units."""

    WIDTH = 4


class Int64View(AlignedView):
    """64-bit units."""

    WIDTH = 8
