"""
Fixed-capacity slot record (a gene) holding paired allele values.

A record owns 8 bytes of data per allele. Values are stored in lanes whose
width is set by the tier of the first insert:

    BITS_64 -> 1 lane of 8 bytes
    BITS_32 -> 2 lanes of 4 bytes
    BITS_16 -> 4 lanes of 2 bytes
    BITS_8  -> 8 lanes of 1 byte

Each lane carries a primary and a secondary value plus one dominance byte per
value. Lane ``i`` starts at byte ``i * width`` of the packed data words, and
its dominance bytes sit at the same byte position of the dominance words.
Tiers are never mixed inside one record without clearing it first.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Sequence, Tuple

from dnastore.core.constants import (
    FLAG_EXHAUSTED,
    FLAG_OVERRIDE,
    MAX_SLOT_HEADER,
    SLOT_DATA_BYTES,
    SLOT_RECORD_STRUCT,
)
from dnastore.core.errors import SlotExhausted, SlotOverridden, SlotTierMismatch
from dnastore.monitoring.metrics import SLOT_OVERRIDES

PackedWords = Tuple[int, int, int, int, int]


class Tier(IntEnum):
    """Value width of a slot record; the enum value is the lane width in bytes."""

    BITS_8 = 1
    BITS_16 = 2
    BITS_32 = 4
    BITS_64 = 8

    @property
    def width(self) -> int:
        return int(self.value)

    @property
    def bits(self) -> int:
        return self.width * 8

    @property
    def lane_count(self) -> int:
        return SLOT_DATA_BYTES // self.width

    @property
    def mask(self) -> int:
        return (1 << self.bits) - 1


@dataclass
class Lane:
    """One inserted allele pair with its dominance bytes."""

    primary: int
    secondary: int
    dom_primary: int = 0
    dom_secondary: int = 0


class SlotRecord:
    """
    Bit-packed record with a fixed budget of lanes.

    The record is kept as a tier discriminant plus an explicit list of lanes;
    packed words are only computed by the accessors and ``to_words``.

    Attributes:
        header: Reserved 64-bit word owned by the caller; ``clear`` keeps it
        error_flags: Bitwise FLAG_EXHAUSTED / FLAG_OVERRIDE
    """

    def __init__(self, header: int = 0):
        self.header = header
        self.error_flags = 0
        self._tier: Optional[Tier] = None
        self._lanes: List[Lane] = []
        self._evict_cursor = 0

    @property
    def header(self) -> int:
        return self._header

    @header.setter
    def header(self, value: int) -> None:
        if not 0 <= value <= MAX_SLOT_HEADER:
            raise ValueError(f"Header out of range: {value}")
        self._header = value

    @property
    def tier(self) -> Optional[Tier]:
        return self._tier

    @property
    def lanes(self) -> List[Lane]:
        return list(self._lanes)

    @property
    def used_bytes(self) -> int:
        if self._tier is None:
            return 0
        return len(self._lanes) * self._tier.width

    @property
    def free_bytes(self) -> int:
        return SLOT_DATA_BYTES - self.used_bytes

    def append(
        self,
        tier: Tier | int,
        primary: int,
        secondary: int,
        dom_primary: int = 0,
        dom_secondary: int = 0,
        force: bool = False,
    ) -> int:
        """
        Insert an allele pair into the next free lane of ``tier``.

        Args:
            tier: Tier (or lane width in bytes: 1, 2, 4, 8)
            primary: Primary allele, must fit in the tier width
            secondary: Secondary allele, must fit in the tier width
            dom_primary: Dominance byte of the primary allele
            dom_secondary: Dominance byte of the secondary allele
            force: Evict the oldest lane when the record is full. For
                BITS_64 the whole record is cleared before inserting. A
                record holding another tier is cleared as well.

        Returns:
            Index of the lane that was written

        Raises:
            ValueError: If a value does not fit its field
            SlotExhausted: If the record is full and ``force`` is False
            SlotTierMismatch: If the record holds another tier and ``force``
                is False
        """
        tier = Tier(tier)
        self._validate(tier, primary, secondary, dom_primary, dom_secondary)
        lane = Lane(primary, secondary, dom_primary, dom_secondary)

        evicted = False
        if self._lanes and self._tier is not tier:
            if not force:
                raise SlotTierMismatch(
                    f"Record holds {self._tier.name} lanes, cannot append {tier.name}"
                )
            self._reset()
            evicted = True
        elif force and tier is Tier.BITS_64:
            evicted = bool(self._lanes)
            self._reset()

        if len(self._lanes) < tier.lane_count:
            self._tier = tier
            self._lanes.append(lane)
            index = len(self._lanes) - 1
        elif not force:
            self.error_flags |= FLAG_EXHAUSTED
            raise SlotExhausted(
                f"No free {tier.name} lane ({self.used_bytes}/{SLOT_DATA_BYTES} bytes used)"
            )
        else:
            index = self._evict_cursor
            self._lanes[index] = lane
            self._evict_cursor = (index + 1) % tier.lane_count
            evicted = True

        if evicted:
            self.error_flags = (self.error_flags & ~FLAG_EXHAUSTED) | FLAG_OVERRIDE
            SLOT_OVERRIDES.labels(tier=tier.name).inc()
            warnings.warn(
                SlotOverridden(f"{tier.name} insert evicted existing data (lane {index})"),
                stacklevel=2,
            )
        else:
            self.error_flags &= ~(FLAG_EXHAUSTED | FLAG_OVERRIDE)
        return index

    @staticmethod
    def _validate(
        tier: Tier, primary: int, secondary: int, dom_primary: int, dom_secondary: int
    ) -> None:
        for name, value in (("primary", primary), ("secondary", secondary)):
            if not 0 <= value <= tier.mask:
                raise ValueError(f"{name} value {value:#x} does not fit in {tier.bits} bits")
        for name, value in (("dom_primary", dom_primary), ("dom_secondary", dom_secondary)):
            if not 0 <= value <= 0xFF:
                raise ValueError(f"{name} must be a byte, got {value}")

    def _reset(self) -> None:
        self._tier = None
        self._lanes = []
        self._evict_cursor = 0

    def clear(self) -> None:
        """Drop every lane. The header and error flags are kept."""
        self._reset()

    def clear_errors(self) -> None:
        self.error_flags = 0

    def is_error(self) -> bool:
        return self.error_flags != 0

    def has_override_error(self) -> bool:
        return bool(self.error_flags & FLAG_OVERRIDE)

    def has_exhausted_error(self) -> bool:
        return bool(self.error_flags & FLAG_EXHAUSTED)

    # Packed accessors

    def _pack(self, field: str) -> int:
        if self._tier is None:
            return 0
        shift = self._tier.bits
        word = 0
        for i, lane in enumerate(self._lanes):
            word |= getattr(lane, field) << (i * shift)
        return word

    @property
    def primary(self) -> int:
        return self._pack("primary")

    @property
    def secondary(self) -> int:
        return self._pack("secondary")

    @property
    def dom_primary(self) -> int:
        return self._pack("dom_primary")

    @property
    def dom_secondary(self) -> int:
        return self._pack("dom_secondary")

    def to_words(self) -> PackedWords:
        """Return ``(header, primary, secondary, dom_primary, dom_secondary)``."""
        return (
            self.header,
            self.primary,
            self.secondary,
            self.dom_primary,
            self.dom_secondary,
        )

    @classmethod
    def from_words(
        cls, words: Sequence[int], tier: Tier | int, lane_count: int
    ) -> "SlotRecord":
        """
        Rebuild a record from packed words.

        The tier and lane count are not part of the packed form and must be
        supplied by the caller.

        Raises:
            ValueError: If the lane count does not fit the tier, or bits are
                set outside the used lanes
        """
        if len(words) != 5:
            raise ValueError(f"Expected 5 packed words, got {len(words)}")
        tier = Tier(tier)
        if not 0 <= lane_count <= tier.lane_count:
            raise ValueError(
                f"Invalid lane count {lane_count} for {tier.name} (max {tier.lane_count})"
            )

        header, primary, secondary, dom_primary, dom_secondary = words
        used_mask = (1 << (lane_count * tier.bits)) - 1
        for word in (primary, secondary):
            if word & ~used_mask:
                raise ValueError("Data bits set outside the used lanes")
        dom_mask = 0
        for i in range(lane_count):
            dom_mask |= 0xFF << (i * tier.bits)
        for word in (dom_primary, dom_secondary):
            if word & ~dom_mask:
                raise ValueError("Dominance bits set outside the lane bytes")

        record = cls(header=header)
        for i in range(lane_count):
            shift = i * tier.bits
            record._lanes.append(
                Lane(
                    primary=(primary >> shift) & tier.mask,
                    secondary=(secondary >> shift) & tier.mask,
                    dom_primary=(dom_primary >> shift) & 0xFF,
                    dom_secondary=(dom_secondary >> shift) & 0xFF,
                )
            )
        if lane_count:
            record._tier = tier
        return record

    def to_bytes(self) -> bytes:
        return SLOT_RECORD_STRUCT.pack(*self.to_words())

    @classmethod
    def from_bytes(cls, data: bytes, tier: Tier | int, lane_count: int) -> "SlotRecord":
        if len(data) != SLOT_RECORD_STRUCT.size:
            raise ValueError(
                f"Slot record must be {SLOT_RECORD_STRUCT.size} bytes, got {len(data)}"
            )
        return cls.from_words(SLOT_RECORD_STRUCT.unpack(data), tier, lane_count)

    def __repr__(self) -> str:
        tier = self._tier.name if self._tier else None
        return (
            f"SlotRecord(tier={tier}, used_bytes={self.used_bytes}, "
            f"error_flags={self.error_flags:#x})"
        )
