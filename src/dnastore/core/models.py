"""
DNA file data models and structures.
"""

from dataclasses import dataclass

from dnastore.core.constants import UNIT_SIZE_TAG
from dnastore.core.errors import FormatMismatch


@dataclass
class RecordHeader:
    """
    Parsed fixed header of one serialized buffer.

    Attributes:
        data_length: Number of raw bytes following the header
        unit_size: Unit size tag (must equal UNIT_SIZE_TAG)
        seed: Buffer identity
        header_words: Reserved 4-byte words read after the seed, sentinel included
    """

    data_length: int
    unit_size: int
    seed: int
    header_words: int = 2

    def validate(self) -> None:
        """Validate the tag fields."""
        if self.unit_size != UNIT_SIZE_TAG:
            raise FormatMismatch(
                f"Unsupported unit size: {self.unit_size} (expected {UNIT_SIZE_TAG})"
            )

    def __repr__(self) -> str:
        return (
            f"RecordHeader(seed={self.seed}, "
            f"data_length={self.data_length}, unit_size={self.unit_size})"
        )


@dataclass
class CodecStats:
    """
    Size summary of a batch of buffers.
    """

    buffer_count: int
    data_size_bytes: int
    encoded_size_bytes: int

    @property
    def overhead_bytes(self) -> int:
        """Bytes spent on counts, headers and tags."""
        return self.encoded_size_bytes - self.data_size_bytes

    def __repr__(self) -> str:
        return (
            f"CodecStats(buffers={self.buffer_count}, "
            f"data={self._human_size(self.data_size_bytes)}, "
            f"encoded={self._human_size(self.encoded_size_bytes)})"
        )

    @staticmethod
    def _human_size(size_bytes: float) -> str:
        """Format bytes as human-readable string."""
        for unit in ["B", "KB", "MB", "GB", "TB"]:
            if size_bytes < 1024:
                return f"{size_bytes:.1f}{unit}"
            size_bytes /= 1024
        return f"{size_bytes:.1f}PB"
