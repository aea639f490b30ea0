"""
BinaryCodec: persists sequences of ByteBuffers.

File layout (little-endian):

    [4B] buffer_count
    per buffer:
        [4B] data_length
        [4B] unit_size   (UNIT_SIZE_TAG = 16)
        [8B] seed
        [4B] format_id   (FORMAT_ID = 1)
        [4B] sentinel    (0x0A)
        [data_length bytes] raw data

A read either returns every buffer or raises; partial results are dropped.
"""

from __future__ import annotations

import io
import os
from typing import BinaryIO, Iterable, List, Optional

from dnastore.config import CodecConfig
from dnastore.core.buffer import ByteBuffer
from dnastore.core.constants import (
    COUNT_SIZE,
    COUNT_STRUCT,
    FORMAT_ID,
    HEADER_SENTINEL,
    MAX_BUFFER_COUNT,
    RECORD_FIXED_SIZE,
    RECORD_FIXED_STRUCT,
    UNIT_SIZE_TAG,
    WORD_SIZE,
    WORD_STRUCT,
)
from dnastore.core.errors import CodecError, FormatMismatch, TruncatedRecord
from dnastore.core.models import CodecStats, RecordHeader
from dnastore.monitoring.metrics import (
    BUFFERS_DESERIALIZED,
    BUFFERS_SERIALIZED,
    BYTES_SERIALIZED,
    CODEC_FAILURES,
)
from dnastore.utils.logging import get_logger, log_context

logger = get_logger(__name__)


class BinaryCodec:
    """
    Encoder/decoder for the DNA buffer file format.
    """

    def __init__(self, config: Optional[CodecConfig] = None):
        """
        Args:
            config: Codec settings; ``max_header_words`` bounds the reserved
                header scan on read
        """
        self.config = config or CodecConfig()
        self.max_header_words = self.config.max_header_words

    def new_buffer(self, seed: int) -> ByteBuffer:
        """Create an empty buffer sized by ``config.default_capacity``."""
        return ByteBuffer(seed, self.config.default_capacity)

    # Writing

    def write_stream(self, stream: BinaryIO, buffers: Iterable[ByteBuffer]) -> int:
        """
        Write ``buffers`` to ``stream``.

        Returns:
            Number of bytes written

        Raises:
            TypeError: If an item is not a ByteBuffer
            ValueError: If there are more buffers than the count field holds
        """
        items = list(buffers)
        for buf in items:
            if not isinstance(buf, ByteBuffer):
                raise TypeError(f"Expected ByteBuffer, got {type(buf).__name__}")
        if len(items) > MAX_BUFFER_COUNT:
            raise ValueError(f"Too many buffers: {len(items)} (max {MAX_BUFFER_COUNT})")

        written = stream.write(COUNT_STRUCT.pack(len(items)))
        for buf in items:
            length = buf.length
            written += stream.write(RECORD_FIXED_STRUCT.pack(length, UNIT_SIZE_TAG, buf.seed))
            written += stream.write(WORD_STRUCT.pack(FORMAT_ID))
            written += stream.write(WORD_STRUCT.pack(HEADER_SENTINEL))
            written += stream.write(buf.raw_bytes()[:length])
        return written

    def dumps(self, buffers: Iterable[ByteBuffer]) -> bytes:
        out = io.BytesIO()
        self.write_stream(out, buffers)
        return out.getvalue()

    def serialize(self, path: str | os.PathLike[str], buffers: Iterable[ByteBuffer]) -> int:
        """
        Write ``buffers`` to ``path``, truncating any existing file.

        The payload is encoded in memory first, so nothing is written when
        encoding fails.

        Returns:
            Number of bytes written

        Raises:
            OSError: If the file cannot be opened or written
        """
        with log_context(path=os.fspath(path)):
            items = list(buffers)
            payload = self.dumps(items)
            try:
                with open(path, "wb") as f:
                    f.write(payload)
            except OSError as e:
                CODEC_FAILURES.labels(operation="serialize", reason=type(e).__name__).inc()
                logger.error("serialize_failed", error=str(e))
                raise

            BUFFERS_SERIALIZED.inc(len(items))
            BYTES_SERIALIZED.inc(sum(buf.length for buf in items))
            logger.info(
                "buffers_serialized", buffer_count=len(items), size_bytes=len(payload)
            )
            return len(payload)

    # Reading

    @staticmethod
    def _read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
        data = stream.read(size)
        if data is None or len(data) < size:
            raise TruncatedRecord(what, size, 0 if data is None else len(data))
        return data

    def _read_word(self, stream: BinaryIO, what: str) -> int:
        (word,) = WORD_STRUCT.unpack(self._read_exact(stream, WORD_SIZE, what))
        return word

    def _read_header(self, stream: BinaryIO) -> RecordHeader:
        """
        Read the fixed header and the reserved word region of one record.

        Raises:
            FormatMismatch: On a bad unit size or format id, or when no
                sentinel shows up within ``max_header_words`` words
            TruncatedRecord: If the stream ends inside the header
        """
        data_length, unit_size, seed = RECORD_FIXED_STRUCT.unpack(
            self._read_exact(stream, RECORD_FIXED_SIZE, "record header")
        )
        header = RecordHeader(data_length=data_length, unit_size=unit_size, seed=seed)
        header.validate()

        format_id = self._read_word(stream, "format id")
        if format_id != FORMAT_ID:
            raise FormatMismatch(f"Unsupported format id: {format_id} (expected {FORMAT_ID})")

        words = 1
        while True:
            if words >= self.max_header_words:
                raise FormatMismatch(
                    f"Header sentinel not found within {self.max_header_words} words"
                )
            word = self._read_word(stream, "header word")
            words += 1
            if word == HEADER_SENTINEL:
                break

        header.header_words = words
        return header

    def read_stream(self, stream: BinaryIO) -> List[ByteBuffer]:
        """
        Read every buffer stored in ``stream``.

        Raises:
            FormatMismatch: If a tag is unexpected
            TruncatedRecord: If the stream ends before a declared field
        """
        (count,) = COUNT_STRUCT.unpack(self._read_exact(stream, COUNT_SIZE, "buffer count"))

        buffers: List[ByteBuffer] = []
        for _ in range(count):
            header = self._read_header(stream)
            data = self._read_exact(stream, header.data_length, "record data")
            buffers.append(ByteBuffer.from_bytes(header.seed, data))
        return buffers

    def _read_all(self, stream: BinaryIO) -> List[ByteBuffer]:
        try:
            buffers = self.read_stream(stream)
            if stream.read(1):
                raise FormatMismatch("Trailing data after last record")
        except CodecError as e:
            CODEC_FAILURES.labels(operation="deserialize", reason=type(e).__name__).inc()
            logger.warning("deserialize_failed", reason=type(e).__name__, error=str(e))
            raise

        BUFFERS_DESERIALIZED.inc(len(buffers))
        logger.info("buffers_deserialized", buffer_count=len(buffers))
        return buffers

    def loads(self, data: bytes) -> List[ByteBuffer]:
        return self._read_all(io.BytesIO(data))

    def deserialize(self, path: str | os.PathLike[str]) -> List[ByteBuffer]:
        """
        Read every buffer stored at ``path``.

        Raises:
            OSError: If the file cannot be opened
            FormatMismatch: If a tag is unexpected or data trails the records
            TruncatedRecord: If the file ends before a declared field
        """
        with log_context(path=os.fspath(path)):
            with open(path, "rb") as f:
                return self._read_all(f)

    def stats(self, buffers: Iterable[ByteBuffer]) -> CodecStats:
        """Size summary of what ``serialize`` would write for ``buffers``."""
        items = list(buffers)
        data_size = sum(buf.length for buf in items)
        per_record = RECORD_FIXED_SIZE + 2 * WORD_SIZE
        return CodecStats(
            buffer_count=len(items),
            data_size_bytes=data_size,
            encoded_size_bytes=COUNT_SIZE + per_record * len(items) + data_size,
        )


def serialize(
    path: str | os.PathLike[str],
    buffers: Iterable[ByteBuffer],
    config: Optional[CodecConfig] = None,
) -> int:
    """Write ``buffers`` to ``path`` with a default codec."""
    return BinaryCodec(config).serialize(path, buffers)


def deserialize(
    path: str | os.PathLike[str], config: Optional[CodecConfig] = None
) -> List[ByteBuffer]:
    """Read buffers from ``path`` with a default codec."""
    return BinaryCodec(config).deserialize(path)
