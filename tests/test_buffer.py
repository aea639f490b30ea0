"""Tests for the growable byte buffer."""
import random

import pytest

from dnastore.core import AllocationFailure, ByteBuffer, GrowthInvariantViolation
from dnastore.core.constants import MAX_BUFFER_LENGTH, MAX_SEED


@pytest.mark.unit
def test_new_buffer_is_empty_and_zeroed(empty_buffer: ByteBuffer) -> None:
    assert empty_buffer.seed == 0
    assert empty_buffer.length == 0
    assert len(empty_buffer) == 0
    assert empty_buffer.capacity == 16
    assert all(empty_buffer.byte_at(i) == 0 for i in range(16))
    assert empty_buffer.data() == b""


@pytest.mark.unit
def test_from_bytes_copies_data() -> None:
    src = bytearray(b"\x01\x02\x03")
    buf = ByteBuffer.from_bytes(42, src)
    src[0] = 0xFF

    assert buf.seed == 42
    assert buf.length == buf.capacity == 3
    assert buf.data() == b"\x01\x02\x03"


@pytest.mark.unit
def test_from_bytes_rejects_non_bytes() -> None:
    with pytest.raises(TypeError):
        ByteBuffer.from_bytes(0, "abc")  # type: ignore[arg-type]


@pytest.mark.unit
@pytest.mark.parametrize("seed", [-1, MAX_SEED + 1])
def test_seed_out_of_range(seed: int) -> None:
    with pytest.raises(ValueError):
        ByteBuffer(seed, 4)


@pytest.mark.unit
def test_append_byte_moves_length() -> None:
    buf = ByteBuffer(1, 4)
    buf.append_byte(0xAA)
    buf.append_byte(0xBB)

    assert buf.length == 2
    assert buf.capacity == 4
    assert buf.data() == b"\xaa\xbb"


@pytest.mark.unit
def test_set_byte_past_length_pads_with_zero() -> None:
    buf = ByteBuffer(1, 8)
    buf.set_byte(5, 9)

    assert buf.length == 6
    assert buf.data() == b"\x00\x00\x00\x00\x00\x09"


@pytest.mark.unit
def test_set_byte_below_length_keeps_length() -> None:
    buf = ByteBuffer.from_bytes(1, b"abcd")
    buf.set_byte(1, ord("X"))

    assert buf.length == 4
    assert buf.data() == b"aXcd"


@pytest.mark.unit
def test_growth_doubles_new_length_and_preserves_prefix() -> None:
    buf = ByteBuffer(3, 4)
    buf.append_bytes(b"\x01\x02\x03\x04")
    assert buf.capacity == 4

    buf.append_byte(5)

    assert buf.length == 5
    assert buf.capacity == 10
    assert buf.data() == b"\x01\x02\x03\x04\x05"
    assert bytes(buf.raw_bytes()[5:]) == b"\x00" * 5


@pytest.mark.unit
def test_growth_from_zero_capacity() -> None:
    buf = ByteBuffer(0, 0)
    buf.append_byte(7)

    assert buf.length == 1
    assert buf.capacity == 2


@pytest.mark.unit
def test_capacity_never_below_length_random_writes() -> None:
    rng = random.Random(1234)
    buf = ByteBuffer(9, 1)
    shadow = {}

    for _ in range(500):
        old_length = buf.length
        before = buf.data()
        if rng.random() < 0.5:
            offset = rng.randrange(0, buf.length + 40)
            value = rng.randrange(256)
            buf.set_byte(offset, value)
        else:
            offset = buf.length
            value = rng.randrange(256)
            buf.append_byte(value)
        shadow[offset] = value

        assert buf.capacity >= buf.length
        # bytes below the old length are untouched except the one written
        after = buf.data()
        for i in range(old_length):
            if i != offset:
                assert after[i] == before[i]

    for offset, value in shadow.items():
        assert buf.byte_at(offset) == value


@pytest.mark.unit
def test_byte_at_padding_reads_zero_and_bounds() -> None:
    buf = ByteBuffer(0, 8)
    buf.append_byte(1)

    assert buf.byte_at(7) == 0
    with pytest.raises(IndexError):
        buf.byte_at(8)
    with pytest.raises(IndexError):
        buf.byte_at(-1)


@pytest.mark.unit
def test_set_byte_rejects_bad_arguments() -> None:
    buf = ByteBuffer(0, 4)
    with pytest.raises(ValueError):
        buf.set_byte(0, 256)
    with pytest.raises(ValueError):
        buf.set_byte(0, -1)
    with pytest.raises(IndexError):
        buf.set_byte(-1, 0)
    assert buf.length == 0


@pytest.mark.unit
def test_resize_refuses_to_drop_data() -> None:
    buf = ByteBuffer.from_bytes(5, b"abcdef")

    with pytest.raises(GrowthInvariantViolation) as excinfo:
        buf.resize(3)

    assert excinfo.value.requested == 3
    assert excinfo.value.length == 6
    assert buf.capacity == 6
    assert buf.data() == b"abcdef"


@pytest.mark.unit
def test_resize_can_shrink_padding() -> None:
    buf = ByteBuffer(5, 32)
    buf.append_bytes(b"xy")
    buf.resize(2)

    assert buf.capacity == 2
    assert buf.data() == b"xy"


@pytest.mark.unit
def test_allocation_beyond_format_limit() -> None:
    with pytest.raises(AllocationFailure):
        ByteBuffer(0, MAX_BUFFER_LENGTH + 1)

    buf = ByteBuffer(0, 0)
    with pytest.raises(AllocationFailure):
        buf.set_byte(MAX_BUFFER_LENGTH, 1)
    assert buf.length == 0


@pytest.mark.unit
def test_raw_bytes_is_read_only_and_includes_padding() -> None:
    buf = ByteBuffer(0, 6)
    buf.append_bytes(b"\x01\x02")
    raw = buf.raw_bytes()

    assert len(raw) == 6
    assert raw.readonly
    with pytest.raises(TypeError):
        raw[0] = 9


@pytest.mark.unit
def test_equality_uses_seed_and_logical_data() -> None:
    a = ByteBuffer(1, 32)
    a.append_bytes(b"hi")
    b = ByteBuffer.from_bytes(1, b"hi")
    c = ByteBuffer.from_bytes(2, b"hi")

    assert a == b
    assert a != c
    assert "length=2" in repr(a)


@pytest.mark.unit
def test_hexdump_covers_whole_capacity() -> None:
    buf = ByteBuffer(0, 4)
    buf.append_byte(255)

    assert buf.hexdump() == "255-0-0-0-"
