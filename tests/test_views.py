"""Tests for the 32/64-bit aligned views."""
import pytest

from dnastore.core import ByteBuffer, Int32View, Int64View
from dnastore.core.views import AlignedView


@pytest.mark.unit
@pytest.mark.parametrize(
    "length, expected",
    [(0, 0), (1, 1), (3, 1), (4, 1), (5, 2), (8, 2), (9, 3)],
)
def test_next_aligned_slot_32(length: int, expected: int) -> None:
    buf = ByteBuffer.from_bytes(0, bytes(length))
    assert Int32View(buf).next_aligned_slot() == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "length, expected",
    [(0, 0), (1, 1), (7, 1), (8, 1), (9, 2), (16, 2), (17, 3)],
)
def test_next_aligned_slot_64(length: int, expected: int) -> None:
    buf = ByteBuffer.from_bytes(0, bytes(length))
    assert Int64View(buf).next_aligned_slot() == expected


@pytest.mark.unit
def test_set_value_is_little_endian() -> None:
    buf = ByteBuffer(0, 8)
    Int32View(buf).set_value(1, 0x11223344)

    assert buf.length == 8
    assert buf.data() == b"\x00\x00\x00\x00\x44\x33\x22\x11"


@pytest.mark.unit
@pytest.mark.parametrize("view_cls", [Int32View, Int64View])
@pytest.mark.parametrize("unit_offset", [0, 1, 5])
def test_read_back_written_values(view_cls: type, unit_offset: int) -> None:
    buf = ByteBuffer(0, 4)
    view = view_cls(buf)
    values = [0, 1, 0x80, view.max_value, 0x0102030405060708 & view.max_value]

    for value in values:
        view.set_value(unit_offset, value)
        assert view.read_value(unit_offset) == value
        assert buf.capacity >= buf.length


@pytest.mark.unit
def test_set_value_rejects_values_that_do_not_fit() -> None:
    buf = ByteBuffer(0, 4)
    with pytest.raises(ValueError):
        Int32View(buf).set_value(0, 1 << 32)
    with pytest.raises(ValueError):
        Int64View(buf).set_value(0, -1)
    with pytest.raises(IndexError):
        Int32View(buf).set_value(-1, 0)
    assert buf.length == 0


@pytest.mark.unit
def test_append_value_aligns_after_odd_length() -> None:
    buf = ByteBuffer(0, 4)
    buf.append_byte(0xEE)
    view = Int32View(buf)

    slot = view.append_value(0xCAFEBABE)

    assert slot == 1
    assert buf.length == 8
    assert buf.byte_at(0) == 0xEE
    assert buf.data()[1:4] == b"\x00\x00\x00"
    assert view.read_value(1) == 0xCAFEBABE


@pytest.mark.unit
def test_mixed_width_scenario(empty_buffer: ByteBuffer) -> None:
    wrap64 = Int64View(empty_buffer)
    wrap32 = Int32View(empty_buffer)

    assert wrap32.append_value(0xFF04) == 0
    assert wrap64.append_value(0xFFFFFFFFFFFF11) == 1

    assert empty_buffer.length >= 16
    assert empty_buffer.capacity >= empty_buffer.length
    assert wrap32.read_value(0) == 0xFF04
    assert wrap64.read_value(1) == 0xFFFFFFFFFFFF11
    assert empty_buffer.hexdump() == (
        "4-255-0-0-0-0-0-0-17-255-255-255-255-255-255-0-"
    )


@pytest.mark.unit
def test_typed_write_triggers_growth_and_keeps_prefix() -> None:
    buf = ByteBuffer.from_bytes(0, b"\x01\x02\x03")
    view = Int64View(buf)

    view.append_value(0xAABBCCDDEEFF0011)

    assert buf.length == 16
    assert buf.capacity == 18
    assert buf.data()[:3] == b"\x01\x02\x03"
    assert view.read_value(1) == 0xAABBCCDDEEFF0011


@pytest.mark.unit
def test_read_value_past_capacity_raises() -> None:
    buf = ByteBuffer(0, 6)
    with pytest.raises(IndexError):
        Int32View(buf).read_value(1)


@pytest.mark.unit
def test_values_iterates_whole_units() -> None:
    buf = ByteBuffer(0, 16)
    view = Int32View(buf)
    for value in (1, 2, 3):
        view.append_value(value)

    assert list(view.values()) == [1, 2, 3]
    assert view.unit_count() == 3


@pytest.mark.unit
def test_base_view_requires_width() -> None:
    with pytest.raises(TypeError):
        AlignedView(ByteBuffer(0, 4))
