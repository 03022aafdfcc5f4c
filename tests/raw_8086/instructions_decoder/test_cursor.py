import pytest

from disasm86.raw_8086.instructions_decoder.cursor import BitCursor
from disasm86.raw_8086.instructions_decoder.model import InsufficientInput


def test_take_msb_first() -> None:
    cursor = BitCursor.from_bytes(b"\x89\xD8")

    value, cursor = cursor.take(4)
    assert value == 0b1000
    assert (cursor.byte_index, cursor.bit_offset) == (0, 4)

    value, cursor = cursor.take(2)
    assert value == 0b10
    assert (cursor.byte_index, cursor.bit_offset) == (0, 6)


def test_take_across_byte_boundary() -> None:
    cursor = BitCursor.from_bytes(b"\x89\xD8", 0, 4)

    value, cursor = cursor.take(8)
    assert value == 0b1001_1101
    assert (cursor.byte_index, cursor.bit_offset) == (1, 4)


def test_take_rolls_over_to_next_byte() -> None:
    value, cursor = BitCursor.from_bytes(b"\xAB\xCD").take(8)

    assert value == 0xAB
    assert (cursor.byte_index, cursor.bit_offset) == (1, 0)
    assert cursor.aligned


def test_take_word() -> None:
    value, cursor = BitCursor.from_bytes(b"\x12\x34").take(16)

    assert value == 0x1234
    assert cursor.at_end()


def test_take_does_not_mutate() -> None:
    cursor = BitCursor.from_bytes(b"\xF0")

    first, _ = cursor.take(4)
    second, _ = cursor.take(4)

    assert first == second == 0b1111
    assert cursor.bit_position == 0


def test_take_bool() -> None:
    cursor = BitCursor.from_bytes(b"\x80")

    flag, cursor = cursor.take_bool()
    assert flag is True

    flag, cursor = cursor.take_bool()
    assert flag is False
    assert cursor.bits_remaining == 6


def test_take_insufficient_input() -> None:
    cursor = BitCursor.from_bytes(b"\xFF")

    with pytest.raises(InsufficientInput) as exception_info:
        cursor.take(9)

    assert exception_info.value.offset == 1
    assert exception_info.value.bits_requested == 9
    assert exception_info.value.bits_available == 8


def test_take_empty_buffer() -> None:
    cursor = BitCursor.from_bytes(b"")

    assert cursor.at_end()
    with pytest.raises(InsufficientInput):
        cursor.take(1)


def test_invalid_position() -> None:
    with pytest.raises(AssertionError):
        BitCursor(b"\x00", 0, 8)

    with pytest.raises(AssertionError):
        BitCursor(b"\x00", 2, 0)

    with pytest.raises(AssertionError):
        BitCursor(b"\x00", 1, 3)


def test_repr_does_not_dump_data() -> None:
    assert repr(BitCursor.from_bytes(bytes(1024), 3, 2)) == "BitCursor(byte_index=3, bit_offset=2, size=1024)"
