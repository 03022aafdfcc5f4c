from dataclasses import dataclass, replace
from typing import Self

from .model import InsufficientInput

# widest single field any decoder reads in one go
TAKE_BITS_MAX = 16


@dataclass(frozen=True)
class BitCursor:
    data: bytes
    byte_index: int = 0
    bit_offset: int = 0  # 0 - MSB of the current byte

    def __post_init__(self) -> None:
        # bit offset must be within the byte
        assert 0 <= self.bit_offset < 8

        # must point into the buffer or right past its end
        assert 0 <= self.byte_index <= len(self.data)

        # past the end there is no byte to be in the middle of
        assert self.byte_index < len(self.data) or self.bit_offset == 0

    @classmethod
    def from_bytes(cls, data: bytes, byte_index: int = 0, bit_offset: int = 0) -> Self:
        return cls(bytes(data), byte_index, bit_offset)

    @property
    def bit_position(self) -> int:
        return self.byte_index * 8 + self.bit_offset

    @property
    def bits_remaining(self) -> int:
        return len(self.data) * 8 - self.bit_position

    @property
    def aligned(self) -> bool:
        return self.bit_offset == 0

    def at_end(self) -> bool:
        return self.bits_remaining == 0

    def take(self, bits: int) -> tuple[int, Self]:
        """
        Extracts next `bits` bits as unsigned integer, MSB first. Returns the value and the advanced cursor, `self` is
        left untouched.
        """
        assert 0 < bits <= TAKE_BITS_MAX

        bits_remaining = self.bits_remaining
        if bits > bits_remaining:
            raise InsufficientInput(len(self.data), bits, bits_remaining)

        value = 0
        byte_index = self.byte_index
        bit_offset = self.bit_offset
        bits_left = bits
        while bits_left > 0:
            # take as much as possible from the current byte
            chunk = min(8 - bit_offset, bits_left)
            shift = 8 - bit_offset - chunk
            value = (value << chunk) | ((self.data[byte_index] >> shift) & ((1 << chunk) - 1))

            bits_left -= chunk
            bit_offset += chunk
            if bit_offset == 8:
                byte_index += 1
                bit_offset = 0

        return value, replace(self, byte_index=byte_index, bit_offset=bit_offset)

    def take_bool(self) -> tuple[bool, Self]:
        value, next_ = self.take(1)
        return value == 1, next_

    def __repr__(self) -> str:
        # buffer may be huge, don't dump it
        return f"BitCursor(byte_index={self.byte_index}, bit_offset={self.bit_offset}, size={len(self.data)})"
