from collections.abc import Sequence
from dataclasses import dataclass

from .cursor import BitCursor
from .model import Op

# the leading nibble is the only field with the same width and meaning in every family, so it always goes first
NIBBLE_BITS = 4


@dataclass(frozen=True, kw_only=True)
class OpcodeEntry:
    nibble: int
    extension_width: int = 0  # bits following the nibble which are part of the opcode
    extension_value: int | None = None  # None - extension bits are read and discarded
    op: Op

    def __post_init__(self) -> None:
        assert 0 <= self.nibble < (1 << NIBBLE_BITS)
        assert self.extension_width >= 0
        assert self.extension_value is None or self.extension_width > 0
        assert self.extension_value is None or 0 <= self.extension_value < (1 << self.extension_width)
        assert self.op is not Op.UNRECOGNIZED


# first matching entry wins
OPCODES: Sequence[OpcodeEntry] = (
    # 100010dw
    # NOTE: 1000 00xx/01xx/11xx belong to other families, but this subset treats the two bits as an extension of mov
    OpcodeEntry(nibble=0b1000, extension_width=2, op=Op.MOV_REGISTER_MEMORY),
    # 1011wreg
    OpcodeEntry(nibble=0b1011, op=Op.MOV_IMMEDIATE_REGISTER),
    # 1100011w
    OpcodeEntry(nibble=0b1100, op=Op.MOV_IMMEDIATE_MEMORY),
    # 101000dw
    OpcodeEntry(nibble=0b1010, op=Op.MOV_ACCUMULATOR),
    # 11111111
    OpcodeEntry(nibble=0b1111, extension_width=4, extension_value=0b1111, op=Op.REGISTER_MEMORY_GROUP),
)


@dataclass(frozen=True)
class Classification:
    op: Op
    bits: int  # raw opcode bits consumed
    width: int


def classify(cursor: BitCursor, opcodes: Sequence[OpcodeEntry] = OPCODES) -> tuple[Classification, BitCursor]:
    nibble, cursor_nibble = cursor.take(NIBBLE_BITS)

    for entry in opcodes:
        if entry.nibble != nibble:
            continue

        if entry.extension_width == 0:
            return Classification(entry.op, nibble, NIBBLE_BITS), cursor_nibble

        extension, cursor_extension = cursor_nibble.take(entry.extension_width)
        if entry.extension_value is not None and extension != entry.extension_value:
            # cursor is immutable, next entry starts again right after the nibble
            continue

        return (
            Classification(
                entry.op,
                (nibble << entry.extension_width) | extension,
                NIBBLE_BITS + entry.extension_width,
            ),
            cursor_extension,
        )

    return Classification(Op.UNRECOGNIZED, nibble, NIBBLE_BITS), cursor_nibble
