from collections.abc import Generator

from ..common import Address as MemoryAddress
from . import model
from .config import Config
from .cursor import BitCursor
from .opcodes import classify

MODE_REGISTER = 0b11


def instructions_from_bytes(data: bytes, config: Config, origin: MemoryAddress = 0) -> Generator[model.Instruction]:
    """
    Decodes whole `data` as a sequence of instructions, `origin` being the address of the first byte. Stops cleanly when
    the buffer ends on an instruction boundary, any decode error is propagated.
    """

    cursor = BitCursor.from_bytes(data)

    while not cursor.at_end():
        instruction, cursor = instruction_from_cursor(cursor, origin + cursor.byte_index, config)
        yield instruction


def instruction_from_cursor(
    cursor: BitCursor, address: MemoryAddress, config: Config
) -> tuple[model.Instruction, BitCursor]:
    try:
        return _instruction_from_cursor(cursor, address, config)
    except model.DecodeError as exception:
        exception.add_note(f"instruction started at offset 0x{cursor.byte_index:04X}")
        raise


def _instruction_from_cursor(
    cursor_start: BitCursor, address: MemoryAddress, config: Config
) -> tuple[model.Instruction, BitCursor]:
    classification, cursor = classify(cursor_start)

    destination: model.Location
    source: model.Source

    match classification.op:
        case model.Op.MOV_REGISTER_MEMORY:
            # 100010dw | mod reg r/m | disp-lo | disp-hi
            d, cursor = cursor.take_bool()
            w, cursor = cursor.take_bool()
            mode, cursor = cursor.take(2)
            register, cursor = register_from_cursor(cursor, w)
            location, cursor = location_from_cursor(cursor, mode, w, config)

            # d=1 - reg field is the destination
            if d:
                destination, source = register, location
            else:
                destination, source = location, register
        case model.Op.MOV_IMMEDIATE_REGISTER:
            # 1011wreg | data | data if w=1
            w, cursor = cursor.take_bool()
            register, cursor = register_from_cursor(cursor, w)
            immediate, cursor = immediate_from_cursor(cursor, w)

            destination, source = register, immediate
        case model.Op.REGISTER_MEMORY_GROUP:
            # 11111111 | mod ext r/m | disp-lo | disp-hi
            # semantics are not modelled, but the layout is, so the size can be reported
            mode, cursor = cursor.take(2)
            _, cursor = cursor.take(3)
            _, cursor = location_from_cursor(cursor, mode, True, config)

            raise model.UnimplementedVariant(
                cursor_start.byte_index,
                classification.op,
                _size(cursor_start, cursor),
            )
        case model.Op.MOV_IMMEDIATE_MEMORY | model.Op.MOV_ACCUMULATOR:
            raise model.UnimplementedVariant(cursor_start.byte_index, classification.op, None)
        case model.Op.UNRECOGNIZED:
            raise model.UnsupportedOpcode(cursor_start.byte_index, classification.bits, classification.width)
        case _:
            assert False

    instruction = model.Instruction(
        address=address,
        size=_size(cursor_start, cursor),
        op=classification.op,
        destination=destination,
        source=source,
    )

    return instruction, cursor


def register_from_cursor(cursor: BitCursor, word: bool) -> tuple[model.Register, BitCursor]:
    field, cursor = cursor.take(3)
    return model.register_from_field(field, word), cursor


def location_from_cursor(
    cursor: BitCursor, mode: int, word: bool, config: Config
) -> tuple[model.Location, BitCursor]:
    """
    Decodes r/m field (and displacement following the instruction, if any) according to already consumed `mode`.
    """
    assert 0 <= mode <= 0b11

    if mode == MODE_REGISTER:
        return register_from_cursor(cursor, word)

    return effective_address_from_cursor(cursor, mode, config)


def effective_address_from_cursor(
    cursor: BitCursor, mode: int, config: Config
) -> tuple[model.EffectiveAddress, BitCursor]:
    address, cursor = address_from_cursor(cursor)

    match mode:
        case 0b00:
            if config.direct_address and address is model.Address.BP:
                # there is no [bp] without displacement, this slot encodes direct address
                displacement, cursor = immediate_from_cursor(cursor, True)
                assert isinstance(displacement, model.ImmediateWord)

                return model.EffectiveAddressDirect(displacement), cursor

            return model.EffectiveAddressBare(address), cursor
        case 0b01:
            displacement, cursor = immediate_from_cursor(cursor, False)
            return model.EffectiveAddressWithOffset(address, displacement), cursor
        case 0b10:
            displacement, cursor = immediate_from_cursor(cursor, True)
            return model.EffectiveAddressWithOffset(address, displacement), cursor
        case _:
            assert False


def address_from_cursor(cursor: BitCursor) -> tuple[model.Address, BitCursor]:
    field, cursor = cursor.take(3)
    return model.Address(field), cursor


def immediate_from_cursor(cursor: BitCursor, word: bool) -> tuple[model.Immediate, BitCursor]:
    """
    Reads 8-bit, or 16-bit little endian (low byte first) literal.
    """

    low, cursor = cursor.take(8)
    if not word:
        return model.ImmediateByte(low), cursor

    high, cursor = cursor.take(8)
    return model.ImmediateWord(low + (high << 8)), cursor


def _size(cursor_start: BitCursor, cursor_end: BitCursor) -> int:
    bits = cursor_end.bit_position - cursor_start.bit_position

    # every path through the decoder consumes whole bytes
    assert bits > 0 and bits % 8 == 0

    return bits // 8
