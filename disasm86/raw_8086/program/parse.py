from logging import getLogger

from ..common import address_format
from ..instructions_decoder.cursor import BitCursor
from ..instructions_decoder.model import DecodeError, Instruction, InsufficientInput, UnimplementedVariant
from ..instructions_decoder.parse import instruction_from_cursor
from .config import Config, ErrorPolicy
from .model import DecodeFailure, Program

_logger = getLogger(__name__)


def parse(data: bytes, config: Config) -> Program:
    # data is the whole binary, decoding starts at config.start which is loaded at config.origin
    # error offsets stay relative to the whole binary
    if config.start > len(data):
        raise ValueError(f"Start offset ({config.start}) is past the end of the binary ({len(data)} bytes)")

    instructions = list[Instruction]()
    failures = list[DecodeFailure]()

    cursor = BitCursor.from_bytes(data, config.start)
    while not cursor.at_end():
        offset = cursor.byte_index
        address = config.origin + (offset - config.start)

        try:
            instruction, cursor = instruction_from_cursor(cursor, address, config.instructions_decoder)
        except DecodeError as exception:
            if config.error_policy is ErrorPolicy.RAISE:
                raise

            _logger.warning(
                "Unable to decode instruction at %s (offset 0x%04X): %s",
                address_format(address),
                offset,
                exception,
            )
            failures.append(DecodeFailure(address=address, offset=offset, error=exception))

            skip = skip_size(exception)
            if config.error_policy is ErrorPolicy.STOP or skip is None:
                _logger.info("Decoding stopped at %s", address_format(address))
                break

            cursor = BitCursor(data, offset + skip)
            continue

        instructions.append(instruction)

    return Program(
        origin=config.origin,
        data=data[config.start :],
        instructions=instructions,
        failures=failures,
    )


def skip_size(exception: DecodeError) -> int | None:
    # number of bytes to step over failed instruction, None if there is nothing to step to
    match exception:
        case InsufficientInput():
            return None
        case UnimplementedVariant(size=int(size)):
            return size
        case _:
            return 1
