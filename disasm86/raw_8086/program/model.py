from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import cached_property
from itertools import pairwise

from more_itertools import is_sorted

from ..common import Address
from ..instructions_decoder.model import DecodeError, Instruction


@dataclass(frozen=True, kw_only=True)
class DecodeFailure:
    address: Address  # of the failing instruction, origin based
    offset: int  # of the failing instruction in the binary, same reference as error.offset
    error: DecodeError

    def __post_init__(self) -> None:
        assert self.address >= 0
        assert self.offset >= 0


@dataclass(frozen=True, kw_only=True)
class Program:
    origin: Address
    data: bytes  # starting at origin

    instructions: Sequence[Instruction]
    failures: Sequence[DecodeFailure]

    def __post_init__(self) -> None:
        # must be positive
        assert self.origin >= 0

        # must be sorted
        assert is_sorted(
            (instruction.address for instruction in self.instructions),
            strict=True,
        )

        # must not overlap, gaps are allowed (skipped failures)
        assert all(
            instruction.end_address <= instruction_next.address
            for instruction, instruction_next in pairwise(self.instructions)
        )

        # must be within data
        assert all(
            self.origin <= instruction.address and instruction.end_address <= self.end_address
            for instruction in self.instructions
        )

        # failures must be sorted and within data
        assert is_sorted(failure.address for failure in self.failures)
        assert all(self.origin <= failure.address <= self.end_address for failure in self.failures)

    @property
    def end_address(self) -> Address:
        return self.origin + len(self.data)

    @cached_property
    def size(self) -> int:
        # bytes covered by decoded instructions
        return sum(instruction.size for instruction in self.instructions)

    @cached_property
    def by_address(self) -> Mapping[Address, Instruction]:
        return {instruction.address: instruction for instruction in self.instructions}

    def instruction_bytes(self, instruction: Instruction) -> bytes:
        offset = instruction.address - self.origin
        return self.data[offset : offset + instruction.size]
