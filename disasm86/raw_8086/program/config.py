from enum import StrEnum
from typing import Annotated, Self

from annotated_types import Ge, Le
from pydantic import BaseModel, Field

from ..common import ADDRESS_MAX
from ..instructions_decoder.config import Config as InstructionsDecoder


class ErrorPolicy(StrEnum):
    # what to do when single instruction fails to decode
    STOP = "stop"  # record the error, keep instructions decoded so far (recommended)
    SKIP = "skip"  # record the error, step over the failing instruction (or one byte, if its size is unknown)
    RAISE = "raise"  # propagate the error to the caller


type ConfigOrigin = Annotated[int, Ge(0), Le(ADDRESS_MAX)]  # physical address


class Config(BaseModel):
    # program decoder configuration

    # address at which the first decoded byte is loaded
    origin: ConfigOrigin = 0

    # offset in the binary where decoding starts, bytes before are ignored
    start: Annotated[int, Ge(0)] = 0

    # see ErrorPolicy for details
    error_policy: ErrorPolicy = ErrorPolicy.STOP

    # see InstructionsDecoder for details
    instructions_decoder: InstructionsDecoder = Field(default_factory=InstructionsDecoder.default)

    @classmethod
    def default(cls) -> Self:
        return cls()
