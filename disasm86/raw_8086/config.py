from typing import Literal, Self

from pydantic import BaseModel, Field

from .program.config import Config as Program


class Config(BaseModel):
    # main configuration file, supplied by user

    # used to distinguish config versions if more then one is available
    disasm86_version: Literal[1]

    # see Program for details
    program: Program = Field(default_factory=Program.default)

    @classmethod
    def default(cls) -> Self:
        return cls(
            disasm86_version=1,
        )
