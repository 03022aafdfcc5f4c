from typing import Self

from pydantic import BaseModel


class Config(BaseModel):
    # instructions decoder configuration

    # how mod=00 r/m=110 is decoded
    # True - as 8086 does, direct 16-bit address following the mod/reg/r/m byte, eg. [1234] (recommended)
    # False - as plain [bp] without displacement, reproduces decoders which do not special-case it
    direct_address: bool = True

    @classmethod
    def default(cls) -> Self:
        return cls()
