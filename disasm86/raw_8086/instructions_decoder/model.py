from dataclasses import dataclass
from enum import Enum, IntEnum, auto

from ..common import Address as MemoryAddress


class Op(Enum):
    MOV_REGISTER_MEMORY = auto()  # 100010dw, register/memory to/from register
    MOV_IMMEDIATE_REGISTER = auto()  # 1011wreg, immediate to register
    MOV_IMMEDIATE_MEMORY = auto()  # 1100011w, immediate to register/memory (reserved)
    MOV_ACCUMULATOR = auto()  # 101000dw, memory to/from accumulator (reserved)
    REGISTER_MEMORY_GROUP = auto()  # 11111111, inc/dec/call/jmp/push register/memory (reserved)
    UNRECOGNIZED = auto()

    def mnemonic(self) -> str:
        match self:
            case Op.MOV_REGISTER_MEMORY | Op.MOV_IMMEDIATE_REGISTER | Op.MOV_IMMEDIATE_MEMORY | Op.MOV_ACCUMULATOR:
                return "mov"
            case Op.REGISTER_MEMORY_GROUP | Op.UNRECOGNIZED:
                raise ValueError(f"{self.name} has no single mnemonic")
        assert False


class DecodeError(Exception):
    def __init__(self, offset: int, message: str) -> None:
        super().__init__(f"{message} at offset 0x{offset:04X}")
        # byte offset into the decoded buffer
        self.offset = offset


class InsufficientInput(DecodeError):
    def __init__(self, offset: int, bits_requested: int, bits_available: int) -> None:
        super().__init__(offset, f"input exhausted, {bits_requested} bits requested, {bits_available} available")
        self.bits_requested = bits_requested
        self.bits_available = bits_available


class UnsupportedOpcode(DecodeError):
    def __init__(self, offset: int, bits: int, width: int) -> None:
        super().__init__(offset, f"unsupported opcode {bits:0{width}b}")
        # leading bits as read by the classifier
        self.bits = bits
        self.width = width


class UnimplementedVariant(DecodeError):
    def __init__(self, offset: int, op: Op, size: int | None) -> None:
        super().__init__(offset, f"unimplemented variant {op.name}")
        self.op = op
        # instruction size in bytes, if the layout is known
        self.size = size


class RegisterByte(IntEnum):
    AL = 0
    CL = 1
    DL = 2
    BL = 3
    AH = 4
    CH = 5
    DH = 6
    BH = 7

    def __str__(self) -> str:
        return self.name.lower()


class RegisterWord(IntEnum):
    AX = 0
    CX = 1
    DX = 2
    BX = 3
    SP = 4
    BP = 5
    SI = 6
    DI = 7

    def __str__(self) -> str:
        return self.name.lower()


type Register = RegisterByte | RegisterWord


def register_from_field(field: int, word: bool) -> Register:
    return RegisterWord(field) if word else RegisterByte(field)


class Address(IntEnum):
    # base register combinations, in r/m field order
    BX_SI = 0
    BX_DI = 1
    BP_SI = 2
    BP_DI = 3
    SI = 4
    DI = 5
    BP = 6
    BX = 7

    def registers(self) -> tuple[RegisterWord, ...]:
        return tuple(RegisterWord[name] for name in self.name.split("_"))

    def __str__(self) -> str:
        return " + ".join(str(register) for register in self.registers())


@dataclass(frozen=True)
class ImmediateByte:
    value: int

    def __post_init__(self) -> None:
        assert 0 <= self.value <= 0xFF

    def signed(self) -> int:
        return self.value - 0x100 if self.value & 0x80 else self.value

    def __str__(self) -> str:
        return f"{self.value}"


@dataclass(frozen=True)
class ImmediateWord:
    value: int

    def __post_init__(self) -> None:
        assert 0 <= self.value <= 0xFFFF

    def signed(self) -> int:
        return self.value - 0x10000 if self.value & 0x8000 else self.value

    def __str__(self) -> str:
        return f"{self.value}"


type Immediate = ImmediateByte | ImmediateWord


@dataclass(frozen=True)
class EffectiveAddressBare:
    address: Address

    def __str__(self) -> str:
        return f"[{self.address}]"


@dataclass(frozen=True)
class EffectiveAddressWithOffset:
    address: Address
    displacement: Immediate

    def size_override(self) -> str | None:
        # nasm picks the shortest displacement on its own, name the size only where it would pick differently
        displacement = self.displacement.signed()
        match self.displacement:
            case ImmediateByte():
                # [bp] has no mod=00 form, so nasm always encodes it with zero disp8
                if displacement == 0 and self.address is not Address.BP:
                    return "byte"
                return None
            case ImmediateWord():
                if -0x80 <= displacement < 0x80:
                    return "word"
                return None
        assert False

    def __str__(self) -> str:
        # displacements are added as signed values
        displacement = self.displacement.signed()
        size_override = self.size_override()

        if size_override is None and displacement == 0:
            return f"[{self.address}]"

        return (
            f"[{f'{size_override} ' if size_override is not None else ''}"
            f"{self.address} {'-' if displacement < 0 else '+'} {abs(displacement)}]"
        )


@dataclass(frozen=True)
class EffectiveAddressDirect:
    # mod=00 r/m=110, no base register, 16-bit address follows
    displacement: ImmediateWord

    def __str__(self) -> str:
        return f"[{self.displacement.value}]"


type EffectiveAddress = EffectiveAddressBare | EffectiveAddressWithOffset | EffectiveAddressDirect

type Location = Register | EffectiveAddress

type Source = Location | Immediate


@dataclass(frozen=True, kw_only=True)
class Instruction:
    address: MemoryAddress  # of the first opcode byte
    size: int  # in bytes
    op: Op
    destination: Location
    source: Source

    def __post_init__(self) -> None:
        # must be positive
        assert self.address >= 0

        # 8086 instructions are 1 to 6 bytes long
        assert 1 <= self.size <= 6

        # only decodable kinds end up in instructions
        assert self.op in (Op.MOV_REGISTER_MEMORY, Op.MOV_IMMEDIATE_REGISTER)

    @property
    def end_address(self) -> MemoryAddress:
        return self.address + self.size

    def __str__(self) -> str:
        return f"{self.op.mnemonic()} {self.destination}, {self.source}"
