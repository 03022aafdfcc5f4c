type Address = int

# 20-bit physical address space
ADDRESS_MAX = 0xFFFFF


def address_format(address: Address) -> str:
    return f"0x{address:05X}"


def bytes_format(data: bytes) -> str:
    return " ".join(f"{byte:02X}" for byte in data)
