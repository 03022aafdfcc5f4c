from pathlib import Path
from typing import Annotated

from rich.panel import Panel
from rich.rule import Rule
from rich.table import Column, Table
from rich.text import Text
from typer import Argument, Typer

from .._cli import assembly_format, console
from .common import address_format, bytes_format
from .parse import parse_path
from .program.model import Program

app = Typer()


@app.command()
def disassemble(binary_path: Path, config_path: Annotated[Path | None, Argument()] = None) -> None:
    with console.status("Decoding..."):
        program = parse_path(binary_path, config_path)

    _instructions(program)
    _failures(program)
    _summary(program)


@app.command()
def listing(binary_path: Path, config_path: Annotated[Path | None, Argument()] = None) -> None:
    # plain listing, displacement sizes are spelled out where needed so nasm reproduces the original bytes
    program = parse_path(binary_path, config_path)

    print("bits 16")
    print()
    for instruction in program.instructions:
        print(instruction)


def _instructions(program: Program) -> None:
    table = Table(
        Column("Address"),
        Column("Bytes"),
        Column(
            "Instruction",
            overflow="fold",
            no_wrap=False,
        ),
        title="Instructions",
    )

    for instruction in program.instructions:
        table.add_row(
            Text(address_format(instruction.address)),
            Text(bytes_format(program.instruction_bytes(instruction)), style="dim"),
            assembly_format(str(instruction)),
        )

    console.print(table)


def _failures(program: Program) -> None:
    if not program.failures:
        return

    console.print(Rule("Decode failures"))

    table = Table(
        Column("Address"),
        Column("Offset"),
        Column("Kind"),
        Column(
            "Details",
            overflow="fold",
            no_wrap=False,
        ),
    )

    for failure in program.failures:
        table.add_row(
            Text(address_format(failure.address)),
            Text(f"0x{failure.offset:04X}"),
            Text(type(failure.error).__name__, style="red"),
            Text(str(failure.error)),
        )

    console.print(table)


def _summary(program: Program) -> None:
    console.print(
        Panel(
            Text(f"{len(program.instructions)} instructions, {program.size} of {len(program.data)} bytes decoded"),
            title="Summary",
            style="green" if not program.failures else "yellow",
        )
    )


if __name__ == "__main__":
    app()
