# side-effect module to be used within __main__.py

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text
from rich.traceback import install

console = Console()

install(
    console=console,
)

logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            markup=False,
        )
    ],
)
logging.getLogger("disasm86").setLevel(logging.DEBUG)
logging.getLogger("__main__").setLevel(logging.DEBUG)


def assembly_format(assembly: str) -> Text:
    # highlight mnemonic, keep operands plain
    mnemonic, _, operands = assembly.partition(" ")

    format_ = Text(
        mnemonic,
        style=Style(
            bold=True,
        ),
    )
    if operands:
        format_ += Text(" ") + Text(operands)

    return format_
