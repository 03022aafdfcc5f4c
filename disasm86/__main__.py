import logging
from importlib import metadata
from typing import Annotated

from rich.text import Text
from typer import Option, Typer

from ._cli import console
from .raw_8086.__main__ import app as raw_8086

app = Typer(
    help="Decoder for 8086 machine code.",
)

app.add_typer(
    raw_8086,
    name="raw_8086",
    help="Raw machine code images, without any container format.",
)


@app.callback()
def main(
    quiet: Annotated[
        bool,
        Option("--quiet", "-q", help="Report decode failures only in the output, not in the log."),
    ] = False,
) -> None:
    # _cli enables debug logging for the package, quiet mode keeps only errors
    logging.getLogger("disasm86").setLevel(logging.ERROR if quiet else logging.DEBUG)


@app.command()
def version() -> None:
    console.print(Text(f"disasm86 {metadata.version("disasm86")}"))


if __name__ == "__main__":
    app()
