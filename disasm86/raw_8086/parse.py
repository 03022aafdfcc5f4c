# raw 8086 machine code image, no headers

from pathlib import Path

from .config import Config
from .program.model import Program
from .program.parse import parse as program_parse


def parse_path(binary_path: Path, config_path: Path | None) -> Program:
    data = binary_path.read_bytes()

    if config_path is not None:
        with config_path.open("r") as config_file:
            config = Config.model_validate_json(config_file.read())
    else:
        config = None

    return parse(data, config)


def parse(data: bytes, config: Config | None) -> Program:
    if config is None:
        config = Config.default()

    program = program_parse(data, config.program)

    return program
