"""Readers for every configuration source.

File readers are looked up by extension:

    from melt.readers import get_reader

    reader = get_reader("toml")
    tree, error = reader(Path("config.toml"))
"""

from melt.readers.base import Reader, ReadResult
from melt.readers.cmdline import parse_arguments, read_cmdline_options
from melt.readers.env import read_env_vars
from melt.readers.files import (
    read_config_file,
    read_ini_file,
    read_json_file,
    read_toml_file,
    read_yaml_file,
)

READERS: dict[str, Reader] = {
    "toml": read_toml_file,
    "json": read_json_file,
    "yaml": read_yaml_file,
    "yml": read_yaml_file,
    "ini": read_ini_file,
    "config": read_config_file,
}


def get_reader(format_name: str) -> Reader | None:
    """Return the reader registered for a file extension, if any."""
    return READERS.get(format_name.lower())


__all__ = [
    "READERS",
    "ReadResult",
    "Reader",
    "get_reader",
    "parse_arguments",
    "read_cmdline_options",
    "read_config_file",
    "read_env_vars",
    "read_ini_file",
    "read_json_file",
    "read_toml_file",
    "read_yaml_file",
]
