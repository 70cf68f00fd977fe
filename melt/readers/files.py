"""File-format readers.

Each reader follows the contract in ``melt.readers.base``. INI and CONFIG
files share one grammar: ``key = value`` lines, optional ``[section]``
headers, and keys before the first header at the top level. INI turns
sections into nested tables; CONFIG flattens them to ``section_key``.
"""

import configparser
import json
import tomllib
from pathlib import Path
from typing import Any

import yaml

from melt.readers.base import ReadResult, as_result, read_text
from melt.readers.values import coerce_ini_value

_ROOT_SECTION = "__melt_root__"
# Never present in files, so [DEFAULT] is read as an ordinary section.
_UNUSED_DEFAULT_SECTION = "__melt_no_defaults__"


def read_toml_file(file_path: Path) -> ReadResult:
    """Load a TOML file.

    Args:
        file_path: Path to the TOML file

    Returns:
        ``(tree, None)`` on success, ``(None, message)`` on failure,
        ``(None, None)`` for an empty document
    """
    try:
        with file_path.open("rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        return None, f"Could not open file {file_path}: {e.strerror or e}"
    except tomllib.TOMLDecodeError as e:
        return None, f"Failed to parse TOML file {file_path}: {e}"
    except UnicodeDecodeError as e:
        return None, f"Could not decode file {file_path}: {e}"

    return as_result(data, file_path, "TOML")


def read_json_file(file_path: Path) -> ReadResult:
    """Load a JSON file whose top level is an object."""
    content, error = read_text(file_path)
    if error is not None:
        return None, error
    if not content.strip():
        return None, None

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        return None, f"Failed to parse JSON file {file_path}: {e}"

    return as_result(data, file_path, "JSON")


def read_yaml_file(file_path: Path) -> ReadResult:
    """Load the first YAML document of a file; it must be a mapping."""
    content, error = read_text(file_path)
    if error is not None:
        return None, error

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        return None, f"Failed to parse YAML file {file_path}: {e}"

    return as_result(data, file_path, "YAML")


def _parse_ini(file_path: Path, format_name: str) -> tuple[configparser.ConfigParser | None, str | None]:
    content, error = read_text(file_path)
    if error is not None:
        return None, error

    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        default_section=_UNUSED_DEFAULT_SECTION,
    )
    # Keys are case-sensitive.
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    try:
        parser.read_string(f"[{_ROOT_SECTION}]\n{content}", source=str(file_path))
    except configparser.Error as e:
        return None, f"Failed to parse {format_name} file {file_path}: {e}"
    return parser, None


def read_ini_file(file_path: Path) -> ReadResult:
    """Load an INI file; sections become nested tables."""
    parser, error = _parse_ini(file_path, "INI")
    if parser is None:
        return None, error

    data: dict[str, Any] = {}
    for section in parser.sections():
        values = {key: coerce_ini_value(value) for key, value in parser.items(section)}
        if section == _ROOT_SECTION:
            data.update(values)
        else:
            data.setdefault(section, {}).update(values)

    return as_result(data, file_path, "INI")


def read_config_file(file_path: Path) -> ReadResult:
    """Load a CONFIG file; section keys are flattened to ``section_key``."""
    parser, error = _parse_ini(file_path, "CONFIG")
    if parser is None:
        return None, error

    data: dict[str, Any] = {}
    for section in parser.sections():
        for key, value in parser.items(section):
            name = key if section == _ROOT_SECTION else f"{section}_{key}"
            data[name] = coerce_ini_value(value)

    return as_result(data, file_path, "CONFIG")
