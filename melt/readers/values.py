"""String value coercion shared by the environment, command-line and INI readers."""

import math
import re
from typing import Any

_DECIMAL = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_HEX = re.compile(r"^[+-]?0[xX][0-9a-fA-F]+$")


def parse_number(text: str) -> int | float | None:
    """Parse a decimal, float or hexadecimal numeral.

    Returns None for anything else, including ``inf``, ``nan`` and
    underscore-grouped digits.
    """
    candidate = text.strip()
    if _HEX.match(candidate):
        return int(candidate, 16)
    if not _DECIMAL.match(candidate):
        return None
    if "." in candidate or "e" in candidate.lower():
        number = float(candidate)
        return number if math.isfinite(number) else None
    return int(candidate)


def coerce_value(value: Any) -> Any:
    """Coerce booleans and numbers out of a string; other values pass through."""
    if not isinstance(value, str):
        return value

    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False

    number = parse_number(value)
    if number is not None:
        return number
    return value


def coerce_ini_value(value: str) -> Any:
    """Coerce an INI value: numerals become numbers, commas make lists.

    Booleans are left as strings.
    """
    if "," in value:
        return [_coerce_ini_item(item) for item in value.split(",")]
    return _coerce_ini_item(value)


def _coerce_ini_item(item: str) -> Any:
    stripped = item.strip()
    number = parse_number(stripped)
    return stripped if number is None else number
