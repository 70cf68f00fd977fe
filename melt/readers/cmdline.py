"""Command-line argument reader.

Raw argument vectors are parsed with a small grammar:

- ``--key=value`` assigns ``value``
- ``--key value`` assigns the following token when it does not start with ``--``
- a bare ``--flag`` is ``True``
- anything else is ignored

The resulting (or pre-parsed) options are then turned into a tree: keys are
lower-cased, every ``-`` becomes a nesting level, and string values are
coerced to booleans and numbers where possible.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from melt.readers.values import coerce_value
from melt.utils import set_nested


def parse_arguments(tokens: Iterable[Any]) -> dict[str, Any]:
    """Parse an argv-style token sequence into a flat option mapping."""
    parsed: dict[str, Any] = {}
    pending: str | None = None

    for token in tokens:
        if not isinstance(token, str):
            pending = None
            continue

        if token.startswith("--"):
            body = token[2:]
            key, sep, value = body.partition("=")
            if sep:
                if key:
                    parsed[key] = value
                pending = None
            elif body:
                parsed[body] = True
                pending = body
            else:
                pending = None
        elif pending is not None:
            parsed[pending] = token
            pending = None

    return parsed


def read_cmdline_options(options: Mapping[Any, Any]) -> dict[str, Any]:
    """Transform a flat option mapping into a configuration tree.

    ``{"database-host": "localhost", "port": "5432"}`` becomes
    ``{"database": {"host": "localhost"}, "port": 5432}``. Non-string keys
    are skipped.
    """
    result: dict[str, Any] = {}
    for key in sorted(k for k in options if isinstance(k, str)):
        path = key.lower().replace("-", ".")
        set_nested(result, path, coerce_value(options[key]))
    return result
