"""Helpers for configuration trees, including deep merge.

A tree is a mapping of string keys to scalars, lists, or nested mappings.
Lists and tuples are array-like; any Mapping is table-like. The two never
overlap, so a mapping that happens to have a key named "1" is still a table.
"""

import copy
from collections.abc import Mapping
from typing import Any

ConfigTree = dict[str, Any]


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_table(value: Any) -> bool:
    return isinstance(value, Mapping)


def split_path(path: str, separator: str = ".") -> list[str]:
    """Split a dotted path, dropping empty segments."""
    return [part for part in path.split(separator) if part]


def set_nested(tree: ConfigTree, path: str, value: Any) -> None:
    """Assign ``value`` at a dotted ``path`` inside ``tree`` in place.

    Missing or non-table intermediate nodes are replaced with empty tables.
    """
    keys = split_path(path)
    if not keys:
        return

    current = tree
    for key in keys[:-1]:
        node = current.get(key)
        if not isinstance(node, dict):
            node = {}
            current[key] = node
        current = node
    current[keys[-1]] = value


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep merge two trees, with override taking precedence.

    For nested tables, values are merged recursively.
    Arrays in override replace the base value wholesale; they are never
    merged element by element.
    For other values, override replaces base.

    Neither input is modified. Structures taken from override are copied so
    the result never aliases it.

    Args:
        base: Base tree
        override: Override tree (takes precedence)

    Returns:
        Merged tree
    """
    result = dict(base)

    for key, value in override.items():
        current = result.get(key)
        if is_array(value):
            result[key] = copy.deepcopy(list(value))
        elif is_table(value) and is_table(current):
            result[key] = deep_merge(current, value)
        elif is_table(value):
            result[key] = copy.deepcopy(dict(value))
        else:
            result[key] = value

    return result
