"""Per-tier location specifications.

Option values for the system, user and project tiers arrive as a bool, a
single path, or a list of paths. They are normalized once into a LocationSpec
variant and expanded into a directory list with the tier's defaults.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Disabled:
    """The tier is switched off."""


@dataclass(frozen=True)
class UseDefaults:
    """Search the tier's default directories."""


@dataclass(frozen=True)
class Explicit:
    """Search exactly these locations, in order."""

    paths: tuple[str, ...] = ()


LocationSpec = Disabled | UseDefaults | Explicit


def location_spec(raw: Any) -> LocationSpec:
    """Normalize a raw option value into a LocationSpec.

    Unrecognized values degrade to an empty explicit list rather than
    raising, so a bad location never aborts resolution.
    """
    if isinstance(raw, (Disabled, UseDefaults, Explicit)):
        return raw
    if raw is None or raw is True:
        return UseDefaults()
    if raw is False:
        return Disabled()
    if isinstance(raw, str):
        return Explicit((raw,))
    if isinstance(raw, (list, tuple)):
        return Explicit(tuple(item for item in raw if isinstance(item, str)))
    return Explicit()


def expand(spec: LocationSpec, defaults: Sequence[str]) -> list[str]:
    """Turn a LocationSpec into the directories to search."""
    if isinstance(spec, Disabled):
        return []
    if isinstance(spec, UseDefaults):
        return list(defaults)
    return list(spec.paths)


def resolve_locations(raw: Any, defaults: Sequence[str]) -> list[str]:
    """Resolve a raw location option straight to a directory list."""
    return expand(location_spec(raw), defaults)


def expand_home(path: str, home: str | None) -> str:
    """Expand a leading ``~`` using an explicitly supplied home directory."""
    if home and (path == "~" or path.startswith("~/")):
        return home + path[1:]
    return path


def system_defaults(app_name: str) -> list[str]:
    return [f"/etc/{app_name}", "/etc"]


def user_defaults(home: str) -> list[str]:
    return [f"{home}/.config", home]


def user_dotfile(home: str, app_name: str) -> str:
    """Extensionless base path of the per-user dotfile, e.g. ``~/.myapp``."""
    return f"{home}/.{app_name}"


def project_defaults() -> list[str]:
    return ["."]
