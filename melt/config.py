"""Config accessor and the chained builder API.

    from melt import new

    config = (
        new()
        .add_table({"server": {"port": 8000}})
        .add_file("settings.toml")
        .add_env("MYAPP_")
    )
    config.get("server.port")

Every ``add_*`` call returns a new Config; the receiver is left unchanged.
"""

import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from melt.discovery import path_exists, read_file
from melt.models import SourceError, SourceErrorKind
from melt.observability.logging import get_logger
from melt.providers import Environment, EnvironmentProvider, os_environment
from melt.readers import get_reader, read_env_vars
from melt.utils import deep_merge, is_array, is_table, split_path

logger = get_logger(__name__)

_INDEXED_SEGMENT = re.compile(r"^([^\[\]]+)\[([0-9]+)\]$")


class Config:
    """Read-only view over a resolved configuration tree."""

    __slots__ = ("_data", "_errors")

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        errors: Iterable[SourceError] = (),
    ) -> None:
        self._data: dict[str, Any] = dict(data) if data else {}
        self._errors: tuple[SourceError, ...] = tuple(errors)

    def __repr__(self) -> str:
        return f"Config(keys={sorted(self._data)!r}, errors={len(self._errors)})"

    @property
    def errors(self) -> tuple[SourceError, ...]:
        """Source errors recorded while building this accessor."""
        return self._errors

    def get(self, path: Any, default: Any = None) -> Any:
        """Look up a value by dotted path.

        Segments of the form ``name[N]`` index into a list with a 1-based
        index. Any missing key, wrong container type or out-of-range index
        yields ``default`` for the whole lookup.

        Args:
            path: Dotted path such as ``"database.hosts[2].port"``
            default: Returned when the path does not resolve

        Returns:
            The value at ``path``, or ``default``
        """
        if not isinstance(path, str):
            return default
        parts = split_path(path)
        if not parts:
            return default

        current: Any = self._data
        for part in parts:
            if not is_table(current):
                return default

            match = _INDEXED_SEGMENT.match(part)
            if match:
                name, index_text = match.groups()
                items = current.get(name)
                index = int(index_text)
                if not is_array(items) or not 1 <= index <= len(items):
                    return default
                current = items[index - 1]
            elif part in current:
                current = current[part]
            else:
                return default

        return current

    def get_table(self) -> dict[str, Any]:
        """The whole resolved tree. Treat it as read-only."""
        return self._data

    def _merged(self, source: Mapping[str, Any]) -> "Config":
        return Config(deep_merge(self._data, source), self._errors)

    def _with_error(self, error: SourceError) -> "Config":
        logger.debug("config_source_error", kind=error.kind.value, path=error.path, error=error.message)
        return Config(self._data, (*self._errors, error))

    def add_table(self, table: Any) -> "Config":
        """Return a new Config with ``table`` merged on top."""
        if not is_table(table):
            return self._with_error(
                SourceError(
                    message=f"add_table expects a mapping, got {type(table).__name__}",
                    kind=SourceErrorKind.OPTIONS_VALIDATION,
                    key="table",
                )
            )
        return self._merged(table)

    def add_file(self, path: str | Path, format_hint: str | None = None) -> "Config":
        """Return a new Config with the file at ``path`` merged on top.

        The format comes from ``format_hint``, then the file extension, and
        defaults to TOML. Missing or unreadable files are recorded in
        ``errors`` and leave the tree unchanged.
        """
        file_path = Path(path)
        fmt = (format_hint or file_path.suffix[1:] or "toml").lower()
        if get_reader(fmt) is None:
            fmt = "toml"

        if not path_exists(file_path):
            return self._with_error(
                SourceError(
                    message=f"Configuration file not found: {file_path}",
                    kind=SourceErrorKind.FILE,
                    path=str(file_path),
                )
            )

        loaded = read_file(file_path, fmt)
        if loaded.error is not None:
            return self._with_error(
                SourceError(message=loaded.error, kind=SourceErrorKind.FILE, path=str(file_path))
            )
        if loaded.data is None:
            return Config(self._data, self._errors)
        return self._merged(loaded.data)

    def add_env(
        self,
        prefix: str,
        env: EnvironmentProvider | None = None,
        *,
        auto_parse_types: bool = True,
        nested_separator: str = "__",
    ) -> "Config":
        """Return a new Config with prefixed environment variables merged on top.

        Reads the process environment unless ``env`` is given.
        """
        if not isinstance(prefix, str) or not prefix:
            return self._with_error(
                SourceError(
                    message="add_env requires a non-empty string prefix",
                    kind=SourceErrorKind.OPTIONS_VALIDATION,
                    key="prefix",
                )
            )
        environment = os_environment() if env is None else Environment(env)
        data = read_env_vars(
            environment.variables(),
            prefix,
            auto_parse_types=auto_parse_types,
            nested_separator=nested_separator,
        )
        return self._merged(data)


def new() -> Config:
    """Create an empty Config for chained building."""
    return Config()


def merge(sources: Iterable[Any]) -> Config:
    """Build a Config from an ordered list of source definitions.

    Each source is a mapping with a ``type``:

    - ``{"type": "table", "source": {...}}`` (``"defaults"`` is an alias)
    - ``{"type": "file", "path": "settings.toml", "file_type": "toml"}``
    - ``{"type": "env", "prefix": "MYAPP_"}``

    Later sources override earlier ones. Malformed entries are recorded in
    ``errors`` and skipped.
    """
    config = Config()
    if isinstance(sources, (str, bytes, Mapping)) or not isinstance(sources, Iterable):
        return config._with_error(
            SourceError(
                message=f"merge expects a list of sources, got {type(sources).__name__}",
                kind=SourceErrorKind.OPTIONS_VALIDATION,
                key="sources",
            )
        )

    for position, item in enumerate(sources, start=1):
        key = f"sources[{position}]"
        source_type = item.get("type") if isinstance(item, Mapping) else None

        if source_type in ("table", "defaults") and is_table(item.get("source")):
            config = config.add_table(item["source"])
        elif source_type == "file" and isinstance(item.get("path"), (str, Path)):
            config = config.add_file(item["path"], item.get("file_type"))
        elif source_type == "env" and isinstance(item.get("prefix"), str):
            config = config.add_env(item["prefix"], item.get("env"))
        else:
            config = config._with_error(
                SourceError(message=_describe_bad_source(item), kind=SourceErrorKind.OPTIONS_VALIDATION, key=key)
            )

    return config


def _describe_bad_source(item: Any) -> str:
    if not isinstance(item, Mapping) or "type" not in item:
        return "Each source must be a mapping with a 'type' field"
    source_type = item["type"]
    if source_type in ("table", "defaults"):
        return f"Source type '{source_type}' expects a 'source' field with a mapping value"
    if source_type == "file":
        return "Source type 'file' expects a 'path' field with a string value"
    if source_type == "env":
        return "Source type 'env' expects a 'prefix' field with a string value"
    return f"Unknown source type: {source_type}"
