"""File and format discovery.

Decides which file to read for a directory or an extensionless base path,
and which reader to hand it to. Parsing itself is left to melt.readers.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from melt.observability.logging import get_logger
from melt.readers import get_reader

logger = get_logger(__name__)

PathKind = Literal["file", "dir"]


@dataclass(frozen=True)
class LoadedFile:
    """Outcome of reading one discovered file.

    ``data`` is None both for a parse failure (``error`` set) and for an
    empty document (``error`` None).
    """

    path: Path
    data: dict[str, Any] | None
    error: str | None = None


def path_exists(path: Path, kind: PathKind = "file") -> bool:
    """Check for a file or directory, treating unreadable paths as absent.

    Permission errors and over-long names raise from Path.is_file and
    Path.is_dir; they are logged and reported as a missing path.
    """
    try:
        return path.is_dir() if kind == "dir" else path.is_file()
    except OSError as e:
        logger.debug("config_probe_failed", path=str(path), kind=kind, error=str(e))
        return False


def find_config_file(base_path: Path, formats: Sequence[str]) -> tuple[Path, str] | None:
    """Return the first ``<base_path>.<ext>`` that exists, in format order."""
    for fmt in formats:
        candidate = base_path.parent / f"{base_path.name}.{fmt}"
        if path_exists(candidate):
            return candidate, fmt
    return None


def read_file(file_path: Path, fmt: str) -> LoadedFile:
    """Read a file with the reader registered for ``fmt``."""
    reader = get_reader(fmt)
    if reader is None:
        return LoadedFile(file_path, None, f"No reader registered for format '{fmt}'")

    data, error = reader(file_path)
    if error is None:
        logger.debug("config_file_loaded", path=str(file_path), format=fmt, empty=data is None)
    return LoadedFile(file_path, data, error)


def strip_format_extension(path: str, formats: Sequence[str]) -> str:
    """Drop a trailing ``.<ext>`` when ``ext`` is one of ``formats``."""
    stem, dot, ext = path.rpartition(".")
    if dot and stem and "/" not in ext and ext in formats:
        return stem
    return path


def load_base_path(base_path: str, formats: Sequence[str]) -> LoadedFile | None:
    """Load a single file given an extensionless base path.

    A known format extension on ``base_path`` is stripped first, so
    ``./settings.toml`` probes ``./settings.toml``, ``./settings.json``, ...
    in format priority order. Returns None when no candidate exists.
    """
    base = Path(strip_format_extension(base_path, formats))
    found = find_config_file(base, formats)
    if found is None:
        return None
    return read_file(*found)


def _probe_names(
    directory: Path, file_names: Sequence[str], formats: Sequence[str]
) -> tuple[Path, str] | None:
    for name in file_names:
        found = find_config_file(directory / name, formats)
        if found is not None:
            return found
    return None


def _scan_directory(directory: Path, formats: Sequence[str]) -> LoadedFile | None:
    """Try every file with a supported extension until one parses."""
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        logger.debug("config_scan_failed", directory=str(directory), error=str(e))
        return None

    for entry in entries:
        fmt = entry.suffix[1:]
        if not fmt or fmt not in formats or not path_exists(entry):
            continue
        loaded = read_file(entry, fmt)
        if loaded.error is None:
            return loaded
        logger.debug("config_scan_candidate_rejected", path=str(entry), error=loaded.error)
    return None


def load_from_dir(
    directory: str | Path,
    file_names: Sequence[str],
    formats: Sequence[str],
    app_name: str,
    use_app_name_as_dir: bool = True,
    scan: bool = False,
) -> LoadedFile | None:
    """Find and read the configuration file for one directory.

    Search order:
    1. ``<directory>/<app_name>/<name>.<ext>`` when use_app_name_as_dir
    2. ``<directory>/<name>.<ext>``
    3. with ``scan``, any file in ``directory`` with a supported extension

    Names are tried in order, and formats in order for each name. The first
    existing file from steps 1-2 is returned whether or not it parses.

    Returns:
        The loaded file, or None if the directory is missing or holds no
        candidate
    """
    directory = Path(directory)
    if not path_exists(directory, "dir"):
        return None

    found = None
    if use_app_name_as_dir and app_name:
        app_dir = directory / app_name
        if path_exists(app_dir, "dir"):
            found = _probe_names(app_dir, file_names, formats)

    if found is None:
        found = _probe_names(directory, file_names, formats)

    if found is not None:
        return read_file(*found)

    if scan:
        return _scan_directory(directory, formats)
    return None
