"""Reader contract.

A reader turns one file into a configuration tree and reports problems as a
message instead of raising:

- ``(tree, None)`` on success
- ``(None, message)`` when the file cannot be read or parsed
- ``(None, None)`` for a valid but empty document
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

ReadResult = tuple[dict[str, Any] | None, str | None]
Reader = Callable[[Path], ReadResult]


def read_text(file_path: Path) -> tuple[str, str | None]:
    """Read a file as UTF-8 text, returning an error message instead of raising."""
    try:
        return file_path.read_text(encoding="utf-8"), None
    except OSError as e:
        return "", f"Could not open file {file_path}: {e.strerror or e}"
    except UnicodeDecodeError as e:
        return "", f"Could not decode file {file_path}: {e}"


def as_result(data: Any, file_path: Path, format_name: str) -> ReadResult:
    """Check the top level of a parsed document."""
    if data is None or data == {}:
        return None, None
    if not isinstance(data, dict):
        return None, (
            f"{format_name} file {file_path} must contain a table at the top level, "
            f"got {type(data).__name__}"
        )
    return data, None
