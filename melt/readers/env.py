"""Environment variable reader."""

from collections.abc import Mapping
from typing import Any

from melt.observability.logging import get_logger
from melt.readers.values import coerce_value
from melt.utils import set_nested

logger = get_logger(__name__)


def read_env_vars(
    environ: Mapping[str, str],
    prefix: str,
    auto_parse_types: bool = True,
    nested_separator: str = "__",
) -> dict[str, Any]:
    """Build a tree from the variables that start with ``prefix``.

    The prefix is stripped, ``nested_separator`` becomes a path separator and
    the name is lower-cased: ``APP_DB__HOST`` with prefix ``APP_`` lands at
    ``db.host``. Variables are applied in name order, so ``APP_DB__HOST``
    wins over a scalar ``APP_DB``.

    Args:
        environ: Variable names to values
        prefix: Required name prefix; must be non-empty
        auto_parse_types: Coerce booleans and numbers from the values
        nested_separator: Marker for nesting inside variable names

    Returns:
        Tree of matching variables (empty if nothing matches)
    """
    result: dict[str, Any] = {}
    if not prefix:
        logger.warning("env_prefix_empty")
        return result

    for name in sorted(environ):
        if not name.startswith(prefix) or len(name) == len(prefix):
            continue
        suffix = name[len(prefix):]
        path = suffix.replace(nested_separator, ".").lower()
        value = environ[name]
        set_nested(result, path, coerce_value(value) if auto_parse_types else value)

    logger.debug("env_vars_read", prefix=prefix, key_count=len(result))
    return result
