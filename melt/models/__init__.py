"""Domain models: tiers, error records and declare() options.

    from melt.models import SourceError, SourceErrorKind, Tier
"""

from melt.models.enums import PARSE_ERROR_KINDS, SourceErrorKind, Tier
from melt.models.errors import SourceError
from melt.models.options import (
    DEFAULT_FORMATS,
    ConfigLocations,
    DeclareOptions,
    EnvOptions,
)

__all__ = [
    "DEFAULT_FORMATS",
    "PARSE_ERROR_KINDS",
    "ConfigLocations",
    "DeclareOptions",
    "EnvOptions",
    "SourceError",
    "SourceErrorKind",
    "Tier",
]
