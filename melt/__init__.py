"""Hierarchical configuration resolution.

Resolve an application's configuration from defaults, system, user, project
and custom files, environment variables and command-line arguments:

    import melt

    config, errors = melt.declare({"app_name": "myapp", "defaults": {"port": 8000}})
    port = config.get("port")

Or build one up explicitly:

    config = melt.new().add_table({"port": 8000}).add_env("MYAPP_")
"""

from melt.config import Config, merge, new
from melt.declarative import Resolver, declare
from melt.exceptions import InvalidOptionsError, MeltError
from melt.models import DeclareOptions, SourceError, SourceErrorKind, Tier
from melt.utils import deep_merge

__all__ = [
    "Config",
    "DeclareOptions",
    "InvalidOptionsError",
    "MeltError",
    "Resolver",
    "SourceError",
    "SourceErrorKind",
    "Tier",
    "declare",
    "deep_merge",
    "merge",
    "new",
]
