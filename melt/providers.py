"""Environment and argument providers.

The resolver never touches os.environ or sys.argv itself. Callers inject
providers; only the public entry points (declare, Config.add_env) fall back
to the process environment and argument vector.
"""

import os
import sys
from collections.abc import Callable, Mapping, Sequence
from typing import Any

EnvironmentProvider = Mapping[str, str] | Callable[[str], str | None]
ArgumentProvider = Callable[[], Sequence[str] | Mapping[str, Any] | None]


class Environment:
    """Uniform view over an EnvironmentProvider.

    A mapping supports both lookups and enumeration. A lookup function can
    only answer for names it is asked about, so ``variables()`` is empty for
    it and the environment tier contributes nothing.
    """

    def __init__(self, provider: EnvironmentProvider) -> None:
        if not isinstance(provider, Mapping) and not callable(provider):
            raise TypeError(
                f"environment provider must be a mapping or a callable, got {type(provider).__name__}"
            )
        self._provider = provider

    def get(self, name: str) -> str | None:
        if isinstance(self._provider, Mapping):
            value = self._provider.get(name)
        else:
            value = self._provider(name)
        return value if isinstance(value, str) else None

    def variables(self) -> dict[str, str]:
        """All enumerable variables with string values."""
        if not isinstance(self._provider, Mapping):
            return {}
        return {
            name: value
            for name, value in self._provider.items()
            if isinstance(name, str) and isinstance(value, str)
        }


def os_environment() -> Environment:
    """Snapshot of the process environment."""
    return Environment(dict(os.environ))


def os_arguments() -> list[str]:
    """The process argument vector, without the program name."""
    return list(sys.argv[1:])
