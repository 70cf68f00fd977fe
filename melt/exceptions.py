"""Exception hierarchy for programmer errors.

Problems with individual configuration sources are never raised; they are
collected as SourceError records. Only misuse of the API itself raises.
"""


class MeltError(Exception):
    """Base exception for all melt errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidOptionsError(MeltError, ValueError):
    """Raised when declare() receives options it cannot start from.

    Covers a non-mapping options value, a missing or empty app_name, and
    option values with the wrong structure.
    """
