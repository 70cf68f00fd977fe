"""Settings for the library itself.

These control melt's own behaviour (currently its logging) and are read from
MELT_* environment variables. They are unrelated to the configuration trees
melt resolves for applications.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from melt.observability.logging import setup_logging

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["json", "console"]


class MeltSettings(BaseSettings):
    """Library settings, loaded from MELT_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MELT_",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: LogLevel = Field(default="WARNING", description="Logging level")
    log_format: LogFormat = Field(default="console", description="Log renderer")


@lru_cache(maxsize=1)
def get_settings() -> MeltSettings:
    """Get the singleton settings instance.

    The result is cached for the lifetime of the process.
    Call `reload_settings()` to pick up changed environment variables.
    """
    return MeltSettings()


def reload_settings() -> MeltSettings:
    """Clear the settings cache and reload."""
    get_settings.cache_clear()
    return get_settings()


def configure_logging(settings: MeltSettings | None = None) -> None:
    """Apply logging settings through setup_logging."""
    settings = settings or get_settings()
    setup_logging(level=settings.log_level, format=settings.log_format)
