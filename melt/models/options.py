"""Option models for declare()."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from melt.locations import LocationSpec, UseDefaults, location_spec

DEFAULT_FORMATS: tuple[str, ...] = ("toml", "json", "yaml", "ini", "config")


class ConfigLocations(BaseModel):
    """Where the file-based tiers look for configuration.

    ``system``, ``user`` and ``project`` always hold a LocationSpec once
    validated; any raw value is accepted and normalized.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", arbitrary_types_allowed=True)

    system: Any = Field(
        default_factory=UseDefaults,
        description="System tier locations (default: /etc/<app_name>, /etc)",
    )
    user: Any = Field(
        default_factory=UseDefaults,
        description="User tier locations (default: ~/.config, ~)",
    )
    project: Any = Field(
        default_factory=UseDefaults,
        description="Project tier locations (default: current directory)",
    )
    custom_paths: list[Any] = Field(
        default_factory=list,
        description="Directories or extensionless file paths for the custom tier",
    )
    file_names: list[str] | None = Field(
        default=None,
        description="Base file names to probe (default: config, <app_name>)",
    )
    use_app_name_as_dir: bool = Field(
        default=True,
        description="Probe <dir>/<app_name>/ before <dir>/",
    )

    @field_validator("system", "user", "project", mode="before")
    @classmethod
    def _normalize_location(cls, value: Any) -> LocationSpec:
        return location_spec(value)

    @field_validator("custom_paths", mode="before")
    @classmethod
    def _normalize_custom_paths(cls, value: Any) -> list[Any]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, (list, tuple)):
            return list(value)
        return []

    @field_validator("use_app_name_as_dir", mode="before")
    @classmethod
    def _default_app_dir(cls, value: Any) -> Any:
        return True if value is None else value


class EnvOptions(BaseModel):
    """Settings for the environment variable tier."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    prefix: str | None = Field(
        default=None,
        description="Variable name prefix (default: upper(app_name) + '_')",
    )
    auto_parse_types: bool = Field(
        default=True,
        description="Coerce booleans and numbers from string values",
    )
    nested_separator: str = Field(
        default="__",
        min_length=1,
        description="Separator in variable names that marks nesting",
    )


class DeclareOptions(BaseModel):
    """Everything declare() needs to know.

    ``defaults``, ``env`` and ``cmd_args`` accept several shapes and are
    interpreted by the resolver, which records unusable values as source
    errors instead of rejecting the whole declaration.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", arbitrary_types_allowed=True)

    app_name: str = Field(min_length=1, description="Application name")
    defaults: Any = Field(default=None, description="Mapping or extensionless file path")
    config_locations: ConfigLocations = Field(default_factory=ConfigLocations)
    formats: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FORMATS),
        description="File extensions to probe, highest priority first",
    )
    env: Any = Field(default=None, description="False, None/True, or EnvOptions fields")
    cmd_args: Any = Field(default=None, description="False, True, or a pre-parsed mapping")

    @field_validator("config_locations", mode="before")
    @classmethod
    def _default_locations(cls, value: Any) -> Any:
        if isinstance(value, ConfigLocations):
            return value
        if isinstance(value, Mapping):
            return dict(value)
        return {}

    @field_validator("formats", mode="before")
    @classmethod
    def _default_formats(cls, value: Any) -> Any:
        return list(DEFAULT_FORMATS) if value is None else value

    @property
    def file_names(self) -> list[str]:
        names = self.config_locations.file_names
        return list(names) if names is not None else ["config", self.app_name]
