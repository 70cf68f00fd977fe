"""Declarative configuration resolution.

declare() walks the precedence tiers in a fixed order and deep-merges each
tier's contribution over the previous ones:

0. defaults (mapping or file)
1. system directories (/etc/<app_name>, /etc)
2. user directories (~/.config, ~) and the ~/.<app_name> dotfile
3. project directories (.)
4. custom paths
5. environment variables
6. command-line arguments

Problems with individual sources are collected and returned next to the
accessor; only unusable options raise.
"""

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from melt.config import Config
from melt.discovery import LoadedFile, load_base_path, load_from_dir, path_exists
from melt.exceptions import InvalidOptionsError
from melt.locations import (
    expand,
    expand_home,
    project_defaults,
    system_defaults,
    user_defaults,
    user_dotfile,
)
from melt.models import (
    PARSE_ERROR_KINDS,
    DeclareOptions,
    EnvOptions,
    SourceError,
    SourceErrorKind,
    Tier,
)
from melt.observability.logging import get_logger
from melt.providers import (
    ArgumentProvider,
    Environment,
    EnvironmentProvider,
    os_arguments,
    os_environment,
)
from melt.readers import parse_arguments, read_cmdline_options, read_env_vars
from melt.utils import deep_merge

logger = get_logger(__name__)


class Resolver:
    """Runs one resolution over explicitly injected providers.

    The resolver holds the accumulating tree and error list for a single
    declare() call and is not reused.
    """

    def __init__(
        self,
        options: DeclareOptions,
        environment: Environment,
        arguments: ArgumentProvider | None,
    ) -> None:
        """Initialize resolver.

        Args:
            options: Validated options
            environment: Environment used for HOME and the env tier
            arguments: Argument provider, or None when argv must not be read
        """
        self._options = options
        self._environment = environment
        self._arguments = arguments
        self._data: dict[str, Any] = {}
        self._errors: list[SourceError] = []

    def resolve(self) -> tuple[Config, list[SourceError]]:
        """Process every tier in precedence order."""
        self._load_defaults()
        self._load_system()
        self._load_user()
        self._load_project()
        self._load_custom()
        self._load_env()
        self._load_cmdline()

        logger.debug(
            "config_resolved",
            app_name=self._options.app_name,
            key_count=len(self._data),
            error_count=len(self._errors),
        )
        return Config(self._data), list(self._errors)

    @property
    def _formats(self) -> list[str]:
        return self._options.formats

    def _merge(self, tier: Tier, data: Mapping[str, Any] | None, source: str | None = None) -> None:
        if not data:
            return
        self._data = deep_merge(self._data, data)
        logger.debug("tier_merged", tier=tier.name.lower(), source=source, key_count=len(data))

    def _record(
        self,
        kind: SourceErrorKind,
        message: str,
        path: str | None = None,
        key: str | None = None,
    ) -> None:
        error = SourceError(message=message, kind=kind, path=path, key=key)
        logger.debug("config_source_error", kind=kind.value, path=path, key=key, error=message)
        self._errors.append(error)

    def _merge_loaded(self, tier: Tier, loaded: LoadedFile | None) -> None:
        """Merge a discovered file, or record its parse failure."""
        if loaded is None:
            return
        if loaded.error is not None:
            self._record(PARSE_ERROR_KINDS[tier], loaded.error, path=str(loaded.path))
            return
        self._merge(tier, loaded.data, str(loaded.path))

    def _load_directories(self, tier: Tier, directories: Sequence[str], scan: bool = False) -> None:
        home = self._environment.get("HOME")
        locations = self._options.config_locations
        for directory in directories:
            loaded = load_from_dir(
                expand_home(directory, home),
                self._options.file_names,
                self._formats,
                self._options.app_name,
                use_app_name_as_dir=locations.use_app_name_as_dir,
                scan=scan,
            )
            self._merge_loaded(tier, loaded)

    def _load_defaults(self) -> None:
        defaults = self._options.defaults
        if defaults is None:
            return

        if isinstance(defaults, Mapping):
            self._merge(Tier.DEFAULTS, defaults, "defaults")
        elif isinstance(defaults, str):
            loaded = load_base_path(expand_home(defaults, self._environment.get("HOME")), self._formats)
            if loaded is None:
                self._record(
                    SourceErrorKind.DEFAULTS_FILE_NOT_FOUND,
                    f"Defaults file not found: {defaults}",
                    path=defaults,
                )
            else:
                self._merge_loaded(Tier.DEFAULTS, loaded)
        else:
            self._record(
                SourceErrorKind.OPTIONS_VALIDATION,
                f"Invalid type for defaults: expected a mapping or a file path, got {type(defaults).__name__}",
                key="defaults",
            )

    def _load_system(self) -> None:
        directories = expand(
            self._options.config_locations.system,
            system_defaults(self._options.app_name),
        )
        self._load_directories(Tier.SYSTEM, directories)

    def _load_user(self) -> None:
        home = self._environment.get("HOME")
        if not home:
            logger.debug("user_tier_skipped", reason="HOME not set")
            return

        spec = self._options.config_locations.user
        self._load_directories(Tier.USER, expand(spec, user_defaults(home)))

        loaded = load_base_path(user_dotfile(home, self._options.app_name), self._formats)
        self._merge_loaded(Tier.USER, loaded)

    def _load_project(self) -> None:
        directories = expand(self._options.config_locations.project, project_defaults())
        self._load_directories(Tier.PROJECT, directories)

    def _load_custom(self) -> None:
        home = self._environment.get("HOME")
        for position, entry in enumerate(self._options.config_locations.custom_paths, start=1):
            if not isinstance(entry, str) or not entry:
                self._record(
                    SourceErrorKind.OPTIONS_VALIDATION,
                    f"Custom path entries must be non-empty strings, got {entry!r}",
                    key=f"config_locations.custom_paths[{position}]",
                )
                continue

            path = expand_home(entry, home)
            if path_exists(Path(path), "dir"):
                self._load_directories(Tier.CUSTOM, [path], scan=True)
                continue

            loaded = load_base_path(path, self._formats)
            if loaded is None:
                self._record(
                    SourceErrorKind.CUSTOM_FILE_NOT_FOUND,
                    f"Custom configuration file not found: {entry}",
                    path=entry,
                )
                continue
            self._merge_loaded(Tier.CUSTOM, loaded)

    def _env_options(self) -> EnvOptions | None:
        raw = self._options.env
        if raw is False:
            return None
        if raw is None or raw is True:
            return EnvOptions()
        if isinstance(raw, EnvOptions):
            return raw
        if isinstance(raw, Mapping):
            try:
                return EnvOptions.model_validate(dict(raw))
            except ValidationError as e:
                self._record(SourceErrorKind.OPTIONS_VALIDATION, f"Invalid env options: {e}", key="env")
                return None
        self._record(
            SourceErrorKind.OPTIONS_VALIDATION,
            f"Invalid type for env: expected false or a mapping, got {type(raw).__name__}",
            key="env",
        )
        return None

    def _load_env(self) -> None:
        env_options = self._env_options()
        if env_options is None:
            return

        prefix = env_options.prefix or f"{self._options.app_name.upper()}_"
        data = read_env_vars(
            self._environment.variables(),
            prefix,
            auto_parse_types=env_options.auto_parse_types,
            nested_separator=env_options.nested_separator,
        )
        self._merge(Tier.ENV, data, prefix)

    def _raw_arguments(self) -> Sequence[Any] | Mapping[Any, Any] | None:
        raw = self._options.cmd_args
        if raw is False:
            return None
        if isinstance(raw, Mapping):
            return raw
        if raw is True or raw is None:
            if self._arguments is None:
                return None
            provided = self._arguments()
            if provided is None or isinstance(provided, (Mapping, Sequence)):
                return provided
            self._record(
                SourceErrorKind.OPTIONS_VALIDATION,
                f"Argument provider returned {type(provided).__name__}, expected a sequence or a mapping",
                key="cmd_args",
            )
            return None
        self._record(
            SourceErrorKind.OPTIONS_VALIDATION,
            f"Invalid type for cmd_args: expected a boolean or a mapping, got {type(raw).__name__}",
            key="cmd_args",
        )
        return None

    def _load_cmdline(self) -> None:
        raw = self._raw_arguments()
        if raw is None:
            return
        if isinstance(raw, Mapping):
            parsed = raw
        elif isinstance(raw, str):
            parsed = parse_arguments(raw.split())
        else:
            parsed = parse_arguments(raw)
        self._merge(Tier.CMDLINE, read_cmdline_options(parsed), "cmdline")


def _validate_options(options: Any) -> DeclareOptions:
    if isinstance(options, DeclareOptions):
        return options
    if not isinstance(options, Mapping):
        raise InvalidOptionsError(
            f"declare() requires a mapping of options, got {type(options).__name__}"
        )
    app_name = options.get("app_name")
    if not isinstance(app_name, str) or not app_name:
        raise InvalidOptionsError("declare() requires a non-empty 'app_name' string option")
    try:
        return DeclareOptions.model_validate(dict(options))
    except ValidationError as e:
        raise InvalidOptionsError(f"Invalid declare() options: {e}") from e


def declare(
    options: Mapping[str, Any] | DeclareOptions,
    env_provider: EnvironmentProvider | None = None,
    arg_provider: ArgumentProvider | None = None,
) -> tuple[Config, list[SourceError]]:
    """Resolve configuration for an application from every tier.

    Args:
        options: Mapping of options (or a DeclareOptions); ``app_name`` is required
        env_provider: Mapping or lookup function for environment variables;
            defaults to the process environment
        arg_provider: Callable returning argv-style tokens or a pre-parsed
            mapping; when omitted, ``cmd_args=True`` reads ``sys.argv[1:]``

    Returns:
        The accessor and the list of recoverable source errors

    Raises:
        InvalidOptionsError: If options are not a mapping or app_name is
            missing or invalid
    """
    validated = _validate_options(options)

    environment = os_environment() if env_provider is None else Environment(env_provider)

    arguments = arg_provider
    if arguments is None and validated.cmd_args is True:
        arguments = os_arguments

    return Resolver(validated, environment, arguments).resolve()
