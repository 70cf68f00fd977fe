"""Enums for the resolution domain."""

from enum import Enum, IntEnum


class Tier(IntEnum):
    """Precedence tiers, lowest to highest.

    A value from a higher tier overrides the same key from any lower tier.
    """

    DEFAULTS = 0
    SYSTEM = 1
    USER = 2
    PROJECT = 3
    CUSTOM = 4
    ENV = 5
    CMDLINE = 6


class SourceErrorKind(str, Enum):
    """Machine-readable tags for recoverable source errors.

    - OPTIONS_VALIDATION: an option value had an unusable type
    - *_FILE_NOT_FOUND: a file the caller asked for explicitly is missing
    - *_FILE: a file was found but its reader rejected it
    - FILE: a file added through Config.add_file could not be read
    """

    OPTIONS_VALIDATION = "options_validation"
    DEFAULTS_FILE_NOT_FOUND = "defaults_file_not_found"
    CUSTOM_FILE_NOT_FOUND = "custom_file_not_found"
    DEFAULTS_FILE = "defaults_file"
    SYSTEM_FILE = "system_file"
    USER_FILE = "user_file"
    PROJECT_FILE = "project_file"
    CUSTOM_FILE = "custom_file"
    FILE = "file"


PARSE_ERROR_KINDS: dict[Tier, SourceErrorKind] = {
    Tier.DEFAULTS: SourceErrorKind.DEFAULTS_FILE,
    Tier.SYSTEM: SourceErrorKind.SYSTEM_FILE,
    Tier.USER: SourceErrorKind.USER_FILE,
    Tier.PROJECT: SourceErrorKind.PROJECT_FILE,
    Tier.CUSTOM: SourceErrorKind.CUSTOM_FILE,
}
