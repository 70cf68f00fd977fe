"""Unit tests for the environment variable reader."""

from melt.readers import read_env_vars


class TestReadEnvVars:
    """Tests for read_env_vars."""

    def test_filters_by_prefix_and_nests(self) -> None:
        environ = {
            "APP_KEY1": "value1",
            "APP_KEY2": "42",
            "APP_NESTED__KEY": "nested_value",
            "OTHER_PREFIX": "ignored",
        }

        result = read_env_vars(environ, "APP_")

        assert result == {"key1": "value1", "key2": 42, "nested": {"key": "nested_value"}}

    def test_auto_parse_types_disabled(self) -> None:
        environ = {"APP_NUMBER": "123", "APP_BOOLEAN": "true"}

        parsed = read_env_vars(environ, "APP_", auto_parse_types=True)
        raw = read_env_vars(environ, "APP_", auto_parse_types=False)

        assert parsed == {"number": 123, "boolean": True}
        assert raw == {"number": "123", "boolean": "true"}

    def test_custom_nested_separator(self) -> None:
        environ = {"APP_NESTED::KEY": "with_colons", "APP_NESTED__KEY": "with_underscores"}

        colons = read_env_vars(environ, "APP_", nested_separator="::")
        underscores = read_env_vars(environ, "APP_", nested_separator="__")

        assert colons["nested"]["key"] == "with_colons"
        assert underscores["nested"]["key"] == "with_underscores"

    def test_bare_prefix_ignored(self) -> None:
        assert read_env_vars({"APP_": "x"}, "APP_") == {}

    def test_nested_key_wins_over_scalar_stem(self) -> None:
        environ = {"APP_DB__HOST": "localhost", "APP_DB": "sqlite"}
        assert read_env_vars(environ, "APP_") == {"db": {"host": "localhost"}}

    def test_empty_prefix_reads_nothing(self) -> None:
        assert read_env_vars({"APP_X": "1"}, "") == {}

    def test_prefix_is_case_sensitive(self) -> None:
        assert read_env_vars({"app_x": "1"}, "APP_") == {}
