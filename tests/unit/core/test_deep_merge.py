"""Unit tests for deep merge and tree helpers."""

import copy

from melt.utils import deep_merge, is_array, is_table, set_nested, split_path


class TestDeepMerge:
    """Tests for deep_merge function."""

    def test_merge_flat_dicts(self) -> None:
        """Flat dictionaries are merged correctly."""
        base = {"a": 1, "b": 2}
        override = {"b": 3, "c": 4}
        result = deep_merge(base, override)
        assert result == {"a": 1, "b": 3, "c": 4}

    def test_merge_nested_dicts(self) -> None:
        """Nested dictionaries are merged recursively."""
        base = {"a": {"x": 1, "y": 2}, "b": 3}
        override = {"a": {"y": 20, "z": 30}}
        result = deep_merge(base, override)
        assert result == {"a": {"x": 1, "y": 20, "z": 30}, "b": 3}

    def test_override_replaces_non_dict(self) -> None:
        """Non-dict values in override replace base values."""
        base = {"a": {"x": 1}}
        override = {"a": "replaced"}
        result = deep_merge(base, override)
        assert result == {"a": "replaced"}

    def test_table_replaces_scalar(self) -> None:
        """A table in override replaces a scalar in base."""
        result = deep_merge({"a": 1}, {"a": {"b": 2}})
        assert result == {"a": {"b": 2}}

    def test_arrays_replaced_wholesale(self) -> None:
        """Arrays from override replace base arrays instead of interleaving."""
        base = {"hosts": ["a", "b", "c"]}
        override = {"hosts": ["x"]}
        result = deep_merge(base, override)
        assert result == {"hosts": ["x"]}

    def test_array_replaces_table(self) -> None:
        """An array in override replaces a table in base."""
        result = deep_merge({"a": {"b": 1}}, {"a": [1, 2]})
        assert result == {"a": [1, 2]}

    def test_inputs_unmodified(self) -> None:
        """Neither input is modified."""
        base = {"a": {"x": 1}, "list": [1, 2]}
        override = {"a": {"y": 2}, "list": [3], "new": {"deep": {"k": 1}}}
        base_before = copy.deepcopy(base)
        override_before = copy.deepcopy(override)

        deep_merge(base, override)

        assert base == base_before
        assert override == override_before

    def test_result_does_not_alias_override(self) -> None:
        """Structures copied from override are independent of it."""
        override = {"new": {"deep": {"k": 1}}, "list": [{"item": 1}]}
        result = deep_merge({}, override)

        result["new"]["deep"]["k"] = 99
        result["list"][0]["item"] = 99

        assert override == {"new": {"deep": {"k": 1}}, "list": [{"item": 1}]}

    def test_empty_override(self) -> None:
        """Empty override returns an equal copy of base."""
        base = {"a": 1, "b": {"c": [1, 2]}}
        result = deep_merge(base, {})
        assert result == base
        assert result is not base

    def test_empty_base(self) -> None:
        """Empty base returns an equal copy of override."""
        override = {"a": 1, "b": {"c": [1, 2]}}
        result = deep_merge({}, override)
        assert result == override

    def test_map_with_numeric_string_key_stays_a_map(self) -> None:
        """A table with a key named "1" is merged as a table, not replaced."""
        base = {"t": {"1": "one", "2": "two"}}
        override = {"t": {"1": "uno"}}
        result = deep_merge(base, override)
        assert result == {"t": {"1": "uno", "2": "two"}}


class TestTreeHelpers:
    """Tests for array/table discrimination and nested assignment."""

    def test_is_array(self) -> None:
        assert is_array([1])
        assert is_array(())
        assert not is_array({"1": 1})
        assert not is_array("abc")

    def test_is_table(self) -> None:
        assert is_table({})
        assert not is_table([])
        assert not is_table(None)

    def test_split_path_drops_empty_segments(self) -> None:
        assert split_path("a..b.") == ["a", "b"]
        assert split_path("") == []

    def test_set_nested_creates_tables(self) -> None:
        tree: dict = {}
        set_nested(tree, "db.primary.host", "localhost")
        assert tree == {"db": {"primary": {"host": "localhost"}}}

    def test_set_nested_replaces_scalar_intermediate(self) -> None:
        tree: dict = {"db": "sqlite"}
        set_nested(tree, "db.host", "localhost")
        assert tree == {"db": {"host": "localhost"}}

    def test_set_nested_ignores_empty_path(self) -> None:
        tree: dict = {"a": 1}
        set_nested(tree, "", "value")
        assert tree == {"a": 1}
