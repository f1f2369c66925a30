"""
Tests for the JSON diff engine.
"""

import pytest

from output_diff.core.changes import DiffType, JsonChange, has_changes
from output_diff.core.errors import ParseError
from output_diff.diff.json_diff import compare_values, diff_json, key_path, parse_json


class TestParseJson:
    """Tests for parse_json."""

    def test_valid(self):
        """Test parsing a document."""
        assert parse_json('{"a": [1, 2.5, null, true]}') == {"a": [1, 2.5, None, True]}

    def test_syntax_error_location(self):
        """Test that syntax errors report side and position."""
        with pytest.raises(ParseError) as exc_info:
            parse_json('{\n  "a": 1,\n  "b": \n}', side="new")

        error = exc_info.value
        assert error.side == "new"
        assert error.line == 4
        assert error.column == 1
        assert error.position is not None
        assert "new input" in str(error)

    def test_rejects_nan(self):
        """Test that non-standard literals are rejected."""
        with pytest.raises(ParseError):
            parse_json('{"a": NaN}')

    def test_deep_nesting(self):
        """Test that pathological nesting becomes a ParseError."""
        with pytest.raises(ParseError):
            parse_json("[" * 200000 + "]" * 200000)


class TestJsonDiff:
    """Tests for diff_json."""

    def test_identical(self):
        """Test diff of equal documents."""
        result = diff_json('{"a": 1, "b": [1, 2]}', '{"b": [1, 2], "a": 1}')

        assert result.changes == ()
        assert not has_changes(result)

    def test_numeric_equality(self):
        """Test that 1 and 1.0 are the same number."""
        result = diff_json('{"a":1}', '{"a":1.0}')

        assert result.changes == ()

    def test_modified_number(self):
        """Test a single modified value."""
        result = diff_json('{"a":1}', '{"a":2}')

        assert result.changes == (JsonChange.modified("a", 1, 2),)

    def test_modified_string(self):
        """Test the name change scenario."""
        result = diff_json('{"name":"Alice","age":30}', '{"name":"Bob","age":30}')

        assert len(result.changes) == 1
        change = result.changes[0]
        assert change.diff_type == DiffType.MODIFIED
        assert change.path == "name"
        assert change.old_value == "Alice"
        assert change.new_value == "Bob"

    def test_added_and_removed_keys(self):
        """Test keys present on one side only."""
        result = diff_json('{"name": "A", "age": 30}', '{"name": "A", "city": "Oslo"}')

        assert result.changes == (
            JsonChange.removed("age", 30),
            JsonChange.added("city", "Oslo"),
        )
        assert result.additions() == 1
        assert result.deletions() == 1
        assert result.modifications() == 0

    def test_nested_path(self):
        """Test dotted paths into nested objects."""
        result = diff_json('{"user": {"name": "A"}}', '{"user": {"name": "B"}}')

        assert result.changes[0].path == "user.name"

    def test_array_paths(self):
        """Test bracketed index paths and length changes."""
        result = diff_json('{"items": [1, 2, 3]}', '{"items": [1, 5, 3, 4]}')

        assert result.changes == (
            JsonChange.modified("items[1]", 2, 5),
            JsonChange.added("items[3]", 4),
        )

    def test_shorter_array(self):
        """Test trailing removals from an array."""
        result = diff_json("[1, 2, 3]", "[1]")

        assert [c.path for c in result.changes] == ["[1]", "[2]"]
        assert all(c.diff_type == DiffType.REMOVED for c in result.changes)

    def test_type_change_reported_once(self):
        """Test that a type change is one modification of the whole subtree."""
        result = diff_json('{"a": {"x": 1, "y": 2}}', '{"a": [1, 2]}')

        assert result.changes == (JsonChange.modified("a", {"x": 1, "y": 2}, [1, 2]),)

    def test_bool_is_not_number(self):
        """Test that true and 1 have different types."""
        result = diff_json('{"a": true}', '{"a": 1}')

        assert result.changes == (JsonChange.modified("a", True, 1),)

    def test_null_to_value(self):
        """Test null replaced by a value."""
        result = diff_json('{"a": null}', '{"a": "x"}')

        assert result.changes == (JsonChange.modified("a", None, "x"),)

    def test_added_subtree_reported_at_root(self):
        """Test that descendants of an added subtree are not listed."""
        result = diff_json("{}", '{"a": {"b": {"c": 1}}}')

        assert result.changes == (JsonChange.added("a", {"b": {"c": 1}}),)

    def test_root_primitive(self):
        """Test comparison of top-level scalars."""
        result = diff_json("1", "2")

        assert result.changes == (JsonChange.modified("", 1, 2),)

    def test_traversal_order(self):
        """Test parents before descendants and keys in document order."""
        old = '{"b": {"x": 1, "y": [1, 2]}, "a": 1, "gone": true}'
        new = '{"a": 2, "b": {"x": 2, "y": [1, 3, 4]}, "new": null}'

        result = diff_json(old, new)

        assert [c.path for c in result.changes] == [
            "b.x",
            "b.y[1]",
            "b.y[2]",
            "a",
            "gone",
            "new",
        ]

    def test_special_keys_are_quoted(self):
        """Test that keys with dots or spaces stay unambiguous."""
        result = diff_json('{"a.b": 1, "c d": 1, "": 1}', '{"a.b": 2, "c d": 2, "": 2}')

        assert [c.path for c in result.changes] == ['["a.b"]', '["c d"]', '[""]']

    def test_key_path(self):
        """Test path joining."""
        assert key_path("", "user") == "user"
        assert key_path("user", "tags") == "user.tags"
        assert key_path("user", "x.y") == 'user["x.y"]'

    def test_invalid_old(self):
        """Test a parse failure on the old side."""
        with pytest.raises(ParseError) as exc_info:
            diff_json("{invalid", "{}")

        assert exc_info.value.side == "old"

    def test_invalid_new(self):
        """Test a parse failure on the new side."""
        with pytest.raises(ParseError) as exc_info:
            diff_json("{}", '{"a": }')

        assert exc_info.value.side == "new"

    def test_deep_structures_compare_without_recursion(self):
        """Test comparison of deeply nested values built in memory."""
        old, new = 1, 2
        for _ in range(5000):
            old, new = [old], [new]

        changes = compare_values(old, new)

        assert len(changes) == 1
        assert changes[0].path == "[0]" * 5000


class TestJsonChange:
    """Tests for JsonChange serialization."""

    def test_to_dict(self):
        """Test that only the applicable values are serialized."""
        assert JsonChange.added("a", 1).to_dict() == {"type": "added", "path": "a", "new_value": 1}
        assert JsonChange.removed("a", None).to_dict() == {"type": "removed", "path": "a", "old_value": None}
        assert JsonChange.modified("a", 1, 2).to_dict() == {
            "type": "modified",
            "path": "a",
            "old_value": 1,
            "new_value": 2,
        }
