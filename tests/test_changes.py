"""
Tests for change records, results and configuration.
"""

import pytest

from output_diff.core.changes import (
    BinaryDiffResult,
    DiffType,
    JsonChange,
    JsonDiffResult,
    LineChange,
    TextDiffResult,
    has_changes,
)
from output_diff.core.config import DiffConfig, OutputFormat
from output_diff.core.errors import DiffConfigError, DiffError, EncodingError, ParseError


class TestDiffConfig:
    """Tests for DiffConfig validation."""

    def test_defaults(self):
        """Test default options."""
        config = DiffConfig()

        assert config.context_lines is None
        assert config.format == OutputFormat.UNIFIED
        assert config.color is False
        assert config.verbose is False
        assert config.width == 120

    def test_format_from_string(self):
        """Test that a format name is accepted."""
        assert DiffConfig(format="side-by-side").format == OutputFormat.SIDE_BY_SIDE

    @pytest.mark.parametrize("kwargs", [
        {"context_lines": -1},
        {"width": 5},
        {"format": "xml"},
    ])
    def test_invalid_values(self, kwargs):
        """Test rejected option values."""
        with pytest.raises(DiffConfigError):
            DiffConfig(**kwargs)

    def test_config_error_is_value_error(self):
        """Test the config error hierarchy."""
        assert issubclass(DiffConfigError, ValueError)
        assert issubclass(DiffConfigError, DiffError)


class TestChanges:
    """Tests for LineChange and JsonChange."""

    def test_line_change_text(self):
        """Test terminator handling."""
        assert LineChange.added(1, "a\r\n").text == "a"
        assert LineChange.added(1, "a\n").has_newline
        assert not LineChange.added(1, "a").has_newline

    def test_line_change_to_dict(self):
        """Test line numbers in the dictionary form."""
        assert LineChange.removed(3, "x\n").to_dict() == {"type": "removed", "line": "x", "old_line": 3}
        assert LineChange.unchanged(1, 2, "y").to_dict() == {
            "type": "unchanged", "line": "y", "old_line": 1, "new_line": 2,
        }

    def test_json_change_to_dict(self):
        """Test that only applicable values are serialized."""
        assert JsonChange.added("a", None).to_dict() == {"type": "added", "path": "a", "new_value": None}
        assert JsonChange.removed("b", 1).to_dict() == {"type": "removed", "path": "b", "old_value": 1}
        assert JsonChange.modified("c", 1, 2).to_dict() == {
            "type": "modified", "path": "c", "old_value": 1, "new_value": 2,
        }

    def test_json_change_value(self):
        """Test the value of added and removed changes."""
        assert JsonChange.added("a", 1).value == 1
        assert JsonChange.removed("a", 2).value == 2


class TestHasChanges:
    """Tests for has_changes."""

    def test_text(self):
        """Test text results."""
        unchanged = TextDiffResult(changes=(LineChange.unchanged(1, 1, "a"),), old_line_count=1, new_line_count=1)
        changed = TextDiffResult(changes=(LineChange.added(1, "a"),), new_line_count=1)

        assert not has_changes(unchanged)
        assert has_changes(changed)
        assert not has_changes(TextDiffResult())

    def test_json(self):
        """Test JSON results."""
        assert not has_changes(JsonDiffResult())
        assert has_changes(JsonDiffResult(changes=(JsonChange.added("a", 1),)))

    def test_binary(self):
        """Test binary results."""
        assert not has_changes(BinaryDiffResult(size1=3, size2=3))
        assert has_changes(BinaryDiffResult(size1=3, size2=4, first_diff_offset=3, old_byte=None, new_byte=7))

    def test_binary_diff_type(self):
        """Test how the first difference is classified."""
        assert BinaryDiffResult(1, 1).diff_type == DiffType.UNCHANGED
        assert BinaryDiffResult(1, 2, 1, None, 5).diff_type == DiffType.ADDED
        assert BinaryDiffResult(2, 1, 1, 5, None).diff_type == DiffType.REMOVED
        assert BinaryDiffResult(1, 1, 0, 1, 2).diff_type == DiffType.MODIFIED

    def test_unsupported(self):
        """Test that other objects are rejected."""
        with pytest.raises(TypeError):
            has_changes("not a result")


class TestErrors:
    """Tests for error messages."""

    def test_parse_error_message(self):
        """Test location details in the message."""
        error = ParseError("new", "Expecting value", position=6, line=1, column=7)

        assert str(error) == "new input: Expecting value at line 1, column 7 (char 6)"
        assert isinstance(error, DiffError)

    def test_parse_error_without_location(self):
        """Test a message without location."""
        assert str(ParseError("old", "Document nested too deeply")) == "old input: Document nested too deeply"

    def test_encoding_error_message(self):
        """Test the encoding error message."""
        error = EncodingError("old", position=0, reason="invalid start byte")

        assert str(error) == "old input is not valid UTF-8 at byte 0: invalid start byte"
