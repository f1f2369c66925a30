"""
Diff renderer for displaying comparison results.

Supports unified, JSON report, side-by-side and compact output for each
kind of diff result. Rendering is a pure projection of the result.
"""

import json
from io import StringIO
from typing import Any, Dict, List, Optional, Sequence

from ..core.changes import (
    BinaryDiffResult,
    DiffResult,
    DiffType,
    JsonDiffResult,
    LineChange,
    TextDiffResult,
)
from ..core.config import DEFAULT_WIDTH, MIN_WIDTH, DiffConfig, OutputFormat
from ..core.errors import DiffConfigError
from .json_diff import json_type_name
from .text_diff import build_hunks

NO_NEWLINE_MARKER = "\\ No newline at end of file"

# Containers nested deeper than this are abbreviated when displayed
_MAX_DISPLAY_DEPTH = 3
_MAX_DISPLAY_ITEMS = 3


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def _display_path(path: str) -> str:
    return path or "(root)"


def _hex_byte(value: Optional[int]) -> str:
    return "--" if value is None else f"{value:02x}"


def format_json_value(value: Any, depth: int = 0) -> str:
    """
    Short display form of a parsed JSON value.

    Containers with more than three entries, or nested too deeply, are
    abbreviated to their size.
    """
    kind = json_type_name(value)
    if kind in ("null", "boolean", "number", "string"):
        return json.dumps(value, ensure_ascii=False)

    if kind == "array":
        if not value:
            return "[]"
        if len(value) > _MAX_DISPLAY_ITEMS or depth >= _MAX_DISPLAY_DEPTH:
            return f"[...{_plural(len(value), 'item')}...]"
        return "[" + ", ".join(format_json_value(v, depth + 1) for v in value) + "]"

    if not value:
        return "{}"
    if len(value) > _MAX_DISPLAY_ITEMS or depth >= _MAX_DISPLAY_DEPTH:
        return f"{{...{_plural(len(value), 'field')}...}}"
    items = (
        f"{json.dumps(k, ensure_ascii=False)}: {format_json_value(v, depth + 1)}"
        for k, v in value.items()
    )
    return "{" + ", ".join(items) + "}"


class DiffRenderer:
    """
    Renders diff results in various formats.
    """

    def __init__(
        self,
        color: bool = False,
        context_lines: Optional[int] = None,
        width: int = DEFAULT_WIDTH,
    ):
        """
        Initialize the renderer.

        Args:
            color: Whether to use ANSI colors
            context_lines: Unchanged lines around each text change (None shows all)
            width: Total width of the side-by-side layout
        """
        if width < MIN_WIDTH:
            raise DiffConfigError(f"width must be >= {MIN_WIDTH}, got {width}")
        self.color = color
        self.context_lines = context_lines
        self.width = width

    @classmethod
    def from_config(cls, config: DiffConfig) -> "DiffRenderer":
        return cls(color=config.color, context_lines=config.context_lines, width=config.width)

    def render(
        self,
        result: DiffResult,
        name1: str,
        name2: str,
        output_format: OutputFormat = OutputFormat.UNIFIED,
    ) -> str:
        """
        Render a diff result.

        Args:
            result: Result of any diff engine
            name1: Display name of the baseline
            name2: Display name of the comparison
            output_format: Which layout to produce

        Returns:
            Rendered text, newline terminated
        """
        if output_format == OutputFormat.UNIFIED:
            return self.render_unified(result, name1, name2)
        if output_format == OutputFormat.JSON:
            return self.render_json_report(result, name1, name2)
        if output_format == OutputFormat.SIDE_BY_SIDE:
            return self.render_side_by_side(result, name1, name2)
        if output_format == OutputFormat.COMPACT:
            return self.render_compact(result)
        raise ValueError(f"Unknown output format: {output_format!r}")

    def _color(self, text: str, color: str) -> str:
        """Apply ANSI color to text."""
        if not self.color:
            return text

        colors = {
            "red": "\033[91m",
            "green": "\033[92m",
            "yellow": "\033[93m",
            "blue": "\033[94m",
            "cyan": "\033[96m",
            "bold": "\033[1m",
            "reset": "\033[0m",
        }

        return f"{colors.get(color, '')}{text}{colors['reset']}"

    # Unified

    def render_unified(self, result: DiffResult, name1: str, name2: str) -> str:
        """Render hunks for text, a change list for JSON, a summary for binary."""
        if isinstance(result, TextDiffResult):
            return self._unified_text(result, name1, name2)
        if isinstance(result, JsonDiffResult):
            return self._unified_json(result)
        if isinstance(result, BinaryDiffResult):
            return self._unified_binary(result)
        raise TypeError(f"Unsupported diff result: {type(result).__name__}")

    def _unified_text(self, result: TextDiffResult, name1: str, name2: str) -> str:
        hunks = build_hunks(result.changes, self.context_lines)
        if not hunks:
            return "No differences found\n"

        output = StringIO()
        output.write(self._color(f"--- {name1}", "bold") + "\n")
        output.write(self._color(f"+++ {name2}", "bold") + "\n")

        for hunk in hunks:
            output.write(self._color(hunk.header(), "cyan") + "\n")
            for change in hunk.changes:
                self._write_unified_line(output, change)

        return output.getvalue()

    def _write_unified_line(self, output: StringIO, change: LineChange) -> None:
        """Write one script entry with its unified prefix."""
        if change.diff_type == DiffType.UNCHANGED:
            output.write(f" {change.text}\n")
            return

        if change.diff_type == DiffType.REMOVED:
            output.write(self._color(f"-{change.text}", "red") + "\n")
        else:
            output.write(self._color(f"+{change.text}", "green") + "\n")

        if not change.has_newline:
            output.write(NO_NEWLINE_MARKER + "\n")

    def _unified_json(self, result: JsonDiffResult) -> str:
        if not result.changes:
            return "No differences found\n"

        output = StringIO()
        output.write(f"JSON diff: {_plural(len(result.changes), 'change')}\n\n")

        for change in result.changes:
            path = self._color(_display_path(change.path), "cyan")
            if change.diff_type == DiffType.ADDED:
                line = self._color("+ Added", "green") + f" at '{path}': {format_json_value(change.value)}"
            elif change.diff_type == DiffType.REMOVED:
                line = self._color("- Removed", "red") + f" at '{path}': {format_json_value(change.value)}"
            else:
                line = (
                    self._color("~ Modified", "yellow")
                    + f" at '{path}': "
                    + self._color(format_json_value(change.old_value), "red")
                    + " → "
                    + self._color(format_json_value(change.new_value), "green")
                    + self._type_note(change.old_value, change.new_value)
                )
            output.write(line + "\n")

        return output.getvalue()

    @staticmethod
    def _type_note(old_value: Any, new_value: Any) -> str:
        old_type = json_type_name(old_value)
        new_type = json_type_name(new_value)
        if old_type == new_type:
            return ""
        return f" ({old_type} → {new_type})"

    def _unified_binary(self, result: BinaryDiffResult) -> str:
        if result.is_identical():
            return f"Binary files are identical ({_plural(result.size1, 'byte')})\n"

        output = StringIO()
        output.write(
            f"Binary files differ: {result.size1} bytes old, {result.size2} bytes new\n"
        )
        offset = self._color(f"0x{result.first_diff_offset:08x}", "cyan")
        output.write(
            f"First difference at offset {offset}: "
            + self._color(_hex_byte(result.old_byte), "red")
            + " → "
            + self._color(_hex_byte(result.new_byte), "green")
            + "\n"
        )
        return output.getvalue()

    # JSON report

    def report(self, result: DiffResult, name1: str, name2: str) -> Dict[str, Any]:
        """
        Build the machine-readable report.

        The shape is stable: format, file1, file2, identical, file_type,
        differences and summary. Every difference has ``type`` and ``path``
        plus the ``old_value``/``new_value``/``old_line``/``new_line`` keys
        that apply to it.
        """
        differences = self._report_differences(result)
        types = [d["type"] for d in differences]
        return {
            "format": "json",
            "file1": name1,
            "file2": name2,
            "identical": not result.has_changes(),
            "file_type": result.file_type.value,
            "differences": differences,
            "summary": {
                "total_changes": len(differences),
                "additions": types.count(DiffType.ADDED.value),
                "deletions": types.count(DiffType.REMOVED.value),
                "modifications": types.count(DiffType.MODIFIED.value),
            },
        }

    def _report_differences(self, result: DiffResult) -> List[Dict[str, Any]]:
        if isinstance(result, TextDiffResult):
            differences = []
            for change in result.changes:
                if change.diff_type == DiffType.ADDED:
                    differences.append({
                        "type": change.diff_type.value,
                        "path": f"line {change.new_line_num}",
                        "new_value": change.text,
                        "new_line": change.new_line_num,
                    })
                elif change.diff_type == DiffType.REMOVED:
                    differences.append({
                        "type": change.diff_type.value,
                        "path": f"line {change.old_line_num}",
                        "old_value": change.text,
                        "old_line": change.old_line_num,
                    })
            return differences

        if isinstance(result, JsonDiffResult):
            return [change.to_dict() for change in result.changes]

        if isinstance(result, BinaryDiffResult):
            if result.is_identical():
                return []
            entry: Dict[str, Any] = {
                "type": result.diff_type.value,
                "path": f"0x{result.first_diff_offset:08x}",
            }
            if result.old_byte is not None:
                entry["old_value"] = result.old_byte
            if result.new_byte is not None:
                entry["new_value"] = result.new_byte
            return [entry]

        raise TypeError(f"Unsupported diff result: {type(result).__name__}")

    def render_json_report(self, result: DiffResult, name1: str, name2: str) -> str:
        """Render the report as indented JSON. Never colored."""
        return json.dumps(self.report(result, name1, name2), indent=2, ensure_ascii=False) + "\n"

    # Side by side

    def render_side_by_side(self, result: DiffResult, name1: str, name2: str) -> str:
        """Render two columns with < (removed), > (added) and | (paired) markers."""
        half = (self.width - 3) // 2
        output = StringIO()
        output.write(self._row(name1, "|", name2, half) + "\n")
        output.write("-" * half + "-+-" + "-" * half + "\n")

        if isinstance(result, TextDiffResult):
            rows = self._side_by_side_text(result, half)
        elif isinstance(result, JsonDiffResult):
            rows = self._side_by_side_json(result, half)
        elif isinstance(result, BinaryDiffResult):
            rows = self._side_by_side_binary(result, half)
        else:
            raise TypeError(f"Unsupported diff result: {type(result).__name__}")

        for row in rows:
            output.write(row + "\n")
        return output.getvalue()

    @staticmethod
    def _truncate(text: str, width: int) -> str:
        if len(text) <= width:
            return text
        return text[:max(width - 3, 0)] + "..."

    def _row(self, left: str, marker: str, right: str, half: int, color: Optional[str] = None) -> str:
        line = f"{self._truncate(left, half):<{half}} {marker} {self._truncate(right, half)}".rstrip()
        return self._color(line, color) if color else line

    def _side_by_side_text(self, result: TextDiffResult, half: int) -> List[str]:
        hunks = build_hunks(result.changes, self.context_lines)
        if not hunks:
            return ["No differences"]

        rows: List[str] = []
        consumed = 0
        for hunk in hunks:
            # Elided lines are unchanged, so old line numbers count them
            before = hunk.old_start - (1 if hunk.old_count else 0)
            skipped = before - consumed
            if skipped > 0:
                rows.append(self._row(f"... {_plural(skipped, 'line')} ...", "|", "...", half))
            rows.extend(self._side_by_side_hunk(hunk.changes, half))
            consumed = before + hunk.old_count

        trailing = result.old_line_count - consumed
        if trailing > 0:
            rows.append(self._row(f"... {_plural(trailing, 'line')} ...", "|", "...", half))
        return rows

    def _side_by_side_hunk(self, changes: Sequence[LineChange], half: int) -> List[str]:
        rows: List[str] = []
        removed: List[LineChange] = []
        added: List[LineChange] = []

        def flush() -> None:
            for left, right in zip(removed, added):
                rows.append(self._row(left.text, "|", right.text, half, "yellow"))
            for left in removed[len(added):]:
                rows.append(self._row(left.text, "<", "", half, "red"))
            for right in added[len(removed):]:
                rows.append(self._row("", ">", right.text, half, "green"))
            removed.clear()
            added.clear()

        for change in changes:
            if change.diff_type == DiffType.REMOVED:
                removed.append(change)
            elif change.diff_type == DiffType.ADDED:
                added.append(change)
            else:
                flush()
                rows.append(self._row(change.text, "|", change.text, half))
        flush()
        return rows

    def _side_by_side_json(self, result: JsonDiffResult, half: int) -> List[str]:
        if not result.changes:
            return ["No differences"]

        rows = []
        for change in result.changes:
            path = _display_path(change.path)
            if change.diff_type == DiffType.ADDED:
                rows.append(self._row("", ">", f"{path}: {format_json_value(change.value)}", half, "green"))
            elif change.diff_type == DiffType.REMOVED:
                rows.append(self._row(f"{path}: {format_json_value(change.value)}", "<", "", half, "red"))
            else:
                rows.append(self._row(
                    f"{path}: {format_json_value(change.old_value)}",
                    "|",
                    f"{path}: {format_json_value(change.new_value)}",
                    half,
                    "yellow",
                ))
        return rows

    def _side_by_side_binary(self, result: BinaryDiffResult, half: int) -> List[str]:
        rows = [self._row(f"{result.size1} bytes", "|", f"{result.size2} bytes", half)]
        if result.is_identical():
            rows.append("No differences")
            return rows

        offset = f"0x{result.first_diff_offset:08x}"
        left = f"{offset}: {_hex_byte(result.old_byte)}" if result.old_byte is not None else ""
        right = f"{offset}: {_hex_byte(result.new_byte)}" if result.new_byte is not None else ""
        marker, color = {
            DiffType.ADDED: (">", "green"),
            DiffType.REMOVED: ("<", "red"),
        }.get(result.diff_type, ("|", "yellow"))
        rows.append(self._row(left, marker, right, half, color))
        return rows

    # Compact

    def render_compact(self, result: DiffResult) -> str:
        """Changes only, followed by a one-line summary."""
        if not result.has_changes():
            return "No differences\n"

        output = StringIO()
        if isinstance(result, TextDiffResult):
            for change in result.changes:
                if change.diff_type == DiffType.ADDED:
                    output.write(self._color(f"+ Line {change.new_line_num}: {change.text}", "green") + "\n")
                elif change.diff_type == DiffType.REMOVED:
                    output.write(self._color(f"- Line {change.old_line_num}: {change.text}", "red") + "\n")
            additions, deletions = result.additions(), result.deletions()
            output.write(
                f"\n{_plural(additions + deletions, 'change')} "
                f"({_plural(additions, 'addition')}, {_plural(deletions, 'deletion')})\n"
            )

        elif isinstance(result, JsonDiffResult):
            for change in result.changes:
                if change.diff_type == DiffType.ADDED:
                    line = self._color(f"+ {_display_path(change.path)}: {format_json_value(change.value)}", "green")
                elif change.diff_type == DiffType.REMOVED:
                    line = self._color(f"- {_display_path(change.path)}: {format_json_value(change.value)}", "red")
                else:
                    line = self._color(
                        f"~ {_display_path(change.path)}: {format_json_value(change.old_value)} → "
                        f"{format_json_value(change.new_value)}"
                        f"{self._type_note(change.old_value, change.new_value)}",
                        "yellow",
                    )
                output.write(line + "\n")
            output.write(
                f"\n{_plural(len(result.changes), 'change')} "
                f"({_plural(result.additions(), 'addition')}, "
                f"{_plural(result.deletions(), 'deletion')}, "
                f"{_plural(result.modifications(), 'modification')})\n"
            )

        elif isinstance(result, BinaryDiffResult):
            output.write(
                f"0x{result.first_diff_offset:08x}: "
                f"{_hex_byte(result.old_byte)} → {_hex_byte(result.new_byte)}\n"
            )
            output.write(
                f"\nBinary files differ ({result.size1} bytes old, {result.size2} bytes new)\n"
            )

        else:
            raise TypeError(f"Unsupported diff result: {type(result).__name__}")

        return output.getvalue()


def format_diff(result: DiffResult, name1: str, name2: str, config: Optional[DiffConfig] = None) -> str:
    """
    Render a diff result according to a DiffConfig.

    Args:
        result: Result of any diff engine
        name1: Display name of the baseline
        name2: Display name of the comparison
        config: Selects format, color, context and width

    Returns:
        Rendered text
    """
    config = config or DiffConfig()
    return DiffRenderer.from_config(config).render(result, name1, name2, config.format)
