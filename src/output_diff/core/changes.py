"""
Change records and diff results produced by the engines.

Every value here is immutable and lives only as long as the comparison
that produced it. DiffResult is the closed union of the three engine
results; consumers dispatch on the concrete class.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from .config import FileType


class DiffType(Enum):
    """Types of differences between two inputs."""
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class LineChange:
    """
    One entry of a line-level edit script.

    ``line`` keeps its line terminator so that joining the script
    reproduces the inputs verbatim. Removed lines carry only
    ``old_line_num``, added lines only ``new_line_num``.
    """
    diff_type: DiffType
    line: str
    old_line_num: Optional[int] = None
    new_line_num: Optional[int] = None

    @classmethod
    def added(cls, new_line_num: int, line: str) -> "LineChange":
        return cls(DiffType.ADDED, line, new_line_num=new_line_num)

    @classmethod
    def removed(cls, old_line_num: int, line: str) -> "LineChange":
        return cls(DiffType.REMOVED, line, old_line_num=old_line_num)

    @classmethod
    def unchanged(cls, old_line_num: int, new_line_num: int, line: str) -> "LineChange":
        return cls(DiffType.UNCHANGED, line, old_line_num=old_line_num, new_line_num=new_line_num)

    @property
    def text(self) -> str:
        """The line without its terminator."""
        if self.line.endswith("\r\n"):
            return self.line[:-2]
        if self.line.endswith("\n"):
            return self.line[:-1]
        return self.line

    @property
    def has_newline(self) -> bool:
        return self.line.endswith("\n")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data: Dict[str, Any] = {"type": self.diff_type.value, "line": self.text}
        if self.old_line_num is not None:
            data["old_line"] = self.old_line_num
        if self.new_line_num is not None:
            data["new_line"] = self.new_line_num
        return data


@dataclass(frozen=True)
class JsonChange:
    """
    A structural change at a path inside a JSON document.

    Added changes carry ``new_value``, removed changes ``old_value``,
    modified changes both. Values are plain parsed JSON (dict, list,
    str, int, float, bool, None).
    """
    diff_type: DiffType
    path: str
    old_value: Any = None
    new_value: Any = None

    @classmethod
    def added(cls, path: str, value: Any) -> "JsonChange":
        return cls(DiffType.ADDED, path, new_value=value)

    @classmethod
    def removed(cls, path: str, value: Any) -> "JsonChange":
        return cls(DiffType.REMOVED, path, old_value=value)

    @classmethod
    def modified(cls, path: str, old_value: Any, new_value: Any) -> "JsonChange":
        return cls(DiffType.MODIFIED, path, old_value=old_value, new_value=new_value)

    @property
    def value(self) -> Any:
        """The value an added or removed change refers to."""
        if self.diff_type == DiffType.ADDED:
            return self.new_value
        return self.old_value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data: Dict[str, Any] = {"type": self.diff_type.value, "path": self.path}
        if self.diff_type in (DiffType.REMOVED, DiffType.MODIFIED):
            data["old_value"] = self.old_value
        if self.diff_type in (DiffType.ADDED, DiffType.MODIFIED):
            data["new_value"] = self.new_value
        return data


@dataclass(frozen=True)
class TextDiffResult:
    """Complete edit script between two texts, unchanged lines included."""
    changes: Tuple[LineChange, ...] = ()
    old_line_count: int = 0
    new_line_count: int = 0

    file_type = FileType.TEXT

    def has_changes(self) -> bool:
        return any(c.diff_type != DiffType.UNCHANGED for c in self.changes)

    def additions(self) -> int:
        return sum(1 for c in self.changes if c.diff_type == DiffType.ADDED)

    def deletions(self) -> int:
        return sum(1 for c in self.changes if c.diff_type == DiffType.REMOVED)

    def modifications(self) -> int:
        # Text scripts express a changed line as a removal plus an addition
        return 0


@dataclass(frozen=True)
class JsonDiffResult:
    """Structural changes between two JSON documents, in traversal order."""
    changes: Tuple[JsonChange, ...] = ()

    file_type = FileType.JSON

    def has_changes(self) -> bool:
        return bool(self.changes)

    def additions(self) -> int:
        return sum(1 for c in self.changes if c.diff_type == DiffType.ADDED)

    def deletions(self) -> int:
        return sum(1 for c in self.changes if c.diff_type == DiffType.REMOVED)

    def modifications(self) -> int:
        return sum(1 for c in self.changes if c.diff_type == DiffType.MODIFIED)


@dataclass(frozen=True)
class BinaryDiffResult:
    """
    Sizes of two byte sequences and where they first diverge.

    ``first_diff_offset`` is None only for byte-identical inputs. When one
    input is a strict prefix of the other it is the shorter length, and the
    byte of the exhausted side is None.
    """
    size1: int
    size2: int
    first_diff_offset: Optional[int] = None
    old_byte: Optional[int] = None
    new_byte: Optional[int] = None

    file_type = FileType.BINARY

    def is_identical(self) -> bool:
        return self.first_diff_offset is None

    def has_changes(self) -> bool:
        return not self.is_identical()

    @property
    def diff_type(self) -> DiffType:
        """How the first difference reads: a changed byte, or extra bytes on one side."""
        if self.first_diff_offset is None:
            return DiffType.UNCHANGED
        if self.old_byte is None:
            return DiffType.ADDED
        if self.new_byte is None:
            return DiffType.REMOVED
        return DiffType.MODIFIED


DiffResult = Union[TextDiffResult, JsonDiffResult, BinaryDiffResult]


def has_changes(result: DiffResult) -> bool:
    """
    Whether a comparison found any difference.

    Drives the exit code: 0 when False, 1 when True.
    """
    if isinstance(result, (TextDiffResult, JsonDiffResult, BinaryDiffResult)):
        return result.has_changes()
    raise TypeError(f"Unsupported diff result: {type(result).__name__}")
