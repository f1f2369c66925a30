"""
Core data structures for OutputDiff.
"""

from .config import DiffConfig, OutputFormat, FileType
from .changes import (
    DiffType,
    LineChange,
    JsonChange,
    TextDiffResult,
    JsonDiffResult,
    BinaryDiffResult,
    DiffResult,
    has_changes,
)
from .errors import DiffError, ParseError, EncodingError, DiffConfigError
from .detect import detect_file_type

__all__ = [
    "DiffConfig",
    "OutputFormat",
    "FileType",
    "DiffType",
    "LineChange",
    "JsonChange",
    "TextDiffResult",
    "JsonDiffResult",
    "BinaryDiffResult",
    "DiffResult",
    "has_changes",
    "DiffError",
    "ParseError",
    "EncodingError",
    "DiffConfigError",
    "detect_file_type",
]
