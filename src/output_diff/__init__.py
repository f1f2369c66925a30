"""
OutputDiff - Semantic diff engine for text, JSON, and binary outputs.

Determines whether two artifacts differ and renders the differences in
unified, JSON, side-by-side, or compact form.
"""

__version__ = "0.1.0"

from .core.config import DiffConfig, OutputFormat, FileType
from .core.changes import (
    DiffType,
    LineChange,
    JsonChange,
    TextDiffResult,
    JsonDiffResult,
    BinaryDiffResult,
    DiffResult,
    has_changes,
)
from .core.errors import DiffError, ParseError, EncodingError, DiffConfigError
from .core.detect import detect_file_type
from .diff.text_diff import diff_text
from .diff.json_diff import diff_json
from .diff.binary_diff import diff_binary
from .diff.compare import compare_bytes
from .diff.renderer import DiffRenderer, format_diff

__all__ = [
    # Version
    "__version__",
    # Configuration
    "DiffConfig",
    "OutputFormat",
    "FileType",
    # Data models
    "DiffType",
    "LineChange",
    "JsonChange",
    "TextDiffResult",
    "JsonDiffResult",
    "BinaryDiffResult",
    "DiffResult",
    "has_changes",
    # Errors
    "DiffError",
    "ParseError",
    "EncodingError",
    "DiffConfigError",
    # Engines
    "detect_file_type",
    "diff_text",
    "diff_json",
    "diff_binary",
    "compare_bytes",
    # Rendering
    "DiffRenderer",
    "format_diff",
]
