"""
Diff engines for comparing text, JSON, and binary outputs.
"""

from .text_diff import diff_text, build_hunks, split_lines, Hunk
from .json_diff import diff_json, parse_json
from .binary_diff import diff_binary
from .compare import compare_bytes, resolve_file_type
from .renderer import DiffRenderer, format_diff

__all__ = [
    "diff_text",
    "build_hunks",
    "split_lines",
    "Hunk",
    "diff_json",
    "parse_json",
    "diff_binary",
    "compare_bytes",
    "resolve_file_type",
    "DiffRenderer",
    "format_diff",
]
