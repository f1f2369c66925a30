"""
Configuration values shared by every engine call.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import DiffConfigError

# Narrowest side-by-side layout that still leaves room for both columns
MIN_WIDTH = 20
DEFAULT_WIDTH = 120


class OutputFormat(Enum):
    """Rendering styles understood by DiffRenderer."""
    UNIFIED = "unified"
    JSON = "json"
    SIDE_BY_SIDE = "side-by-side"
    COMPACT = "compact"


class FileType(Enum):
    """Content classes, one diff engine each."""
    TEXT = "text"
    JSON = "json"
    BINARY = "binary"


@dataclass(frozen=True)
class DiffConfig:
    """
    Immutable options for a single comparison.

    Attributes:
        context_lines: Unchanged lines shown around each change (None shows all)
        format: Output format used by the renderer
        color: Whether to emit ANSI color codes
        verbose: Whether engines log their decisions at DEBUG level
        width: Total width of the side-by-side layout
    """
    context_lines: Optional[int] = None
    format: OutputFormat = OutputFormat.UNIFIED
    color: bool = False
    verbose: bool = False
    width: int = DEFAULT_WIDTH

    def __post_init__(self) -> None:
        if self.context_lines is not None and self.context_lines < 0:
            raise DiffConfigError(f"context_lines must be >= 0, got {self.context_lines}")
        if self.width < MIN_WIDTH:
            raise DiffConfigError(f"width must be >= {MIN_WIDTH}, got {self.width}")
        if not isinstance(self.format, OutputFormat):
            try:
                object.__setattr__(self, "format", OutputFormat(self.format))
            except ValueError:
                raise DiffConfigError(f"Unknown output format: {self.format!r}") from None
