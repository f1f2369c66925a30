"""
Error taxonomy for the diff engines.

Engines raise only the subclasses documented on each function. Binary
comparison and file type detection never raise.
"""

from typing import Optional


class DiffError(Exception):
    """Base class for every error raised by OutputDiff."""


class ParseError(DiffError):
    """
    One side of a JSON comparison is not valid JSON.

    Attributes:
        side: "old" or "new"
        message: Parser message without location information
        position: Character offset of the syntax error
        line: 1-based line of the syntax error
        column: 1-based column of the syntax error
    """

    def __init__(
        self,
        side: str,
        message: str,
        position: Optional[int] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        self.side = side
        self.message = message
        self.position = position
        self.line = line
        self.column = column
        super().__init__(str(self))

    def __str__(self) -> str:
        location = ""
        if self.line is not None and self.column is not None:
            location = f" at line {self.line}, column {self.column}"
            if self.position is not None:
                location += f" (char {self.position})"
        return f"{self.side} input: {self.message}{location}"


class EncodingError(DiffError):
    """
    Text mode was requested for bytes that are not valid UTF-8.

    Attributes:
        side: "old" or "new"
        position: Byte offset of the first invalid byte
    """

    def __init__(self, side: str, position: Optional[int] = None, reason: str = "invalid UTF-8"):
        self.side = side
        self.position = position
        self.reason = reason
        super().__init__(str(self))

    def __str__(self) -> str:
        where = f" at byte {self.position}" if self.position is not None else ""
        return f"{self.side} input is not valid UTF-8{where}: {self.reason}"


class DiffConfigError(DiffError, ValueError):
    """A configuration value is out of range."""
