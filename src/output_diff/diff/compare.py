"""
Comparison pipeline: classify both inputs, pick an engine, run it.
"""

import logging
from typing import Optional

from ..core.changes import DiffResult
from ..core.config import DiffConfig, FileType
from ..core.detect import detect_file_type
from ..core.errors import EncodingError
from .binary_diff import diff_binary
from .json_diff import diff_json
from .text_diff import diff_text

logger = logging.getLogger(__name__)


def decode_utf8(content: bytes, side: str) -> str:
    """
    Decode one input as UTF-8.

    Raises:
        EncodingError: If the bytes are not valid UTF-8
    """
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(side, position=e.start, reason=e.reason) from e


def resolve_file_type(old_type: FileType, new_type: FileType) -> FileType:
    """
    Choose one engine for two detected types.

    Equal types are kept and a text/JSON mix falls back to the text engine.
    A mix involving binary content goes to the binary engine instead: the
    text engine needs both sides decoded, and EncodingError is reserved for
    a text or JSON type forced by the caller, so an auto-detected pair must
    always produce a result.
    """
    if old_type == new_type:
        return old_type
    if FileType.BINARY in (old_type, new_type):
        return FileType.BINARY
    return FileType.TEXT


def compare_bytes(
    old: bytes,
    new: bytes,
    config: Optional[DiffConfig] = None,
    old_hint: Optional[str] = None,
    new_hint: Optional[str] = None,
    force_type: Optional[FileType] = None,
) -> DiffResult:
    """
    Compare two byte buffers with the engine matching their content.

    Args:
        old: Baseline bytes
        new: Comparison bytes
        config: Diff options
        old_hint: File name or extension of the baseline, if known
        new_hint: File name or extension of the comparison, if known
        force_type: Skip detection and use this engine

    Returns:
        The engine's result

    Raises:
        EncodingError: If text or JSON is forced on non-UTF-8 bytes
        ParseError: If the JSON engine runs on invalid JSON
    """
    config = config or DiffConfig()

    if force_type is not None:
        file_type = force_type
        if config.verbose:
            logger.debug(f"Using forced file type: {file_type.value}")
    else:
        old_type = detect_file_type(old, old_hint)
        new_type = detect_file_type(new, new_hint)
        file_type = resolve_file_type(old_type, new_type)
        if config.verbose:
            logger.debug(f"File 1 type: {old_type.value}")
            logger.debug(f"File 2 type: {new_type.value}")
            if old_type != new_type:
                logger.debug(f"Mixed types, using {file_type.value} engine")

    if file_type == FileType.BINARY:
        return diff_binary(old, new, config)

    old_text = decode_utf8(old, "old")
    new_text = decode_utf8(new, "new")

    if file_type == FileType.JSON:
        return diff_json(old_text, new_text, config)
    return diff_text(old_text, new_text, config)
