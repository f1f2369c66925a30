"""
File type detection by content sniffing plus an optional extension hint.
"""

import json
import logging
from typing import Any, Optional

from .config import FileType

logger = logging.getLogger(__name__)

JSON_EXTENSIONS = {"json"}
_JSON_OPENERS = ("{", "[")


def reject_constant(name: str) -> Any:
    """Refuse the NaN and Infinity literals that json.loads accepts by default."""
    raise ValueError(f"Invalid JSON literal: {name}")


def _normalize_extension(extension_hint: Optional[str]) -> Optional[str]:
    """Accept 'json', '.json', 'JSON' or a file name such as 'data.json'."""
    if not extension_hint:
        return None
    hint = extension_hint.strip().lower()
    if "." in hint:
        hint = hint.rsplit(".", 1)[1]
    return hint or None


def looks_like_json(text: str) -> bool:
    """True when the text opens an object or array and parses as strict JSON."""
    stripped = text.lstrip()
    if not stripped.startswith(_JSON_OPENERS):
        return False
    try:
        json.loads(text, parse_constant=reject_constant)
    except (ValueError, RecursionError):
        return False
    return True


def detect_file_type(content: bytes, extension_hint: Optional[str] = None) -> FileType:
    """
    Classify a byte buffer as text, JSON, or binary.

    Args:
        content: Raw bytes of one input
        extension_hint: File extension or file name, if known

    Returns:
        BINARY for invalid UTF-8, JSON when the hint says so or the content
        sniffs as a JSON object/array, TEXT otherwise. Never raises.
    """
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug(f"Detected binary content ({len(content)} bytes, not UTF-8)")
        return FileType.BINARY

    extension = _normalize_extension(extension_hint)
    if extension in JSON_EXTENSIONS:
        logger.debug(f"Detected JSON from extension hint {extension_hint!r}")
        return FileType.JSON

    if looks_like_json(text):
        logger.debug("Detected JSON from content")
        return FileType.JSON

    return FileType.TEXT
