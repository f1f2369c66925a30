"""
Byte-level binary diff engine.

Reports both sizes and the offset of the first differing byte. The scan
works chunk by chunk and stops at the first chunk containing a mismatch.
"""

import logging
from typing import Optional

import numpy as np

from ..core.changes import BinaryDiffResult
from ..core.config import DiffConfig

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def first_difference(old: bytes, new: bytes, chunk_size: int = CHUNK_SIZE) -> Optional[int]:
    """
    Offset of the first differing byte.

    Returns None when the inputs are identical, the shorter length when one
    input is a strict prefix of the other.
    """
    common = min(len(old), len(new))
    if common == 0:
        return None if len(old) == len(new) else 0

    old_view = np.frombuffer(old, dtype=np.uint8, count=common)
    new_view = np.frombuffer(new, dtype=np.uint8, count=common)

    for start in range(0, common, chunk_size):
        stop = min(start + chunk_size, common)
        mismatches = np.flatnonzero(old_view[start:stop] != new_view[start:stop])
        if mismatches.size:
            return start + int(mismatches[0])

    if len(old) != len(new):
        return common
    return None


def diff_binary(old: bytes, new: bytes, config: Optional[DiffConfig] = None) -> BinaryDiffResult:
    """
    Compare two byte sequences.

    Args:
        old: Baseline bytes
        new: Comparison bytes
        config: Diff options; only ``verbose`` affects the engine

    Returns:
        BinaryDiffResult with sizes, first differing offset and the bytes
        found there. Never raises.
    """
    config = config or DiffConfig()

    if config.verbose:
        logger.debug(f"Old size: {len(old)}, New size: {len(new)}")

    offset = first_difference(bytes(old), bytes(new))
    if offset is None:
        return BinaryDiffResult(size1=len(old), size2=len(new))

    if config.verbose:
        logger.debug(f"First difference at offset {offset:#010x}")

    return BinaryDiffResult(
        size1=len(old),
        size2=len(new),
        first_diff_offset=offset,
        old_byte=old[offset] if offset < len(old) else None,
        new_byte=new[offset] if offset < len(new) else None,
    )
