"""
Line-level text diff engine.

Computes a longest-common-subsequence alignment of the two line
sequences and turns it into a complete edit script, then groups the
script into context-bounded hunks for display.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..core.changes import DiffType, LineChange, TextDiffResult
from ..core.config import DiffConfig

logger = logging.getLogger(__name__)

# (old index, new index) pairs; None on the side a line is missing from
Alignment = List[Tuple[Optional[int], Optional[int]]]


@dataclass(frozen=True)
class Hunk:
    """A contiguous slice of the edit script with its unified header ranges."""
    changes: Tuple[LineChange, ...]
    old_start: int
    old_count: int
    new_start: int
    new_count: int

    def header(self) -> str:
        return f"@@ -{self.old_start},{self.old_count} +{self.new_start},{self.new_count} @@"


def split_lines(text: str) -> List[str]:
    """
    Split text into lines that keep their terminator.

    "a\\nb" -> ["a\\n", "b"], "a\\n" -> ["a\\n"], "" -> []. Joining the
    result gives back the input unchanged. Only "\\n" ends a line; a
    preceding "\\r" stays part of the line.
    """
    if not text:
        return []
    lines = [line + "\n" for line in text.split("\n")]
    last = lines.pop()
    if last != "\n":
        lines.append(last[:-1])
    return lines


def _intern(old_lines: Sequence[str], new_lines: Sequence[str]) -> Tuple[np.ndarray, np.ndarray]:
    """Map each distinct line to a small integer so rows compare as arrays."""
    ids: Dict[str, int] = {}
    old_ids = np.array([ids.setdefault(line, len(ids)) for line in old_lines], dtype=np.int64)
    new_ids = np.array([ids.setdefault(line, len(ids)) for line in new_lines], dtype=np.int64)
    return old_ids, new_ids


def _lcs_table(old_ids: np.ndarray, new_ids: np.ndarray) -> np.ndarray:
    """
    Build the full prefix LCS table.

    table[i, j] is the LCS length of old[:i] and new[:j]. Each row is
    derived from the previous one as
    max(previous row, running max of (previous diagonal + 1) over matches),
    which equals the classic recurrence because rows are non-decreasing.
    """
    n, m = len(old_ids), len(new_ids)
    table = np.zeros((n + 1, m + 1), dtype=np.int32)
    for i in range(1, n + 1):
        prev = table[i - 1]
        candidates = np.where(new_ids == old_ids[i - 1], prev[:-1] + 1, 0)
        table[i, 1:] = np.maximum(prev[1:], np.maximum.accumulate(candidates))
    return table


def _align(old_lines: Sequence[str], new_lines: Sequence[str]) -> Alignment:
    """
    Align two line sequences along one longest common subsequence.

    The table is walked backwards from the end of both inputs: equal lines
    are always matched, otherwise the step keeping the longer subsequence is
    taken, consuming an old line when both keep it.
    """
    n, m = len(old_lines), len(new_lines)
    if n == 0:
        return [(None, j) for j in range(m)]
    if m == 0:
        return [(i, None) for i in range(n)]

    old_ids, new_ids = _intern(old_lines, new_lines)
    table = _lcs_table(old_ids, new_ids)

    pairs: Alignment = []
    i, j = n, m
    while i > 0 and j > 0:
        if old_ids[i - 1] == new_ids[j - 1]:
            pairs.append((i - 1, j - 1))
            i -= 1
            j -= 1
        elif table[i - 1, j] >= table[i, j - 1]:
            pairs.append((i - 1, None))
            i -= 1
        else:
            pairs.append((None, j - 1))
            j -= 1
    while i > 0:
        pairs.append((i - 1, None))
        i -= 1
    while j > 0:
        pairs.append((None, j - 1))
        j -= 1

    pairs.reverse()
    return pairs


def _group_blocks(changes: List[LineChange]) -> List[LineChange]:
    """Reorder every run of edits so its removals precede its additions."""
    grouped: List[LineChange] = []
    removed: List[LineChange] = []
    added: List[LineChange] = []

    for change in changes:
        if change.diff_type == DiffType.REMOVED:
            removed.append(change)
        elif change.diff_type == DiffType.ADDED:
            added.append(change)
        else:
            grouped.extend(removed)
            grouped.extend(added)
            removed, added = [], []
            grouped.append(change)

    grouped.extend(removed)
    grouped.extend(added)
    return grouped


def _edit_script(old_lines: List[str], new_lines: List[str]) -> List[LineChange]:
    """Build the full edit script, matching the common prefix and suffix directly."""
    n, m = len(old_lines), len(new_lines)

    prefix = 0
    while prefix < n and prefix < m and old_lines[prefix] == new_lines[prefix]:
        prefix += 1

    suffix = 0
    while (
        suffix < n - prefix
        and suffix < m - prefix
        and old_lines[n - 1 - suffix] == new_lines[m - 1 - suffix]
    ):
        suffix += 1

    changes: List[LineChange] = [
        LineChange.unchanged(k + 1, k + 1, old_lines[k]) for k in range(prefix)
    ]

    middle_old = old_lines[prefix:n - suffix]
    middle_new = new_lines[prefix:m - suffix]
    for old_idx, new_idx in _align(middle_old, middle_new):
        if old_idx is not None and new_idx is not None:
            changes.append(
                LineChange.unchanged(prefix + old_idx + 1, prefix + new_idx + 1, middle_old[old_idx])
            )
        elif old_idx is not None:
            changes.append(LineChange.removed(prefix + old_idx + 1, middle_old[old_idx]))
        else:
            changes.append(LineChange.added(prefix + new_idx + 1, middle_new[new_idx]))

    for k in range(suffix):
        changes.append(
            LineChange.unchanged(n - suffix + k + 1, m - suffix + k + 1, old_lines[n - suffix + k])
        )

    return _group_blocks(changes)


def diff_text(old: str, new: str, config: Optional[DiffConfig] = None) -> TextDiffResult:
    """
    Compute a line-level diff between two texts.

    Args:
        old: Baseline text
        new: Comparison text
        config: Diff options; only ``verbose`` affects the engine

    Returns:
        TextDiffResult holding the complete edit script. Context trimming
        is left to the renderer, so unchanged lines are always present.
    """
    config = config or DiffConfig()
    old_lines = split_lines(old)
    new_lines = split_lines(new)

    if config.verbose:
        logger.debug(f"Old lines: {len(old_lines)}, New lines: {len(new_lines)}")

    changes = _edit_script(old_lines, new_lines)

    if config.verbose:
        edits = sum(1 for c in changes if c.diff_type != DiffType.UNCHANGED)
        logger.debug(f"Edit script: {len(changes)} entries, {edits} edits")

    return TextDiffResult(
        changes=tuple(changes),
        old_line_count=len(old_lines),
        new_line_count=len(new_lines),
    )


def _hunk_ranges(changes: Sequence[LineChange], context_lines: Optional[int]) -> List[Tuple[int, int]]:
    """Index ranges [start, end) of the script covered by each hunk."""
    edit_positions = [
        k for k, change in enumerate(changes) if change.diff_type != DiffType.UNCHANGED
    ]
    if not edit_positions:
        return []
    if context_lines is None:
        return [(0, len(changes))]

    ranges: List[Tuple[int, int]] = []
    start = max(0, edit_positions[0] - context_lines)
    end = edit_positions[0] + 1
    for position in edit_positions[1:]:
        # position - end unchanged lines separate this edit from the previous one
        if position - end <= 2 * context_lines:
            end = position + 1
            continue
        ranges.append((start, min(len(changes), end + context_lines)))
        start = position - context_lines
        end = position + 1
    ranges.append((start, min(len(changes), end + context_lines)))
    return ranges


def build_hunks(changes: Sequence[LineChange], context_lines: Optional[int] = None) -> List[Hunk]:
    """
    Group an edit script into hunks.

    Edits separated by at most ``2 * context_lines`` unchanged lines share a
    hunk; longer unchanged runs are cut down to ``context_lines`` on each side.
    With ``context_lines=None`` every change lands in a single hunk spanning
    the whole script. An edit script without edits has no hunks.

    Args:
        changes: Complete edit script from diff_text
        context_lines: Unchanged lines to keep around each edit

    Returns:
        Hunks in script order
    """
    # Lines of each side consumed before every script position
    old_before = [0] * (len(changes) + 1)
    new_before = [0] * (len(changes) + 1)
    for k, change in enumerate(changes):
        old_before[k + 1] = old_before[k] + (change.old_line_num is not None)
        new_before[k + 1] = new_before[k] + (change.new_line_num is not None)

    hunks: List[Hunk] = []
    for start, end in _hunk_ranges(changes, context_lines):
        old_count = old_before[end] - old_before[start]
        new_count = new_before[end] - new_before[start]
        hunks.append(
            Hunk(
                changes=tuple(changes[start:end]),
                old_start=old_before[start] + (1 if old_count else 0),
                old_count=old_count,
                new_start=new_before[start] + (1 if new_count else 0),
                new_count=new_count,
            )
        )
    return hunks
