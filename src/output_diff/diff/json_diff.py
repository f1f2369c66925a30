"""
Structural JSON diff engine.

Parses both documents and walks the two trees in parallel, reporting
added, removed and modified values by path (``user.tags[2]``).
"""

import json
import logging
import re
from typing import Any, List, Optional, Tuple, Union

from ..core.changes import JsonChange, JsonDiffResult
from ..core.config import DiffConfig
from ..core.detect import reject_constant
from ..core.errors import ParseError

logger = logging.getLogger(__name__)

# Keys matching this are joined with a dot, anything else is quoted in brackets
_PLAIN_KEY = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$-]*$")

# Work items of the traversal: a pair of nodes still to compare, or a finished change
_Compare = Tuple[str, Any, Any]
_WorkItem = Union[_Compare, JsonChange]


def parse_json(text: str, side: str = "old") -> Any:
    """
    Parse strict JSON.

    Args:
        text: Document source
        side: "old" or "new", reported in errors

    Returns:
        The parsed value (dict, list, str, int, float, bool or None)

    Raises:
        ParseError: If the document is not valid JSON
    """
    try:
        return json.loads(text, parse_constant=reject_constant)
    except json.JSONDecodeError as e:
        raise ParseError(side, e.msg, position=e.pos, line=e.lineno, column=e.colno) from e
    except RecursionError as e:
        raise ParseError(side, "Document nested too deeply") from e
    except ValueError as e:
        raise ParseError(side, str(e)) from e


def json_type_name(value: Any) -> str:
    """JSON type of a parsed value."""
    if value is None:
        return "null"
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def key_path(path: str, key: str) -> str:
    """Path of an object member."""
    if _PLAIN_KEY.match(key):
        return f"{path}.{key}" if path else key
    return f"{path}[{json.dumps(key, ensure_ascii=False)}]"


def index_path(path: str, index: int) -> str:
    """Path of an array element."""
    return f"{path}[{index}]"


def _expand(path: str, old: Any, new: Any) -> Optional[List[_WorkItem]]:
    """
    Compare one pair of nodes.

    Returns the child work items in traversal order, or None when the pair
    is settled without looking at children.
    """
    old_type = json_type_name(old)
    new_type = json_type_name(new)

    if old_type != new_type:
        return [JsonChange.modified(path, old, new)]

    if old_type == "object":
        items: List[_WorkItem] = []
        for key, old_child in old.items():
            child_path = key_path(path, key)
            if key in new:
                items.append((child_path, old_child, new[key]))
            else:
                items.append(JsonChange.removed(child_path, old_child))
        for key, new_child in new.items():
            if key not in old:
                items.append(JsonChange.added(key_path(path, key), new_child))
        return items

    if old_type == "array":
        common = min(len(old), len(new))
        items = [(index_path(path, i), old[i], new[i]) for i in range(common)]
        items.extend(JsonChange.removed(index_path(path, i), old[i]) for i in range(common, len(old)))
        items.extend(JsonChange.added(index_path(path, i), new[i]) for i in range(common, len(new)))
        return items

    # Numbers compare by value, so 1 and 1.0 are equal
    if old != new:
        return [JsonChange.modified(path, old, new)]
    return None


def compare_values(old: Any, new: Any, path: str = "") -> List[JsonChange]:
    """
    Compare two parsed JSON values.

    Walks both trees depth first with an explicit stack, so nesting depth
    is bounded only by memory. Parents come before descendants, object keys
    follow the old document's order (keys only in the new document come
    last, in its order) and array indices ascend. A subtree that is wholly
    added, removed or of a different type is reported once at its root.

    Args:
        old: Baseline value
        new: Comparison value
        path: Path of the two values inside their documents

    Returns:
        Changes in traversal order
    """
    changes: List[JsonChange] = []
    stack: List[_WorkItem] = [(path, old, new)]

    while stack:
        item = stack.pop()
        if isinstance(item, JsonChange):
            changes.append(item)
            continue

        children = _expand(*item)
        if children:
            stack.extend(reversed(children))

    return changes


def diff_json(old: str, new: str, config: Optional[DiffConfig] = None) -> JsonDiffResult:
    """
    Compute a structural diff between two JSON documents.

    Args:
        old: Baseline document source
        new: Comparison document source
        config: Diff options; only ``verbose`` affects the engine

    Returns:
        JsonDiffResult with changes in traversal order

    Raises:
        ParseError: If either document is not valid JSON
    """
    config = config or DiffConfig()
    old_value = parse_json(old, side="old")
    new_value = parse_json(new, side="new")

    if config.verbose:
        logger.debug(
            f"Comparing JSON structures: {json_type_name(old_value)} vs {json_type_name(new_value)}"
        )

    changes = compare_values(old_value, new_value)

    if config.verbose:
        logger.debug(f"JSON diff found {len(changes)} changes")

    return JsonDiffResult(changes=tuple(changes))
