"""Expansion of Composer's minified (delta-encoded) release arrays.

Packagist ``p2/`` documents list the versions of a package as an array in
which every element after the first only carries the keys that changed
since the previous element. A key whose value is the ``"__unset"`` marker
is removed from the inherited state instead.

Rules:
- One accumulator per call, starting empty, never reset between elements
- Keys an element does not mention keep their inherited value
- Unsetting a key that was never set is a no-op
- Non-object elements contribute nothing; non-array input yields []
"""

import copy
import logging
from enum import Enum
from typing import Any, Dict, Iterator, List, Tuple

logger = logging.getLogger(__name__)

UNSET_MARKER = "__unset"


class FieldOp(Enum):
    """Operation a single raw key applies to the accumulated record."""
    SET = "set"
    UNSET = "unset"


def is_unset_marker(value: Any) -> bool:
    """Return True if value is the reserved unset marker string."""
    return isinstance(value, str) and value == UNSET_MARKER


def field_ops(entry: Dict[str, Any]) -> Iterator[Tuple[str, FieldOp, Any]]:
    """Yield (key, op, value) for every key of one raw entry, in key order."""
    for key, value in entry.items():
        if is_unset_marker(value):
            yield key, FieldOp.UNSET, None
        else:
            yield key, FieldOp.SET, value


def expand_minified(raw: Any) -> List[Dict[str, Any]]:
    """
    Reconstruct full per-version records from a minified array.

    Args:
        raw: Parsed JSON value, expected to be a list of objects

    Returns:
        One decoded record per object element, in array order. Each record
        is an independent deep copy of the accumulated state.
    """
    if not isinstance(raw, list):
        return []

    state: Dict[str, Any] = {}
    records: List[Dict[str, Any]] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            logger.debug("Skipping non-object minified entry at index %d", index)
            continue

        for key, op, value in field_ops(entry):
            if op is FieldOp.UNSET:
                state.pop(key, None)
            else:
                state[key] = value

        records.append(copy.deepcopy(state))

    return records
