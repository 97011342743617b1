"""Normalisation of raw object identifiers submitted by the host."""

import math
import re
from typing import Any, Iterable, List, Optional

import structlog

from .base import InvalidIdentifier


logger = structlog.get_logger(__name__)

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def _truncate(value: float) -> Optional[int]:
    if not math.isfinite(value):
        return None
    return int(value)

def parse_int(value: Any) -> Optional[int]:
    """Parse the leading integer of a value.

    Accepts ints, bools, floats (truncated) and strings starting with an
    optionally signed decimal or exponent number after optional whitespace
    ("12abc" gives 12, "1.9" gives 1, "1e3" gives 1000).

    Returns:
        The integer, or None if the value carries no leading integer
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return _truncate(value)
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if match:
            number = match.group(1)
            if number.lstrip("+-").isdigit():
                return int(number)
            return _truncate(float(number))
    return None


def coerce_ids(raw_ids: Iterable[Any], policy: str = "coerce") -> List[int]:
    """Turn raw identifiers into integers according to a policy.

    Args:
        raw_ids: Identifiers as submitted (strings or integers)
        policy: "coerce" maps non-numeric values to 0, "filter" drops them,
            "reject" raises InvalidIdentifier

    Returns:
        List of integer ids, order and duplicates preserved
    """
    ids: List[int] = []
    for raw in raw_ids:
        parsed = parse_int(raw)
        if parsed is not None:
            ids.append(parsed)
            continue

        if policy == "reject":
            raise InvalidIdentifier(raw)
        if policy == "filter":
            logger.debug("Dropping non-numeric identifier", identifier=repr(raw))
            continue
        ids.append(0)

    return ids
