"""Batch filter matching against encounters and other records.

A filter names a property in batch-editor style (``LevelMin``) or Python
style (``level_min``); both resolve to the same attribute. Values compare
numerically when both sides parse as numbers, as booleans when the actual
value is a bool, and as case-insensitive strings otherwise.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from set_analysis.models.batch import StringInstruction

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_MISSING = object()


def _compare(actual: int | float | str, operator: str, threshold: int | float | str) -> bool:
    """Apply a comparison operator string."""
    if operator == "==":
        return actual == threshold
    if operator == "!=":
        return actual != threshold
    try:
        if operator == ">":
            return actual > threshold  # type: ignore[operator]
        if operator == ">=":
            return actual >= threshold  # type: ignore[operator]
        if operator == "<":
            return actual < threshold  # type: ignore[operator]
        if operator == "<=":
            return actual <= threshold  # type: ignore[operator]
    except TypeError:
        return False
    # Unknown operator never matches.
    return False


def attribute_name(property_name: str) -> str:
    """Convert ``LevelMin`` / ``levelMin`` / ``level_min`` to ``level_min``."""
    return _CAMEL_BOUNDARY.sub("_", property_name.strip()).lower()


def resolve_property(obj: Any, property_name: str) -> Any:
    """Look up *property_name* on *obj*, or the _MISSING sentinel."""
    value = getattr(obj, property_name, _MISSING)
    if value is _MISSING:
        value = getattr(obj, attribute_name(property_name), _MISSING)
    return value


def _parse_number(text: str) -> int | float | None:
    try:
        return int(text, 0)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return None


def _coerce(actual: Any, expected: str) -> tuple[Any, Any]:
    """Bring actual and expected values to a comparable pair."""
    if isinstance(actual, bool):
        lowered = expected.strip().lower()
        if lowered in ("true", "1", "yes"):
            return actual, True
        if lowered in ("false", "0", "no"):
            return actual, False
        return str(actual).lower(), lowered
    if isinstance(actual, (int, float)):
        number = _parse_number(expected.strip())
        if number is not None:
            return actual, number
        # Enum members compare by name ("ONLY_HIDDEN").
        name = getattr(actual, "name", None)
        if isinstance(name, str):
            return name.lower(), expected.strip().lower()
    return str(actual).strip().lower(), expected.strip().lower()


def is_match(instruction: StringInstruction, obj: Any) -> bool:
    """True if *obj* satisfies a single filter instruction."""
    actual = resolve_property(obj, instruction.property_name)
    if actual is _MISSING:
        return False
    left, right = _coerce(actual, instruction.value)
    return _compare(left, instruction.operator, right)


def is_filter_match(filters: Sequence[StringInstruction], obj: Any) -> bool:
    """True if *obj* satisfies every filter (an empty list matches)."""
    return all(is_match(f, obj) for f in filters if f.is_filter)
