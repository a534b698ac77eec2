"""
Simple conditional evaluation for grid cells and the grid itself.

A simple conditional has the shape ``{"show": true, "when": "status", "eq": "open"}``:
show the component when the value under ``when`` equals ``eq`` (or hide it
when ``show`` is false).
"""

import logging
from typing import Any, Dict, Optional, Union

from .grid_config import SimpleConditional
from .path_utils import get_nested_value, has_nested_value

logger = logging.getLogger(__name__)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == 'true'
    return bool(value)


def _matches(value: Any, expected: Any) -> bool:
    # Form inputs compare as strings; "1" and 1 are the same answer
    if isinstance(value, list):
        return any(_matches(item, expected) for item in value)
    if value is None:
        return expected in (None, '')
    return str(value) == str(expected)


def lookup_condition_value(key: str, row: Optional[Dict[str, Any]], data: Optional[Dict[str, Any]]) -> Any:
    """
    Find the value a condition refers to.

    The row the component sits in takes precedence over the submission data.
    """
    if row and has_nested_value(row, key):
        return get_nested_value(row, key)
    return get_nested_value(data or {}, key)


def check_simple_conditional(
    conditional: Optional[Union[SimpleConditional, Dict[str, Any]]],
    row: Optional[Dict[str, Any]] = None,
    data: Optional[Dict[str, Any]] = None
) -> bool:
    """
    Evaluate a simple conditional.

    Args:
        conditional: Conditional model or raw dict; None means always visible
        row: Row the component belongs to (checked first)
        data: Whole submission data

    Returns:
        True if the component should be shown
    """
    if conditional is None:
        return True
    if isinstance(conditional, dict):
        conditional = SimpleConditional.model_validate(conditional)

    if not conditional.when or conditional.show in (None, ''):
        return True

    value = lookup_condition_value(conditional.when, row, data)
    matched = _matches(value, conditional.eq)
    show = _as_bool(conditional.show)

    logger.debug(f"Conditional when={conditional.when} eq={conditional.eq!r} value={value!r} -> {matched == show}")
    return matched if show else not matched
