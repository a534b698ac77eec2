"""
Dotted path helpers for nested row values.

A column key such as ``addr.city`` places its value at ``{"addr": {"city": ...}}``
when row values are aggregated.
"""

from typing import Any, Dict, List


def split_path(key: str) -> List[str]:
    """Split a dotted key into its non-empty segments."""
    return [part for part in str(key).split('.') if part]


def set_nested_value(target: Dict[str, Any], key: str, value: Any) -> Dict[str, Any]:
    """
    Write value into target at the dotted path given by key.

    Intermediate dictionaries are created as needed. An intermediate that is
    not a dictionary is replaced.

    Args:
        target: Dictionary to write into (modified in place)
        key: Dotted path, e.g. "addr.city"
        value: Value to store

    Returns:
        The target dictionary
    """
    parts = split_path(key)
    if not parts:
        return target

    current = target
    for part in parts[:-1]:
        child = current.get(part)
        if not isinstance(child, dict):
            child = {}
            current[part] = child
        current = child

    current[parts[-1]] = value
    return target


def get_nested_value(source: Any, key: str, default: Any = None) -> Any:
    """Read the value at a dotted path, returning default when any segment is missing."""
    parts = split_path(key)
    if not parts:
        return default

    current = source
    for part in parts:
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def has_nested_value(source: Any, key: str) -> bool:
    """Check whether every segment of a dotted path exists in source."""
    parts = split_path(key)
    if not parts:
        return False

    current = source
    for part in parts:
        if not isinstance(current, dict) or part not in current:
            return False
        current = current[part]
    return True
