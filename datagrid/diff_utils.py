"""
Diff utilities for the data grid.
Provides exact, order-sensitive comparison of grid values using the DeepDiff
library. The result gates redraws: a value that compares equal to the stored
value must never trigger one, otherwise re-entrant updates rebuild on every pass.
"""

from typing import Dict, Any
from deepdiff import DeepDiff
import logging

logger = logging.getLogger(__name__)

# Change types reported by DeepDiff that count as a real difference
_CHANGE_TYPES = (
    'values_changed',
    'type_changes',
    'dictionary_item_added',
    'dictionary_item_removed',
    'iterable_item_added',
    'iterable_item_removed',
    'attribute_added',
    'attribute_removed',
    'set_item_added',
    'set_item_removed',
)


def calculate_value_diff(before: Any, after: Any) -> Dict[str, Any]:
    """
    Calculate differences between two grid values.

    Row order is significant, so ``ignore_order`` stays off. Numeric type
    changes (1 vs 1.0) are ignored so that equal numbers compare equal.

    Args:
        before: Previously stored value
        after: Incoming value

    Returns:
        Dictionary of DeepDiff change types to their details (empty if equal)
    """
    diff = DeepDiff(
        before,
        after,
        ignore_order=False,
        ignore_numeric_type_changes=True,
        verbose_level=1
    )
    return diff.to_dict() if hasattr(diff, 'to_dict') else dict(diff)


def has_changes(diff: Dict[str, Any]) -> bool:
    """
    Check if there are any changes in the diff.

    Args:
        diff: Diff dictionary from calculate_value_diff

    Returns:
        True if there are changes, False otherwise
    """
    if not diff:
        return False

    return any(change_type in diff and diff[change_type] for change_type in _CHANGE_TYPES)


def has_changed(before: Any, after: Any) -> bool:
    """Return True when the two values are not deeply equal."""
    return has_changes(calculate_value_diff(before, after))


def get_change_summary(diff: Dict[str, Any]) -> Dict[str, int]:
    """
    Get a summary of changes by type.

    Args:
        diff: Diff dictionary from calculate_value_diff

    Returns:
        Dictionary with change counts by type
    """
    summary = {
        'modified': 0,
        'added': 0,
        'removed': 0,
        'type_changed': 0,
        'total': 0
    }

    if not diff:
        return summary

    summary['modified'] = len(diff.get('values_changed', {}) or {})
    summary['type_changed'] = len(diff.get('type_changes', {}) or {})

    for change_type in ('dictionary_item_added', 'iterable_item_added',
                        'attribute_added', 'set_item_added'):
        summary['added'] += len(diff.get(change_type, []) or [])

    for change_type in ('dictionary_item_removed', 'iterable_item_removed',
                        'attribute_removed', 'set_item_removed'):
        summary['removed'] += len(diff.get(change_type, []) or [])

    summary['total'] = (
        summary['modified'] + summary['added'] + summary['removed'] + summary['type_changed']
    )
    return summary
