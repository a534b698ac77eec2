"""
Value binding for the data grid.

Normalizes incoming values, detects changes, drives row reconciliation and
pushes each row's data down into its cells. Also aggregates cell values back
into the grid value.
"""

from copy import deepcopy
from typing import Any, Dict, List, Optional
import logging

from .components import ChildComponent
from .diff_utils import calculate_value_diff, has_changes, get_change_summary
from .grid_config import GridConfig, GridOptions
from .path_utils import get_nested_value, has_nested_value, set_nested_value
from .reconciler import RowMatrix, RowReconciler

logger = logging.getLogger(__name__)


class ValueBinder:
    """
    Owns the grid value (list of row dicts) and the row matrix.

    Args:
        config: Grid schema
        options: Render options of the grid instance
        reconciler: Row reconciler used to size the matrix
    """

    def __init__(self, config: GridConfig, options: GridOptions, reconciler: RowReconciler):
        self.config = config
        self.options = options
        self.reconciler = reconciler
        self.data_value: List[Dict[str, Any]] = []
        self.rows: RowMatrix = []

    @property
    def min_rows(self) -> int:
        return self.config.count_bounds.min_rows

    def _pad_to_min_rows(self) -> None:
        while len(self.data_value) < self.min_rows:
            self.data_value.append({})

    def initialize(self, value: Any) -> None:
        """
        Set the starting value without change detection.

        The value is normalized, padded with empty rows up to the minimum row
        count, and the matching rows are created and bound.

        Args:
            value: Starting value (usually the schema default)
        """
        normalized = self.normalize(value)
        self.data_value = deepcopy(normalized) if normalized is not None else []
        self._pad_to_min_rows()
        self.reconciler.reconcile(self.data_value, self.rows)
        self._bind_rows(self.data_value, None)
        logger.debug(f"Initialized '{self.config.key}' with {len(self.data_value)} row(s)")

    @staticmethod
    def normalize(value: Any) -> Optional[List[Dict[str, Any]]]:
        """
        Coerce an incoming value into a list of rows.

        Args:
            value: Raw value

        Returns:
            None for an absent value, the list itself for a list, a single-row
            list for a dict, and ``[{}]`` for anything else
        """
        if value is None:
            return None
        if isinstance(value, list):
            return value
        if isinstance(value, dict):
            return [value]
        logger.warning(f"Ignoring non-object grid value of type {type(value).__name__}; using one empty row")
        return [{}]

    def set_value(self, value: Any, flags: Optional[Dict[str, Any]] = None) -> bool:
        """
        Replace the grid value and push it down to the cells.

        Args:
            value: New value (list of rows, a single row dict, or None)
            flags: Opaque flags forwarded to every cell

        Returns:
            True if the new value differs from the stored one
        """
        normalized = self.normalize(value)

        if normalized is None:
            # Absent value: rebuild from the minimum row count only
            self.data_value = [{} for _ in range(self.min_rows)]
            self.reconciler.reconcile(self.data_value, self.rows)
            self._bind_rows(self.data_value, None)
            logger.debug(f"Reset '{self.config.key}' to {len(self.data_value)} empty row(s)")
            return False

        diff = calculate_value_diff(self.data_value, normalized)
        changed = has_changes(diff)
        if changed:
            logger.debug(f"Value of '{self.config.key}' changed: {get_change_summary(diff)}")

        self.data_value = deepcopy(normalized)
        self.reconciler.reconcile(self.data_value, self.rows)
        self._bind_rows(self.data_value, flags)
        return changed

    def _bind_rows(self, value: List[Dict[str, Any]], flags: Optional[Dict[str, Any]]) -> None:
        for row_index, row in enumerate(self.rows):
            if row_index >= len(value):
                break
            row_data = value[row_index]
            if not isinstance(row_data, dict):
                row_data = {}
            for key, component in row.items():
                self._bind_cell(component, key, row_data, flags)

    @staticmethod
    def _bind_cell(component: ChildComponent, key: str, row_data: Dict[str, Any],
                   flags: Optional[Dict[str, Any]]) -> None:
        if component.is_nested_group:
            component.set_value(row_data, flags)
            return

        component.data = row_data
        if key in row_data:
            component.set_value(row_data[key], flags)
        elif has_nested_value(row_data, key):
            component.set_value(get_nested_value(row_data, key), flags)
        else:
            component.set_value(component.default_value, flags)

    def get_value(self) -> List[Dict[str, Any]]:
        """
        Collect the grid value.

        In view-only mode a copy of the stored value is returned; otherwise each
        row is rebuilt from its cells, honouring dotted column keys.

        Returns:
            List of row dicts in row order
        """
        if self.options.view_only:
            return deepcopy(self.data_value)

        values = []
        for row in self.rows:
            row_value: Dict[str, Any] = {}
            for key, component in row.items():
                set_nested_value(row_value, key, component.get_value())
            values.append(row_value)
        return values

    def add_row(self) -> int:
        """
        Append an empty row and create its cells.

        Returns:
            Index of the new row
        """
        index = len(self.rows)
        row_data: Dict[str, Any] = {}
        record = self.reconciler.create_row(row_data, index)
        self.data_value.append(row_data)
        self.rows.append(record)
        logger.info(f"Added row {index} to '{self.config.key}' ({len(self.data_value)} rows)")
        return index

    def remove_row(self, index: int) -> bool:
        """
        Remove the row at index.

        Later rows shift down one position and keep their cell instances.

        Args:
            index: Row to remove

        Returns:
            True if a row was removed, False for an out-of-range index
        """
        if index < 0 or index >= len(self.data_value):
            logger.warning(f"Cannot remove row {index} from '{self.config.key}': only {len(self.data_value)} rows")
            return False

        del self.data_value[index]
        if index < len(self.rows):
            del self.rows[index]
        logger.info(f"Removed row {index} from '{self.config.key}' ({len(self.data_value)} rows)")
        return True

    def snapshot(self) -> List[Dict[str, Any]]:
        """Deep copy of the stored value."""
        return deepcopy(self.data_value)
