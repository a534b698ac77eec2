"""
Data grid controller.

Ties the value binder, row reconciler, visibility evaluator and count policy
together and decides when the rendered grid must be redrawn:

- set_value redraws only when the value actually changed
- add_row and remove_row always redraw
- check_conditions redraws when the column visibility map changed
"""

from typing import Any, Callable, Dict, List, Optional
import logging

from .components import ComponentFactory, DefaultComponentFactory
from .conditions import check_simple_conditional
from .count_policy import CountPolicy
from .grid_config import ColumnConfig, GridConfig, GridOptions
from .reconciler import RowMatrix, RowReconciler
from .value_binder import ValueBinder
from .view_model import GridViewModel, build_view_model
from .visibility import ColumnVisibilityEvaluator, VisibilityMap

logger = logging.getLogger(__name__)

RedrawListener = Callable[['DataGrid', str], None]


class DataGrid:
    """
    A repeating set of columns bound to a list of row dicts.

    Args:
        config: Grid schema (GridConfig or raw schema dict)
        options: Render options (GridOptions or raw dict)
        factory: Component factory for the cells
        on_redraw: Called with (grid, reason) whenever a redraw is requested
    """

    def __init__(self, config: Any, options: Any = None,
                 factory: Optional[ComponentFactory] = None,
                 on_redraw: Optional[RedrawListener] = None):
        self.config = config if isinstance(config, GridConfig) else GridConfig.from_schema(config)
        if isinstance(options, GridOptions):
            self.options = options
        else:
            self.options = GridOptions.model_validate(options or {})
        self.factory = factory or DefaultComponentFactory()
        self.on_redraw = on_redraw
        self.redraw_count = 0

        self.reconciler = RowReconciler(self.columns, self.factory, self.options, self.key)
        self.binder = ValueBinder(self.config, self.options, self.reconciler)
        self.visibility = ColumnVisibilityEvaluator(self.columns)
        self.policy = CountPolicy(self.config, self.options, lambda: len(self.binder.data_value))

        self.binder.initialize(self.default_value)
        self.visibility.evaluate(self.rows, {})
        logger.info(f"Created data grid '{self.key}' with {len(self.columns)} columns, {len(self.rows)} rows")

    @property
    def key(self) -> str:
        return self.config.key

    @property
    def datagrid_key(self) -> str:
        return f"datagrid-{self.key}"

    @property
    def columns(self) -> List[ColumnConfig]:
        return self.config.components

    @property
    def rows(self) -> RowMatrix:
        return self.binder.rows

    @property
    def data_value(self) -> List[Dict[str, Any]]:
        return self.binder.data_value

    @property
    def visible_columns(self) -> VisibilityMap:
        return self.visibility.visible_columns

    @property
    def add_another_position(self) -> str:
        return self.config.add_another_position

    @property
    def empty_value(self) -> List[Dict[str, Any]]:
        return [{}]

    @property
    def default_value(self) -> List[Dict[str, Any]]:
        value = self.config.default_value
        if isinstance(value, list):
            return value
        if isinstance(value, dict) and value:
            return [value]
        return self.empty_value

    def can_add(self) -> bool:
        return self.policy.can_add()

    def can_remove(self) -> bool:
        return self.policy.can_remove()

    def redraw(self, reason: str) -> None:
        """
        Request a redraw of the rendered grid.

        Args:
            reason: Why the redraw was requested (for logging and listeners)
        """
        self.redraw_count += 1
        logger.debug(f"Redraw '{self.key}' ({reason}), count={self.redraw_count}")
        if self.on_redraw is not None:
            self.on_redraw(self, reason)

    def set_value(self, value: Any, flags: Optional[Dict[str, Any]] = None) -> bool:
        """
        Set the grid value.

        Args:
            value: List of row dicts, a single row dict, or None
            flags: Opaque flags forwarded to the cells

        Returns:
            True if the value changed (a redraw was requested)
        """
        changed = self.binder.set_value(value, flags)
        if changed:
            self.redraw('value_changed')
        return changed

    def get_value(self) -> List[Dict[str, Any]]:
        return self.binder.get_value()

    def add_row(self) -> int:
        """Append an empty row and redraw. Returns the new row index."""
        index = self.binder.add_row()
        self.redraw('row_added')
        return index

    def remove_row(self, index: int) -> bool:
        """Remove the row at index and redraw. Returns False for an out-of-range index."""
        removed = self.binder.remove_row(index)
        if removed:
            self.redraw('row_removed')
        return removed

    def is_visible(self, data: Optional[Dict[str, Any]]) -> bool:
        """The grid's own visibility, ignoring its columns."""
        if not self.options.parent_visible:
            return False
        return check_simple_conditional(self.config.conditional, None, data)

    def check_conditions(self, data: Optional[Dict[str, Any]]) -> bool:
        """
        Evaluate visibility of the grid and its columns.

        Columns are only evaluated when the grid itself is visible. A change
        in column visibility triggers a redraw.

        Args:
            data: Submission data

        Returns:
            True if the grid has anything to show
        """
        if not self.is_visible(data):
            return False

        result = self.visibility.evaluate(self.rows, data)
        if result.changed:
            self.redraw('columns_changed')
        return result.show

    def view_model(self) -> GridViewModel:
        return build_view_model(self)
