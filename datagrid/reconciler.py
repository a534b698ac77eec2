"""
Row reconciliation for the data grid.

Grows or truncates the row matrix so it has one row record per value entry.
Identity is positional: an existing record at a still-valid index is kept as
is, whatever data now sits at that index.
"""

from typing import Any, Dict, List
import logging

from .components import ChildComponent, ComponentFactory, RowContext
from .exceptions import RowConstructionError
from .grid_config import ColumnConfig, GridOptions

logger = logging.getLogger(__name__)

# One child component per column key
RowRecord = Dict[str, ChildComponent]
RowMatrix = List[RowRecord]


class RowReconciler:
    """
    Builds row records through the component factory and keeps the matrix sized.

    Args:
        columns: Ordered column configurations
        factory: Component factory called once per (row, column)
        options: Render options used to build each row context
        grid_key: Key of the owning grid
    """

    def __init__(self, columns: List[ColumnConfig], factory: ComponentFactory,
                 options: GridOptions, grid_key: str):
        self.columns = columns
        self.factory = factory
        self.options = options
        self.grid_key = grid_key

    def create_row(self, row_data: Dict[str, Any], row_index: int) -> RowRecord:
        """
        Create the row record for one row.

        Args:
            row_data: Row object the new children are bound to
            row_index: Position of the row

        Returns:
            Mapping of column key to its new child component

        Raises:
            RowConstructionError: If the factory fails for any column
        """
        record: RowRecord = {}
        for column_index, column in enumerate(self.columns):
            context = RowContext.for_cell(self.options, self.grid_key, row_index, column_index)
            try:
                component = self.factory.create(column, context, row_data)
            except Exception as e:
                logger.error(
                    f"Component factory failed for {self.grid_key}[{row_index}].{column.key}: {e}",
                    exc_info=True
                )
                raise RowConstructionError(row_index, column.key, e) from e

            component.row_index = row_index
            component.in_data_grid = True
            record[column.key] = component

        return record

    def reconcile(self, value: List[Dict[str, Any]], matrix: RowMatrix) -> RowMatrix:
        """
        Resize the matrix to match the value.

        Missing records are created; extra trailing records are discarded.
        Existing records are neither recreated nor re-bound.

        Args:
            value: Current grid value
            matrix: Current row matrix (modified in place)

        Returns:
            The reconciled matrix
        """
        # Build every missing row before touching the matrix
        new_rows = [
            self.create_row(row_data, index)
            for index, row_data in enumerate(value)
            if index >= len(matrix)
        ]
        matrix.extend(new_rows)
        created = len(new_rows)

        discarded = len(matrix) - len(value)
        if discarded > 0:
            del matrix[len(value):]

        if created or discarded > 0:
            logger.debug(
                f"Reconciled '{self.grid_key}': {created} row(s) created, "
                f"{max(discarded, 0)} discarded, {len(matrix)} total"
            )
        return matrix
