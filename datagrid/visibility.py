"""
Column visibility evaluation for the data grid.

A column is visible when any of its cells is visible. A change in the
resulting map means the rendered table has to be rebuilt.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
import logging

from .grid_config import ColumnConfig
from .reconciler import RowMatrix

logger = logging.getLogger(__name__)

# Column key -> visible
VisibilityMap = Dict[str, bool]


@dataclass
class VisibilityResult:
    """Outcome of one visibility pass."""
    visibility: VisibilityMap
    changed: bool
    show: bool


class ColumnVisibilityEvaluator:
    """
    OR-reduces per-cell visibility into per-column visibility.

    Args:
        columns: Ordered column configurations
    """

    def __init__(self, columns: List[ColumnConfig]):
        self.columns = columns
        self.visible_columns: VisibilityMap = {column.key: True for column in columns}

    def evaluate(self, matrix: RowMatrix, data: Optional[Dict[str, Any]]) -> VisibilityResult:
        """
        Recompute the visibility map from every row.

        Args:
            matrix: Current row matrix
            data: Submission data the cell conditions are evaluated against

        Returns:
            VisibilityResult with the new map, whether it differs from the
            previous one, and whether any column is visible
        """
        if not matrix:
            # Nothing to evaluate; keep the grid (and its add button) reachable
            return VisibilityResult(dict(self.visible_columns), changed=False, show=True)

        visibility: VisibilityMap = {column.key: False for column in self.columns}
        for row in matrix:
            for column in self.columns:
                if visibility[column.key]:
                    continue
                cell = row.get(column.key)
                if cell is None:
                    continue
                if cell.supports_conditions:
                    visibility[column.key] = bool(cell.check_conditions(data))
                else:
                    visibility[column.key] = True

        changed = visibility != self.visible_columns
        show = any(visibility.values())

        if changed:
            hidden = [key for key, visible in visibility.items() if not visible]
            logger.info(f"Column visibility changed; hidden columns: {hidden}")

        self.visible_columns = visibility
        return VisibilityResult(dict(visibility), changed=changed, show=show)

    def visible_count(self) -> int:
        return sum(1 for visible in self.visible_columns.values() if visible)
