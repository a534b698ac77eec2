"""
Row count policy for the data grid.
Pure predicates deciding whether rows may be added or removed.
"""

from typing import Callable

from .grid_config import GridConfig, GridOptions


class CountPolicy:
    """
    Decides add/remove availability from configuration and the current row count.

    Args:
        config: Grid schema
        options: Render options of the grid instance
        row_count: Callable returning the current number of rows
    """

    def __init__(self, config: GridConfig, options: GridOptions, row_count: Callable[[], int]):
        self.config = config
        self.options = options
        self._row_count = row_count

    @property
    def bounds(self):
        return self.config.count_bounds

    def _rows_editable(self) -> bool:
        return (
            not self.config.disable_adding_removing_rows
            and not self.options.disabled
            and self.options.interactive
        )

    def can_add(self) -> bool:
        max_rows = self.bounds.max_rows
        return self._rows_editable() and (not max_rows or self._row_count() < max_rows)

    def can_remove(self) -> bool:
        return self._rows_editable() and self._row_count() > self.bounds.min_rows

    def has_extra_column(self) -> bool:
        """The remove-button column is shown for removable rows and in the builder."""
        return self.can_remove() or self.options.builder

    def has_top_add(self) -> bool:
        return self.can_add() and self.config.add_another_position in ('top', 'both')

    def has_bottom_add(self) -> bool:
        return self.can_add() and self.config.add_another_position in ('bottom', 'both')
