"""
Render projection of a data grid.
Everything here is derived from grid state; the renderer adds no logic of its own.
"""

from dataclasses import dataclass, field
from typing import Dict, List, TYPE_CHECKING

from .components import ChildComponent

if TYPE_CHECKING:
    from .data_grid import DataGrid


@dataclass
class GridViewModel:
    """
    What a renderer needs to draw the grid.

    Attributes:
        rows: Per row, the cells of the visible columns keyed by column key
        visible_columns: Column key -> visible
        column_headers: Visible column key -> header text ("" when the label is hidden)
        has_header: True if any column shows a label or title
        has_extra_column: True if a remove-button (or builder) column is drawn
        has_add_button: True if rows can be added
        has_remove_buttons: True if rows can be removed
        has_top_add: Add button above the table
        has_bottom_add: Add button below the table
        num_columns: Visible columns plus the extra column
        datagrid_key: Reference key for the rendered table
        builder: True when rendered inside the form builder
    """
    rows: List[Dict[str, ChildComponent]] = field(default_factory=list)
    visible_columns: Dict[str, bool] = field(default_factory=dict)
    column_headers: Dict[str, str] = field(default_factory=dict)
    has_header: bool = False
    has_extra_column: bool = False
    has_add_button: bool = False
    has_remove_buttons: bool = False
    has_top_add: bool = False
    has_bottom_add: bool = False
    num_columns: int = 0
    datagrid_key: str = ''
    builder: bool = False


def build_view_model(grid: 'DataGrid') -> GridViewModel:
    """
    Project a grid into its view model.

    Args:
        grid: Grid to project

    Returns:
        GridViewModel for the current state
    """
    visible = dict(grid.visible_columns)
    visible_keys = [column.key for column in grid.columns if visible.get(column.key)]

    rows = [
        {key: row[key] for key in visible_keys if key in row}
        for row in grid.rows
    ]
    headers = {
        column.key: column.header_text if column.has_header else ''
        for column in grid.columns
        if visible.get(column.key)
    }

    has_extra_column = grid.policy.has_extra_column()
    return GridViewModel(
        rows=rows,
        visible_columns=visible,
        column_headers=headers,
        has_header=any(column.has_header for column in grid.columns),
        has_extra_column=has_extra_column,
        has_add_button=grid.can_add(),
        has_remove_buttons=grid.can_remove(),
        has_top_add=grid.policy.has_top_add(),
        has_bottom_add=grid.policy.has_bottom_add(),
        num_columns=len(visible_keys) + (1 if has_extra_column else 0),
        datagrid_key=grid.datagrid_key,
        builder=grid.options.builder
    )
