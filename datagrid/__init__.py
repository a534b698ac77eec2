"""
Repeating data grid: a fixed set of columns applied to every row of a list value.
"""

from .components import (
    ChildComponent,
    ComponentFactory,
    ConditionCapable,
    ConditionalFieldComponent,
    DefaultComponentFactory,
    FieldComponent,
    NestedGroupComponent,
    RowContext,
)
from .data_grid import DataGrid
from .exceptions import ConfigurationLoadError, GridConfigError, GridError, RowConstructionError
from .grid_config import AttachMode, ColumnConfig, CountBounds, GridConfig, GridOptions

__version__ = "1.0.0"
