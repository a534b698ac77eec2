"""
Child component contracts for the data grid.

Every grid cell is an opaque child component. Capabilities are explicit ABCs
rather than duck typing:

- ChildComponent: get/set value, default value, nested-group tag
- ConditionCapable: the cell can evaluate its own show/hide condition

A cell that is not ConditionCapable is always visible.
"""

from abc import ABC, abstractmethod
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Dict, Optional, Type
import logging

from .conditions import check_simple_conditional
from .grid_config import AttachMode, ColumnConfig, GridOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowContext:
    """
    Per-cell options handed to the component factory.

    Built fresh for every (row, column) pair.
    """
    row_index: int
    column_index: int
    grid_key: str
    name: str
    row_id: str
    attach_mode: AttachMode = AttachMode.FULL
    preview: bool = False
    disabled: bool = False

    @classmethod
    def for_cell(cls, options: GridOptions, grid_key: str, row_index: int, column_index: int) -> 'RowContext':
        return cls(
            row_index=row_index,
            column_index=column_index,
            grid_key=grid_key,
            name=f"{options.name}[{row_index}]",
            row_id=f"{row_index}-{column_index}",
            attach_mode=options.attach_mode,
            preview=options.preview,
            disabled=options.disabled
        )


# Type defaults for leaf cells without an explicit defaultValue
_TYPE_DEFAULTS: Dict[str, Any] = {
    'textfield': '',
    'textarea': '',
    'email': '',
    'phoneNumber': '',
    'password': '',
    'select': '',
    'radio': '',
    'number': None,
    'currency': None,
    'checkbox': False,
    'datetime': None,
    'day': None,
}


class ChildComponent(ABC):
    """
    ABC for a component living in one grid cell.

    Attributes:
        column: Column configuration this cell was created from
        context: Row context the factory received
        data: Row object the cell is currently bound to
        row_index: Row the cell was created for
        in_data_grid: Marks the cell as a grid member so it renders without its own chrome
    """

    is_nested_group = False

    def __init__(self, column: ColumnConfig, context: RowContext, data: Optional[Dict[str, Any]] = None):
        self.column = column
        self.context = context
        self.data = data if data is not None else {}
        self.row_index = context.row_index
        self.in_data_grid = False

    @property
    def key(self) -> str:
        return self.column.key

    @property
    def supports_conditions(self) -> bool:
        return isinstance(self, ConditionCapable)

    @property
    @abstractmethod
    def default_value(self) -> Any:
        """Value used when the bound row has no entry for this cell."""

    @abstractmethod
    def get_value(self) -> Any:
        """
        Get the cell's current value.

        Returns:
            The value, or the default when nothing was set
        """

    @abstractmethod
    def set_value(self, value: Any, flags: Optional[Dict[str, Any]] = None) -> bool:
        """
        Set the cell's value.

        Args:
            value: New value (the whole row object for nested groups)
            flags: Opaque update flags from the caller

        Returns:
            True if the stored value changed
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(key={self.key!r}, row={self.row_index})"


class ConditionCapable(ABC):
    """ABC for cells that can decide their own visibility."""

    @abstractmethod
    def check_conditions(self, data: Optional[Dict[str, Any]]) -> bool:
        """Return True if the cell is visible for the given submission data."""


class FieldComponent(ChildComponent):
    """Leaf cell owning a single field of the row."""

    def __init__(self, column: ColumnConfig, context: RowContext, data: Optional[Dict[str, Any]] = None):
        super().__init__(column, context, data)
        self._value = self.default_value

    @property
    def default_value(self) -> Any:
        if self.column.default_value is not None:
            return deepcopy(self.column.default_value)
        return deepcopy(_TYPE_DEFAULTS.get(self.column.type))

    def get_value(self) -> Any:
        return deepcopy(self._value)

    def set_value(self, value: Any, flags: Optional[Dict[str, Any]] = None) -> bool:
        changed = value != self._value
        self._value = deepcopy(value)
        return changed


class ConditionalFieldComponent(FieldComponent, ConditionCapable):
    """Leaf cell with a simple show/hide conditional."""

    def check_conditions(self, data: Optional[Dict[str, Any]]) -> bool:
        return check_simple_conditional(self.column.conditional, self.data, data)


class NestedGroupComponent(ChildComponent, ConditionCapable):
    """
    Cell owning a whole sub-object of the row.

    It is bound to the entire row object; the part it owns lives under its
    own key. Inner column defaults fill in missing entries.
    """

    is_nested_group = True

    def __init__(self, column: ColumnConfig, context: RowContext, data: Optional[Dict[str, Any]] = None):
        super().__init__(column, context, data)
        self._value = self.default_value

    @property
    def default_value(self) -> Dict[str, Any]:
        value = deepcopy(self.column.default_value) if isinstance(self.column.default_value, dict) else {}
        for inner in self.column.components:
            if inner.key not in value:
                value[inner.key] = deepcopy(inner.default_value) if inner.default_value is not None \
                    else deepcopy(_TYPE_DEFAULTS.get(inner.type))
        return value

    def get_value(self) -> Dict[str, Any]:
        return deepcopy(self._value)

    def set_value(self, value: Any, flags: Optional[Dict[str, Any]] = None) -> bool:
        row = value if isinstance(value, dict) else {}
        self.data = row

        owned = row.get(self.key)
        new_value = self.default_value
        if isinstance(owned, dict):
            new_value.update(deepcopy(owned))

        changed = new_value != self._value
        self._value = new_value
        return changed

    def check_conditions(self, data: Optional[Dict[str, Any]]) -> bool:
        return check_simple_conditional(self.column.conditional, self.data, data)


class ComponentFactory(ABC):
    """ABC for building cell components."""

    @abstractmethod
    def create(self, column: ColumnConfig, context: RowContext, row_data: Dict[str, Any]) -> ChildComponent:
        """
        Create the component for one cell.

        Called once per (row, column) when a row is created; never again for
        an existing row.
        """


class DefaultComponentFactory(ComponentFactory):
    """
    Factory dispatching on the column type.

    Types registered with register_component_type win; otherwise nested
    groups, conditional fields and plain fields are told apart by the
    column configuration.
    """

    def __init__(self, registry: Optional[Dict[str, Type[ChildComponent]]] = None):
        self._registry: Dict[str, Type[ChildComponent]] = dict(registry or {})

    def register_component_type(self, type_name: str, component_class: Type[ChildComponent]) -> None:
        if type_name in self._registry:
            logger.warning(
                f"Component type '{type_name}' already registered to {self._registry[type_name].__name__}. "
                f"Overwriting with {component_class.__name__}."
            )
        self._registry[type_name] = component_class

    def resolve(self, column: ColumnConfig) -> Type[ChildComponent]:
        if column.type in self._registry:
            return self._registry[column.type]
        if column.is_nested_group:
            return NestedGroupComponent
        if column.has_conditional:
            return ConditionalFieldComponent
        return FieldComponent

    def create(self, column: ColumnConfig, context: RowContext, row_data: Dict[str, Any]) -> ChildComponent:
        component_class = self.resolve(column)
        logger.debug(f"Creating {component_class.__name__} for {context.name}.{column.key}")
        return component_class(column, context, row_data)
