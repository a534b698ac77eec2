"""
Configuration models for the data grid.
Validates the grid schema (columns, row count bounds, add/remove settings) and
the per-instance render options using Pydantic models.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, List, Literal, Optional
from copy import deepcopy
import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .exceptions import GridConfigError

logger = logging.getLogger(__name__)


def default_grid_schema() -> Dict[str, Any]:
    """
    Get the default data grid schema.

    Returns:
        Dictionary with the defaults every grid schema is merged over
    """
    return {
        'label': 'Data Grid',
        'key': 'dataGrid',
        'type': 'datagrid',
        'clearOnHide': True,
        'input': True,
        'tree': True,
        'components': []
    }


class AttachMode(str, Enum):
    """How the grid is attached to the page."""
    FULL = 'full'
    BUILDER = 'builder'
    READ_ONLY = 'readOnly'


class SimpleConditional(BaseModel):
    """Show/hide rule: show (or hide) when the value under `when` equals `eq`."""

    model_config = ConfigDict(populate_by_name=True, extra='allow')

    show: Optional[Any] = None
    when: Optional[str] = None
    eq: Optional[Any] = None


class ColumnConfig(BaseModel):
    """
    Static configuration for one grid column.

    Unknown keys are kept so the whole column schema can be handed to the
    component factory untouched.
    """

    model_config = ConfigDict(populate_by_name=True, extra='allow')

    key: str
    type: str = 'textfield'
    label: Optional[str] = None
    title: Optional[str] = None
    hide_label: bool = Field(default=False, alias='hideLabel')
    default_value: Optional[Any] = Field(default=None, alias='defaultValue')
    conditional: Optional[SimpleConditional] = None
    components: List['ColumnConfig'] = Field(default_factory=list)

    @field_validator('key')
    @classmethod
    def _key_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Column key cannot be empty")
        return value.strip()

    @property
    def header_text(self) -> str:
        """Label shown in the grid header, falling back to the title."""
        return self.label or self.title or ''

    @property
    def has_header(self) -> bool:
        return bool(self.label or self.title) and not self.hide_label

    @property
    def has_conditional(self) -> bool:
        return self.conditional is not None and bool(self.conditional.when)

    @property
    def is_nested_group(self) -> bool:
        return bool(self.components) or self.type == 'container'


class ValidateConfig(BaseModel):
    """Row count bounds."""

    model_config = ConfigDict(populate_by_name=True, extra='allow')

    min_length: int = Field(default=0, ge=0, alias='minLength')
    max_length: Optional[int] = Field(default=None, ge=1, alias='maxLength')

    @field_validator('min_length', mode='before')
    @classmethod
    def _empty_min_is_zero(cls, value: Any) -> Any:
        # Builders save an untouched number input as ""
        return 0 if value in (None, '') else value

    @field_validator('max_length', mode='before')
    @classmethod
    def _empty_max_is_unset(cls, value: Any) -> Any:
        return None if value in ('', 0) else value

    @model_validator(mode='after')
    def _check_bounds(self) -> 'ValidateConfig':
        if self.max_length is not None and self.max_length < self.min_length:
            raise ValueError(
                f"maxLength ({self.max_length}) cannot be smaller than minLength ({self.min_length})"
            )
        return self


@dataclass(frozen=True)
class CountBounds:
    """Minimum and optional maximum number of rows."""
    min_rows: int = 0
    max_rows: Optional[int] = None


class GridConfig(BaseModel):
    """Data grid schema."""

    model_config = ConfigDict(populate_by_name=True, extra='allow')

    key: str = 'dataGrid'
    label: Optional[str] = 'Data Grid'
    type: str = 'datagrid'
    input: bool = True
    tree: bool = True
    clear_on_hide: bool = Field(default=True, alias='clearOnHide')
    components: List[ColumnConfig] = Field(default_factory=list)
    validate_: ValidateConfig = Field(default_factory=ValidateConfig, alias='validate')
    disable_adding_removing_rows: bool = Field(default=False, alias='disableAddingRemovingRows')
    add_another_position: Literal['top', 'bottom', 'both'] = Field(default='bottom', alias='addAnotherPosition')
    default_value: Optional[Any] = Field(default=None, alias='defaultValue')
    conditional: Optional[SimpleConditional] = None

    @field_validator('add_another_position', mode='before')
    @classmethod
    def _default_position(cls, value: Any) -> Any:
        return 'bottom' if value in (None, '') else value

    @model_validator(mode='after')
    def _unique_column_keys(self) -> 'GridConfig':
        seen = set()
        for column in self.components:
            if column.key in seen:
                raise ValueError(f"Duplicate column key '{column.key}'")
            seen.add(column.key)
        return self

    @property
    def column_keys(self) -> List[str]:
        return [column.key for column in self.components]

    @property
    def count_bounds(self) -> CountBounds:
        return CountBounds(
            min_rows=self.validate_.min_length,
            max_rows=self.validate_.max_length
        )

    @classmethod
    def from_schema(cls, schema: Optional[Dict[str, Any]] = None) -> 'GridConfig':
        """
        Build a grid configuration from a raw schema dictionary.

        The schema is layered over default_grid_schema(), so a bare
        ``{"components": [...]}`` is a valid grid.

        Args:
            schema: Raw grid schema (camelCase or snake_case keys)

        Returns:
            Validated GridConfig

        Raises:
            GridConfigError: If the schema fails validation
        """
        merged = default_grid_schema()
        merged.update(deepcopy(schema or {}))

        try:
            config = cls.model_validate(merged)
        except ValidationError as e:
            logger.error(f"Invalid grid schema '{merged.get('key')}': {e.error_count()} error(s)")
            raise GridConfigError(
                f"Invalid grid schema '{merged.get('key')}'",
                errors=e.errors()
            ) from e

        logger.debug(f"Loaded grid schema '{config.key}' with {len(config.components)} columns")
        return config


class GridOptions(BaseModel):
    """Render options for one grid instance."""

    model_config = ConfigDict(populate_by_name=True, extra='allow')

    attach_mode: AttachMode = Field(default=AttachMode.FULL, alias='attachMode')
    preview: bool = False
    disabled: bool = False
    view_only: bool = Field(default=False, alias='viewOnly')
    name: str = 'data'
    parent_visible: bool = Field(default=True, alias='parentVisible')

    @property
    def interactive(self) -> bool:
        """Rows can be added or removed only in a fully attached, non-preview grid."""
        return self.attach_mode == AttachMode.FULL and not self.preview

    @property
    def builder(self) -> bool:
        return self.attach_mode == AttachMode.BUILDER


ColumnConfig.model_rebuild()
