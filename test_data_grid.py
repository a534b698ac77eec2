"""
Unit and scenario tests for the DataGrid controller.
"""

import pytest

from datagrid.data_grid import DataGrid
from datagrid.exceptions import RowConstructionError
from datagrid.grid_config import GridConfig, GridOptions
from test_fixtures import GridFixtures, RecordingFactory, SwitchableComponent


def make_grid(min_length=0, max_length=None, options=None, factory=None, on_redraw=None):
    config = GridConfig.from_schema(GridFixtures.two_column_schema(min_length, max_length))
    return DataGrid(config, options, factory=factory or RecordingFactory(), on_redraw=on_redraw)


class TestConstruction:
    """Test initial state of a new grid."""

    def test_starts_with_one_empty_row(self):
        """Test that the default value is a single empty row."""
        grid = make_grid()

        assert grid.data_value == [{}]
        assert len(grid.rows) == 1
        assert set(grid.rows[0].keys()) == {'a', 'b'}

    def test_pads_to_min_rows(self):
        """Test that the initial value is padded up to minLength."""
        grid = make_grid(min_length=3)

        assert grid.data_value == [{}, {}, {}]
        assert len(grid.rows) == 3

    def test_schema_default_value_object_becomes_single_row(self):
        """Test that an object default value is wrapped in a list."""
        schema = GridFixtures.two_column_schema()
        schema['defaultValue'] = {'a': 'x'}

        grid = DataGrid(schema, factory=RecordingFactory())

        assert grid.data_value == [{'a': 'x'}]
        assert grid.get_value() == [{'a': 'x', 'b': 'b-default'}]

    def test_accepts_raw_schema_and_options(self):
        """Test construction from plain dictionaries."""
        grid = DataGrid(GridFixtures.two_column_schema(), {'attachMode': 'builder'})

        assert grid.key == 'items'
        assert grid.datagrid_key == 'datagrid-items'
        assert grid.options.builder is True

    def test_cells_are_marked_as_grid_members(self):
        """Test that created cells carry their row index and grid marker."""
        grid = make_grid(min_length=2)

        for row_index, row in enumerate(grid.rows):
            for cell in row.values():
                assert cell.in_data_grid is True
                assert cell.row_index == row_index

    def test_factory_failure_raises_row_construction_error(self):
        """Test that a failing factory surfaces as RowConstructionError."""
        with pytest.raises(RowConstructionError) as exc_info:
            make_grid(factory=RecordingFactory(fail_on='b'))

        assert exc_info.value.column_key == 'b'
        assert exc_info.value.row_index == 0


class TestSetValue:
    """Test setting values on the grid."""

    @pytest.mark.parametrize("value", [
        [],
        [{'a': 1}],
        [{'a': 1}, {'b': 2}, {}],
        [{}, {}, {}, {}, {}],
    ])
    def test_matrix_length_matches_value(self, value):
        """Test that value and matrix lengths follow the input."""
        grid = make_grid()

        grid.set_value(value)

        assert len(grid.data_value) == len(value)
        assert len(grid.rows) == len(value)

    def test_none_resets_to_min_rows(self):
        """Test that None rebuilds empty rows from minLength without a redraw."""
        grid = make_grid(min_length=2)
        grid.set_value([{'a': 1}, {'a': 2}, {'a': 3}])
        redraws = grid.redraw_count

        changed = grid.set_value(None)

        assert changed is False
        assert grid.data_value == [{}, {}]
        assert len(grid.rows) == 2
        assert grid.redraw_count == redraws
        assert grid.get_value() == [{'a': '', 'b': 'b-default'}, {'a': '', 'b': 'b-default'}]

    def test_none_with_zero_min_rows_empties_grid(self):
        """Test that None with no minimum leaves no rows."""
        grid = make_grid()

        grid.set_value(None)

        assert grid.data_value == []
        assert grid.rows == []

    def test_object_is_wrapped_in_list(self):
        """Test that a bare object becomes a single row."""
        grid = make_grid()

        grid.set_value({'a': 1})

        assert grid.data_value == [{'a': 1}]
        assert len(grid.rows) == 1

    @pytest.mark.parametrize("value", [5, 'text', True, 3.5])
    def test_scalar_falls_back_to_single_empty_row(self, value):
        """Test that non-object values are replaced by one empty row."""
        grid = make_grid()
        grid.set_value([{'a': 1}, {'a': 2}])

        grid.set_value(value)

        assert grid.data_value == [{}]
        assert len(grid.rows) == 1

    def test_redraw_only_when_changed(self):
        """Test that an equal value does not request a redraw."""
        reasons = []
        grid = make_grid(on_redraw=lambda g, reason: reasons.append(reason))

        assert grid.set_value([{'a': 1}]) is True
        assert grid.set_value([{'a': 1}]) is False
        assert reasons == ['value_changed']

    def test_numeric_type_does_not_count_as_change(self):
        """Test that 1 and 1.0 compare equal."""
        grid = make_grid()
        grid.set_value([{'a': 1}])

        assert grid.set_value([{'a': 1.0}]) is False

    def test_existing_rows_are_reused(self):
        """Test that rows at still-valid indices keep their components."""
        factory = RecordingFactory()
        grid = make_grid(factory=factory)
        grid.set_value([{'a': 1}, {'a': 2}])
        first_row = grid.rows[0]
        created = len(factory.created)

        grid.set_value([{'a': 10}, {'a': 20}, {'a': 30}])

        assert grid.rows[0] is first_row
        assert len(factory.created) == created + 2

    def test_flags_are_forwarded_to_cells(self):
        """Test that flags reach every cell untouched."""
        grid = make_grid()
        flags = {'noValidate': True}

        grid.set_value([{'a': 1, 'b': 2}], flags)

        assert grid.rows[0]['a'].calls[-1] == (1, flags)
        assert grid.rows[0]['b'].calls[-1] == (2, flags)

    def test_idempotent_round_trip(self):
        """Test that feeding get_value back twice reports no change the second time."""
        grid = make_grid()
        grid.set_value([{'a': 1}, {'b': 'x'}])

        grid.set_value(grid.get_value())

        assert grid.set_value(grid.get_value()) is False


class TestGetValue:
    """Test aggregating values from the cells."""

    def test_collects_cell_values_in_row_order(self):
        """Test that each row is rebuilt from its cells."""
        grid = make_grid()
        grid.set_value([{'a': 1, 'b': 2}, {'a': 3, 'b': 4}])

        assert grid.get_value() == [{'a': 1, 'b': 2}, {'a': 3, 'b': 4}]

    def test_reflects_cell_edits(self):
        """Test that edits made directly on a cell show up."""
        grid = make_grid()
        grid.set_value([{'a': 1, 'b': 2}])

        grid.rows[0]['a'].set_value('edited')

        assert grid.get_value() == [{'a': 'edited', 'b': 2}]

    def test_view_only_returns_stored_value(self):
        """Test that view-only mode never consults the cells."""
        grid = make_grid(options=GridOptions(view_only=True))
        grid.set_value([{'a': 1}])

        grid.rows[0]['a'].set_value('edited')

        assert grid.get_value() == [{'a': 1}]


class TestAddRemoveRows:
    """Test adding and removing rows."""

    def test_add_row_appends_empty_row_and_redraws(self):
        """Test that add_row appends exactly one row."""
        factory = RecordingFactory()
        grid = make_grid(factory=factory)
        created = len(factory.created)

        index = grid.add_row()

        assert index == 1
        assert grid.data_value == [{}, {}]
        assert len(grid.rows) == 2
        assert len(factory.created) == created + 2
        assert grid.redraw_count == 1

    def test_add_then_remove_last_restores_length(self):
        """Test that removing the added row restores the previous state."""
        grid = make_grid()
        grid.set_value([{'a': 1}, {'a': 2}])
        earlier_rows = list(grid.rows)

        grid.add_row()
        grid.remove_row(len(grid.rows) - 1)

        assert len(grid.data_value) == 2
        assert all(row is before for row, before in zip(grid.rows, earlier_rows))

    def test_remove_row_shifts_later_rows_without_recreating(self):
        """Test that identity is positional after a removal."""
        factory = RecordingFactory()
        grid = make_grid(factory=factory)
        grid.set_value([{'a': 1}, {'a': 2}, {'a': 3}])
        second, third = grid.rows[1], grid.rows[2]
        created = len(factory.created)

        removed = grid.remove_row(0)

        assert removed is True
        assert grid.data_value == [{'a': 2}, {'a': 3}]
        assert grid.rows[0] is second
        assert grid.rows[1] is third
        assert len(factory.created) == created

    def test_remove_row_out_of_range_is_ignored(self):
        """Test that an invalid index changes nothing."""
        grid = make_grid()
        redraws = grid.redraw_count

        assert grid.remove_row(5) is False
        assert grid.remove_row(-1) is False
        assert len(grid.rows) == 1
        assert grid.redraw_count == redraws

    def test_remove_row_always_redraws(self):
        """Test that a removal requests a redraw."""
        reasons = []
        grid = make_grid(on_redraw=lambda g, reason: reasons.append(reason))
        grid.add_row()

        grid.remove_row(0)

        assert reasons == ['row_added', 'row_removed']


class TestCountLimits:
    """Test add/remove availability through the grid."""

    def test_cannot_add_at_max_rows(self):
        """Test that the add button disappears at maxLength."""
        grid = make_grid(max_length=3)
        grid.set_value([{}, {}])
        assert grid.can_add() is True

        grid.add_row()

        assert grid.can_add() is False

    def test_cannot_remove_at_min_rows(self):
        """Test that rows cannot be removed at minLength."""
        grid = make_grid(min_length=2)

        assert grid.can_remove() is False

        grid.add_row()

        assert grid.can_remove() is True


class TestCheckConditions:
    """Test grid and column visibility."""

    def test_hidden_column_when_no_row_matches(self):
        """Test that a column is hidden when every cell is hidden."""
        grid = DataGrid(GridFixtures.conditional_schema())
        grid.set_value([{'kind': 'person'}, {'kind': 'person'}])

        show = grid.check_conditions({})

        assert show is True
        assert grid.visible_columns == {'kind': True, 'company': False}

    def test_one_visible_cell_keeps_column(self):
        """Test that a single visible cell shows the whole column."""
        grid = DataGrid(GridFixtures.conditional_schema())
        grid.set_value([{'kind': 'person'}, {'kind': 'business'}])

        grid.check_conditions({})

        assert grid.visible_columns == {'kind': True, 'company': True}

    def test_redraw_only_when_visibility_changes(self):
        """Test that an unchanged visibility map does not redraw."""
        reasons = []
        grid = DataGrid(GridFixtures.conditional_schema(), on_redraw=lambda g, reason: reasons.append(reason))
        grid.set_value([{'kind': 'business'}])
        reasons.clear()

        grid.check_conditions({})
        grid.check_conditions({})

        assert reasons == ['columns_changed']

    def test_all_columns_hidden_means_nothing_to_show(self):
        """Test that the grid reports nothing to show when every column is hidden."""
        factory = RecordingFactory(component_class=SwitchableComponent)
        grid = make_grid(factory=factory)
        for cell in grid.rows[0].values():
            cell.visible = False

        assert grid.check_conditions({}) is False
        assert grid.visible_columns == {'a': False, 'b': False}

    def test_hidden_grid_skips_column_evaluation(self):
        """Test that column conditions are not evaluated for a hidden grid."""
        factory = RecordingFactory(component_class=SwitchableComponent)
        grid = make_grid(factory=factory, options=GridOptions(parent_visible=False))
        checks = sum(cell.condition_checks for cell in grid.rows[0].values())

        assert grid.check_conditions({}) is False
        assert sum(cell.condition_checks for cell in grid.rows[0].values()) == checks

    def test_grid_own_conditional(self):
        """Test that the grid's own conditional hides it."""
        schema = GridFixtures.two_column_schema()
        schema['conditional'] = {'show': True, 'when': 'showItems', 'eq': 'yes'}
        grid = DataGrid(schema)

        assert grid.check_conditions({'showItems': 'no'}) is False
        assert grid.check_conditions({'showItems': 'yes'}) is True

    def test_empty_grid_stays_visible(self):
        """Test that a grid without rows still shows (so rows can be added)."""
        grid = make_grid()
        grid.set_value([])
        before = dict(grid.visible_columns)

        assert grid.check_conditions({}) is True
        assert grid.visible_columns == before


class TestScenario:
    """End-to-end scenario with two columns and 1..3 rows."""

    def test_full_scenario(self):
        """Test the null / add / set / get sequence."""
        grid = make_grid(min_length=1, max_length=3)

        grid.set_value(None)
        assert grid.data_value == [{}]

        grid.add_row()
        assert grid.data_value == [{}, {}]

        changed = grid.set_value([{'a': 1, 'b': 2}, {'a': 3}])
        assert changed is True
        assert grid.rows[0]['b'].calls[-1] == (2, None)
        assert grid.rows[1]['b'].calls[-1] == ('b-default', None)

        assert grid.get_value() == [{'a': 1, 'b': 2}, {'a': 3, 'b': 'b-default'}]

    def test_nested_keys_and_groups(self):
        """Test dotted column keys and nested group cells."""
        grid = DataGrid(GridFixtures.nested_schema())
        row = {'name': 'Ada', 'addr': {'city': 'London'}, 'meta': {'note': 'first'}}

        grid.set_value([row])

        assert grid.rows[0]['meta'].data == row
        assert grid.get_value() == [{
            'name': 'Ada',
            'addr': {'city': 'London'},
            'meta': {'note': 'first', 'flag': False},
        }]
        assert grid.set_value(grid.get_value()) is True
        assert grid.set_value(grid.get_value()) is False
