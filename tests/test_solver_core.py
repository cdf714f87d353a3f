# tests/test_solver_core.py
import pytest

from zootiles.solver_core import (
    ANIMALS,
    GRID_CONFIGS,
    Cell,
    Constraints,
    InvalidConstraintsError,
    UnsupportedGridSizeError,
    candidates,
    constraints_for,
    count_empty,
    empty_grid,
    find_empty_cell,
    from_values,
    is_valid_placement,
    iter_units,
    key_to_rc,
    rc_to_key,
    subgrid_index,
    to_values,
    unit_cells_box,
)


def test_grid_configs_match_block_shapes():
    assert dict(GRID_CONFIGS) == {6: (2, 3), 8: (2, 4), 10: (2, 5), 12: (4, 3)}
    for n, (r, c) in GRID_CONFIGS.items():
        assert r * c == n


def test_constraints_for_uses_animals_by_default():
    c = constraints_for(8)
    assert (c.subgrid_rows, c.subgrid_cols) == (2, 4)
    assert c.alphabet == ANIMALS[:8]
    assert c.boxes_down == 4 and c.boxes_across == 2


def test_constraints_for_rejects_unsupported_size():
    with pytest.raises(UnsupportedGridSizeError):
        constraints_for(9)


@pytest.mark.parametrize(
    "args",
    [
        (6, 3, 3, "ABCDEF"),  # 3*3 != 6
        (6, 2, 3, "ABCDE"),  # alphabet too short
        (6, 2, 3, "ABCDEA"),  # repeated symbol
        (0, 0, 0, ""),
    ],
)
def test_malformed_constraints_are_rejected(args):
    with pytest.raises(InvalidConstraintsError):
        Constraints(*args)


def test_cell_keys_are_one_based():
    assert rc_to_key(0, 0) == "r1c1"
    assert rc_to_key(11, 9) == "r12c10"
    assert key_to_rc("r12c10") == (11, 9)


def test_box_cells_for_non_square_subgrid():
    c = constraints_for(12)  # 4x3 blocks, 4 across, 3 down
    cells = unit_cells_box(5, c)
    assert len(cells) == 12
    assert cells[0] == (4, 3) and cells[-1] == (7, 5)
    assert subgrid_index(4, 3, c) == 5
    assert subgrid_index(11, 11, c) == 11


def test_iter_units_counts(letters_for):
    for n in (6, 8, 10, 12):
        units = list(iter_units(letters_for(n)))
        assert len(units) == 3 * n
        assert all(len(cells) == n for _k, _l, cells in units)
        assert units[2 * n][1] == "subgrid (1, 1)"


def test_cell_and_value_grids_convert(letters6):
    g = empty_grid(letters6)
    assert count_empty(g) == 36
    g[0][1] = Cell("A", True)
    values = to_values(g)
    assert values[0][:2] == [None, "A"]
    back = from_values(values)
    assert back[0][1].fixed and not back[0][0].fixed
    assert find_empty_cell(g) == (0, 0)


def test_placement_checks_row_col_and_block(letters6):
    g = to_values(empty_grid(letters6))
    g[0][0] = "A"
    assert not is_valid_placement(g, letters6, 0, 5, "A")  # row
    assert not is_valid_placement(g, letters6, 4, 0, "A")  # column
    assert not is_valid_placement(g, letters6, 1, 2, "A")  # 2x3 block
    assert is_valid_placement(g, letters6, 1, 3, "A")  # next block over
    assert is_valid_placement(g, letters6, 2, 1, "A")  # block below


def test_placement_ignores_overwritten_cell_and_allows_clear(letters6):
    g = to_values(empty_grid(letters6))
    g[0][0] = "A"
    assert is_valid_placement(g, letters6, 0, 0, "A")
    assert is_valid_placement(g, letters6, 0, 0, None)


def test_placement_block_scan_includes_same_row_and_column_cells(letters6):
    # (1, 2) shares only the block with (0, 0)
    g = to_values(empty_grid(letters6))
    g[1][2] = "B"
    assert not is_valid_placement(g, letters6, 0, 0, "B")


def test_candidates(letters6, latin):
    g = latin(letters6)
    want = g[2][4]
    g[2][4] = None
    assert candidates(g, letters6, 2, 4) == [want]
    assert candidates(g, letters6, 0, 0) == []
