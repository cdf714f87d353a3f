# tests/test_validator.py
import pytest

from zootiles.solver_core import Cell, ForeignSymbolError, GridShapeError, empty_grid, from_values, to_values
from zootiles.validator import is_complete, sanity_check, validate


@pytest.mark.parametrize("size", [6, 8, 10, 12])
def test_complete_valid_grid_has_no_conflicts(size, letters_for, latin):
    c = letters_for(size)
    res = validate(latin(c), c)
    assert res == {"is_valid": True, "conflicts": []}


def test_empty_grid_is_valid(letters6):
    assert validate(empty_grid(letters6), letters6)["is_valid"]


def test_single_row_duplicate_reports_one_conflict(letters6):
    g = to_values(empty_grid(letters6))
    g[0] = ["A", "B", "C", "D", "E", "A"]
    res = validate(g, letters6)
    assert not res["is_valid"]
    assert len(res["conflicts"]) == 1
    conflict = res["conflicts"][0]
    assert (conflict["row"], conflict["col"], conflict["unit"]) == (0, 5, "r1")
    assert conflict["reason"] == "Duplicate A in row 1"


def test_duplicate_in_full_grid_references_row_zero(letters6, latin):
    g = latin(letters6)
    assert g[0][0] == "A"
    g[0][3] = "A"
    res = validate(g, letters6)
    assert not res["is_valid"]
    row_conflicts = [x for x in res["conflicts"] if x["unit"] == "r1"]
    assert len(row_conflicts) == 1
    assert row_conflicts[0]["row"] == 0


def test_column_and_non_square_block_conflicts(letters_for):
    c = letters_for(8)  # 2x4 blocks
    g = to_values(empty_grid(c))
    g[0][0] = "C"
    g[1][3] = "C"  # same block only
    g[7][3] = "C"  # same column as (1, 3)
    units = sorted(x["unit"] for x in validate(g, c)["conflicts"])
    assert units == ["b1", "c4"]


def test_validate_accepts_cell_grids_and_does_not_mutate(letters6, latin):
    values = latin(letters6)
    values[5][5] = values[5][4]
    grid = from_values(values)
    before = [[Cell(x.value, x.fixed) for x in row] for row in grid]
    res = validate(grid, letters6)
    assert not res["is_valid"]
    assert grid == before


def test_validate_rejects_wrong_shape(letters6):
    with pytest.raises(GridShapeError):
        validate([[None] * 6] * 5, letters6)


def test_is_complete(letters6, latin):
    g = latin(letters6)
    assert is_complete(g, letters6)
    g[3][3] = None
    assert not is_complete(g, letters6)


def test_sanity_check_flags_overwritten_givens_and_duplicates(letters6, latin):
    solution = latin(letters6)
    original = from_values(solution)
    original[0][1] = Cell(None, False)
    current = [row[:] for row in solution]
    current[0][0] = "B"  # given was A
    current[0][1] = None
    report = sanity_check(original, current, letters6)
    assert not report["ok"]
    kinds = [i["type"] for i in report["issues"]]
    assert kinds[0] == "given_overwritten"
    assert report["issues"][0] == {"type": "given_overwritten", "cell": "r1c1", "given": "A", "found": "B"}
    assert "duplicate" in kinds


def test_sanity_check_ok_for_partial_progress(letters6, latin):
    solution = latin(letters6)
    current = [row[:] for row in solution]
    current[2][2] = None
    assert sanity_check(solution, current, letters6) == {"ok": True, "issues": []}


def test_symbols_outside_the_alphabet_are_rejected(letters6, latin):
    # swapping F for Z everywhere keeps every unit duplicate-free
    g = [["Z" if v == "F" else v for v in row] for row in latin(letters6)]
    with pytest.raises(ForeignSymbolError, match="r1c6"):
        validate(g, letters6)
    with pytest.raises(ForeignSymbolError):
        is_complete(g, letters6)
    with pytest.raises(ForeignSymbolError):
        sanity_check(latin(letters6), g, letters6)
