"""Backtracking search over a Zoo-Tiles grid: first-completion solve with a step counter, and a bounded solution counter for uniqueness checks."""

# backtracking.py
# Plain depth-first search, no propagation:
#   cursor = first empty cell (row-major)
#   for each candidate symbol: steps += 1; place if legal; recurse; undo on failure
# The caller's grid is never touched; the search runs on a private copy.

from __future__ import annotations

import random
from typing import Optional

from types_zootiles import SolveResult

from .solver_core import (
    AnyGrid,
    Cell,
    Constraints,
    ValueGrid,
    check_shape,
    find_empty_cell,
    is_cell_grid,
    is_valid_placement,
    to_values,
)
from .validator import validate


def _candidate_order(constraints: Constraints, rng: Optional[random.Random]) -> list[str]:
    order = list(constraints.alphabet)
    if rng is not None:
        rng.shuffle(order)
    return order


def _search(work: ValueGrid, constraints: Constraints, rng: Optional[random.Random]) -> tuple[bool, int]:
    cell = find_empty_cell(work)
    if cell is None:
        return True, 0
    row, col = cell
    steps = 0
    for value in _candidate_order(constraints, rng):
        steps += 1
        if is_valid_placement(work, constraints, row, col, value):
            work[row][col] = value
            solved, sub_steps = _search(work, constraints, rng)
            steps += sub_steps
            if solved:
                return True, steps
            work[row][col] = None  # backtrack
    return False, steps


def _count(work: ValueGrid, constraints: Constraints, limit: int) -> int:
    cell = find_empty_cell(work)
    if cell is None:
        return 1
    row, col = cell
    found = 0
    for value in constraints.alphabet:
        if is_valid_placement(work, constraints, row, col, value):
            work[row][col] = value
            found += _count(work, constraints, limit - found)
            work[row][col] = None
            if found >= limit:
                break
    return found


def _rebuild(grid: AnyGrid, values: ValueGrid) -> AnyGrid:
    # Cell grids come back as Cell grids: givens keep their flag, solver-filled cells are editable
    if not is_cell_grid(grid):
        return values
    return [
        [Cell(values[r][c], cell.fixed and cell.value is not None) for c, cell in enumerate(row)]
        for r, row in enumerate(grid)
    ]


def solve(grid: AnyGrid, constraints: Constraints, rng: Optional[random.Random] = None) -> SolveResult:
    """Complete `grid` by backtracking.

    Candidates are tried in alphabet order unless `rng` is given, in which case
    the order is shuffled per cell. Returns {'solved', 'solution', 'steps'};
    on failure `solution` has the same content as `grid`. A grid whose filled
    cells already break a rule has no completion and returns solved=False.
    """
    check_shape(grid, constraints)
    work = to_values(grid)
    if not validate(work, constraints)["is_valid"]:
        return {"solved": False, "solution": _rebuild(grid, to_values(grid)), "steps": 0}
    solved, steps = _search(work, constraints, rng)
    return {"solved": solved, "solution": _rebuild(grid, work), "steps": steps}


def count_solutions(grid: AnyGrid, constraints: Constraints, limit: int = 2) -> int:
    """Number of completions of `grid`, stopping once `limit` are found."""
    check_shape(grid, constraints)
    if limit <= 0:
        return 0
    work = to_values(grid)
    if not validate(work, constraints)["is_valid"]:
        return 0
    return _count(work, constraints, limit)
