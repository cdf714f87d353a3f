from __future__ import annotations
from typing import Dict, List, Optional, Sequence

from .backtracking import solve
from .generator import generate
from .solver_core import (
    GRID_CONFIGS, Constraints, check_shape, UnsupportedGridSizeError, ValueGrid, animal_alphabet, candidates, count_empty,
    is_valid_placement, rc_to_key,
)
from .validator import sanity_check as _sanity_check, validate
"""JSON-friendly wrappers around the engine (value grids in, plain dicts out) shared by the API and the demo CLI."""


# zoo_tools.py
# Every tool takes plain lists (None/null = empty) plus a size and optional
# subgrid/alphabet, and returns a dict that json.dumps can handle.

def make_constraints(size:int, subgrid_rows:Optional[int]=None, subgrid_cols:Optional[int]=None,
                     alphabet:Optional[Sequence[str]]=None)->Constraints:
    """Supported sizes fall back to GRID_CONFIGS for any subgrid side left out; animals by default."""
    if subgrid_rows is None or subgrid_cols is None:
        if size not in GRID_CONFIGS:
            raise UnsupportedGridSizeError(f"size {size} needs an explicit subgrid shape")
        dr, dc = GRID_CONFIGS[size]
        subgrid_rows = dr if subgrid_rows is None else subgrid_rows
        subgrid_cols = dc if subgrid_cols is None else subgrid_cols
    if alphabet is None:
        alphabet = animal_alphabet(size)
    return Constraints(size, subgrid_rows, subgrid_cols, tuple(alphabet))

def grid_configs_tool()->Dict:
    return {"configs": {str(n): {"subgrid_rows": r, "subgrid_cols": c} for n, (r, c) in GRID_CONFIGS.items()}}

def validate_tool(grid:ValueGrid, constraints:Constraints)->Dict:
    res = validate(grid, constraints)
    return {"is_valid": res["is_valid"], "conflicts": res["conflicts"], "empty": count_empty(grid)}

def placement_tool(grid:ValueGrid, constraints:Constraints, row:int, col:int, value:Optional[str])->Dict:
    check_shape(grid, constraints)
    return {"cell": rc_to_key(row, col), "value": value,
            "valid": is_valid_placement(grid, constraints, row, col, value)}

def compute_candidates_tool(grid:ValueGrid, constraints:Constraints)->Dict:
    """Candidate symbols for each empty cell, e.g. {'r1c2': ['🦁','🐘'], ...}."""
    check_shape(grid, constraints)
    n = constraints.grid_size
    out: Dict[str, List[str]] = {}
    for r in range(n):
        for c in range(n):
            if grid[r][c] is None:
                out[rc_to_key(r, c)] = candidates(grid, constraints, r, c)
    return {"candidates": out}

def solve_tool(grid:ValueGrid, constraints:Constraints)->Dict:
    res = solve(grid, constraints)
    return {"solved": res["solved"], "solution": res["solution"], "steps": res["steps"]}

def generate_tool(constraints:Constraints, difficulty="Medium", seed:Optional[int]=None, unique:bool=False)->Dict:
    payload = generate(constraints, difficulty, seed=seed, unique=unique)
    payload["subgrid"] = list(payload["subgrid"])
    return dict(payload)

def sanity_check(original:ValueGrid, current:ValueGrid, constraints:Constraints)->Dict:
    return _sanity_check(original, current, constraints)
