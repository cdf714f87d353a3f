from __future__ import annotations

from typing import Optional

from types_zootiles import Conflict, ValidationResult

from .solver_core import (
    AnyGrid,
    Cell,
    Constraints,
    check_shape,
    check_symbols,
    count_empty,
    iter_units,
    rc_to_key,
    value_at,
)

"""Rule checks over an in-progress grid: located duplicate conflicts per row/column/subgrid, given-overwrite sanity check, completion test."""


# validator.py
# Read-only over the grid. Empty cells never conflict; each repeated occurrence
# after the first in a unit is reported once, so a single duplicate pair in one
# row yields exactly one row conflict.


def _duplicates_in_unit(grid: AnyGrid, cells) -> list[tuple[int, int, str]]:
    seen = set()
    dups = []
    for r, c in cells:
        v = value_at(grid, r, c)
        if v is None:
            continue
        if v in seen:
            dups.append((r, c, v))
        seen.add(v)
    return dups


def validate(grid: AnyGrid, constraints: Constraints) -> ValidationResult:
    """Every row, column and subgrid duplicate in `grid`, located.

    Subgrids come from the (subgrid_rows, subgrid_cols) partition, so 2x4 and
    4x3 blocks are scanned as such. Returns {'is_valid', 'conflicts'} with
    is_valid == (no conflicts).
    """
    check_shape(grid, constraints)
    check_symbols(grid, constraints)
    conflicts: list[Conflict] = []
    for key, label, cells in iter_units(constraints):
        for r, c, v in _duplicates_in_unit(grid, cells):
            conflicts.append(
                {"row": r, "col": c, "unit": key, "value": v, "reason": f"Duplicate {v} in {label}"}
            )
    return {"is_valid": len(conflicts) == 0, "conflicts": conflicts}


def is_complete(grid: AnyGrid, constraints: Constraints) -> bool:
    """All cells filled and no rule is broken."""
    return count_empty(grid) == 0 and validate(grid, constraints)["is_valid"]


def sanity_check(original: AnyGrid, current: AnyGrid, constraints: Constraints) -> dict:
    check_shape(original, constraints)
    check_shape(current, constraints)
    check_symbols(original, constraints)
    check_symbols(current, constraints)
    issues = []
    n = constraints.grid_size
    for r in range(n):
        for c in range(n):
            given = _given(original, r, c)
            found = value_at(current, r, c)
            if given is not None and found not in (None, given):
                issues.append({"type": "given_overwritten", "cell": rc_to_key(r, c), "given": given, "found": found})
    for key, _label, cells in iter_units(constraints):
        dups = {v for _r, _c, v in _duplicates_in_unit(current, cells)}
        if dups:
            bad = [rc_to_key(r, c) for r, c in cells if value_at(current, r, c) in dups]
            issues.append({"type": "duplicate", "unit": key, "values": sorted(dups), "cells": bad})
    return {"ok": len(issues) == 0, "issues": issues}


def _given(grid: AnyGrid, r: int, c: int) -> Optional[str]:
    # plain value grids treat every filled cell as a given
    v = grid[r][c]
    if isinstance(v, Cell):
        return v.value if v.fixed else None
    return v
