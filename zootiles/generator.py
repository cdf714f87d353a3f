"""Puzzle generation: fill an empty grid by (shuffled) backtracking, then blank a difficulty-controlled fraction of cells. Also difficulty presets and daily/weekly challenge seeds."""

# generator.py
# Usage from code:
#   c = constraints_for(8)
#   payload = generate(c, "Hard", seed=42)
#   payload["puzzle"], payload["solution"]
#
# Notes:
# - "difficulty" = fraction of cells blanked (0..1). floor(N*N*difficulty) cells go.
# - By default the puzzle is NOT checked for a unique solution; the retained
#   solution is one valid completion. unique=True switches to remove-and-verify,
#   which may stop short of the target when no further cell can go.

from __future__ import annotations

import datetime as dt
import hashlib
import math
import random
from typing import Optional, Union

from types_zootiles import PuzzlePayload

from .backtracking import count_solutions, solve
from .solver_core import (
    Cell,
    Constraints,
    Grid,
    ZooTilesError,
    constraints_for,
    count_empty,
    empty_grid,
    to_values,
)

DIFFICULTY_LEVELS = {"Easy": 0.35, "Medium": 0.5, "Hard": 0.6, "Expert": 0.7}
DEFAULT_DIFFICULTY = DIFFICULTY_LEVELS["Medium"]

CHALLENGE_MODES = ("daily", "weekly", "sequential")


def resolve_difficulty(difficulty: Union[str, float, int, None]) -> float:
    """Accept a preset name (case-insensitive) or a fraction in [0, 1]."""
    if difficulty is None:
        return DEFAULT_DIFFICULTY
    if isinstance(difficulty, str):
        for name, frac in DIFFICULTY_LEVELS.items():
            if name.lower() == difficulty.strip().lower():
                return frac
        try:
            difficulty = float(difficulty)
        except ValueError:
            raise ZooTilesError(
                f"unknown difficulty {difficulty!r}; expected one of {list(DIFFICULTY_LEVELS)} or 0..1"
            ) from None
    frac = float(difficulty)
    if not 0.0 <= frac <= 1.0:
        raise ZooTilesError(f"difficulty must be within [0, 1], got {frac}")
    return frac


def _solved_grid(constraints: Constraints, rng: random.Random) -> tuple[Grid, int]:
    result = solve(empty_grid(constraints), constraints, rng=rng)
    if not result["solved"]:
        raise ZooTilesError(f"could not fill an empty {constraints.grid_size}x{constraints.grid_size} grid")
    return result["solution"], result["steps"]


def _mask_random(grid: Grid, cells_to_remove: int, rng: random.Random) -> None:
    n = len(grid)
    removed = set()
    while len(removed) < cells_to_remove:
        row = rng.randrange(n)
        col = rng.randrange(n)
        if (row, col) not in removed:
            grid[row][col].value = None
            removed.add((row, col))


def _mask_unique(grid: Grid, constraints: Constraints, cells_to_remove: int, rng: random.Random) -> None:
    n = constraints.grid_size
    coords = [(r, c) for r in range(n) for c in range(n)]
    rng.shuffle(coords)
    removed = 0
    for r, c in coords:
        if removed >= cells_to_remove:
            break
        backup = grid[r][c].value
        grid[r][c].value = None
        if count_solutions(grid, constraints, limit=2) == 1:
            removed += 1
        else:
            grid[r][c].value = backup


def _as_puzzle(grid: Grid) -> Grid:
    return [[Cell(cell.value, cell.value is not None) for cell in row] for row in grid]


def generate_puzzle(
    constraints: Constraints,
    difficulty: Union[str, float] = DEFAULT_DIFFICULTY,
    rng: Optional[random.Random] = None,
    unique: bool = False,
) -> Grid:
    """A fresh puzzle grid: remaining cells are givens (fixed), blanks are editable."""
    return _build(constraints, resolve_difficulty(difficulty), rng or random.Random(), unique)[0]


def _build(constraints: Constraints, difficulty: float, rng: random.Random, unique: bool):
    solution, steps = _solved_grid(constraints, rng)
    puzzle = [[Cell(cell.value) for cell in row] for row in solution]
    cells_to_remove = math.floor(constraints.grid_size * constraints.grid_size * difficulty)
    if unique:
        _mask_unique(puzzle, constraints, cells_to_remove, rng)
    else:
        _mask_random(puzzle, cells_to_remove, rng)
    return _as_puzzle(puzzle), solution, steps


def generate(
    constraints: Constraints,
    difficulty: Union[str, float] = DEFAULT_DIFFICULTY,
    seed: Optional[int] = None,
    unique: bool = False,
    puzzle_id: Optional[str] = None,
) -> PuzzlePayload:
    """Puzzle plus its retained solution, as value grids, with metadata for the UI layer."""
    frac = resolve_difficulty(difficulty)
    rng = random.Random(seed)
    puzzle, solution, steps = _build(constraints, frac, rng, unique)
    n = constraints.grid_size
    if puzzle_id is None:
        puzzle_id = f"{n}_{frac:.2f}_{seed if seed is not None else rng.getrandbits(32):x}"
    return {
        "id": puzzle_id,
        "size": n,
        "subgrid": (constraints.subgrid_rows, constraints.subgrid_cols),
        "difficulty": frac,
        "seed": seed,
        "puzzle": to_values(puzzle),
        "solution": to_values(solution),
        "empty": count_empty(puzzle),
        "steps": steps,
    }


def challenge_seed(mode: str, size: int, day: Optional[dt.date] = None) -> Optional[int]:
    """Stable seed shared by every player for the day's (or week's) challenge; None for sequential play."""
    if mode not in CHALLENGE_MODES:
        raise ZooTilesError(f"unknown challenge mode {mode!r}; expected one of {CHALLENGE_MODES}")
    if mode == "sequential":
        return None
    day = day or dt.date.today()
    if mode == "daily":
        stamp = day.isoformat()
    else:
        year, week, _ = day.isocalendar()
        stamp = f"{year}-W{week:02d}"
    digest = hashlib.sha256(f"{mode}:{size}:{stamp}".encode("utf-8")).hexdigest()
    return int(digest[:12], 16)


def challenge_puzzle(
    mode: str,
    size: int,
    day: Optional[dt.date] = None,
    difficulty: Union[str, float] = DEFAULT_DIFFICULTY,
) -> PuzzlePayload:
    seed = challenge_seed(mode, size, day)
    stamp = "" if seed is None else f"_{seed:x}"
    return generate(constraints_for(size), difficulty, seed=seed, puzzle_id=f"{mode}_{size}{stamp}")
