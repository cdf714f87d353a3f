# types_zootiles.py
from __future__ import annotations

from typing import Any, Optional, TypedDict

ValueGrid = list[list[Optional[str]]]
"""An NxN grid of symbols as rows of strings (None = empty)."""


class Conflict(TypedDict):
    """One repeated occurrence of a symbol inside a row, column or subgrid."""

    row: int  # 0-based
    col: int  # 0-based
    unit: str  # 'r1', 'c4', 'b2' (1-based, same keys as sanity_check)
    value: str
    reason: str  # e.g. 'Duplicate 🦁 in row 1'


class ValidationResult(TypedDict):
    is_valid: bool
    conflicts: list[Conflict]


class SolveResult(TypedDict):
    solved: bool
    solution: Any  # same representation as the grid passed in
    steps: int  # placement attempts, summed over the whole search


class PuzzlePayload(TypedDict, total=False):
    """A generated puzzle with its retained solution, as handed to the UI layer."""

    id: str
    size: int
    subgrid: tuple[int, int]
    difficulty: float
    seed: Optional[int]
    puzzle: ValueGrid
    solution: ValueGrid
    empty: int  # number of blanks in `puzzle`
    steps: int  # solver steps spent filling the solution


class Move(TypedDict, total=False):
    """A single player (or hint) action recorded by a PuzzleSession."""

    index: int  # 1-based order in the session
    type: str  # 'placement', 'clear' or 'hint'
    cell: str  # target cell (e.g., 'r4c7')
    value: Optional[str]
    previous: Optional[str]
    correct: bool  # value matches the retained solution
    kept: bool  # False when a wrong entry was rejected
