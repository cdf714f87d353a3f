from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

from types_zootiles import Conflict, Move

from .solver_core import (
    AnyGrid,
    Constraints,
    Grid,
    Symbol,
    ZooTilesError,
    check_shape,
    check_symbols,
    clone_grid,
    from_values,
    is_cell_grid,
    rc_to_key,
    to_values,
)
from .validator import is_complete, validate

"""Engine-side state for one play session: the puzzle, its retained solution, player moves with undo history, hints and the completion test."""


class CellLockedError(ZooTilesError):
    pass


class RuleDisabledError(ZooTilesError):
    pass


@dataclass(frozen=True)
class PuzzleRules:
    allow_next: bool = False  # offer a "next puzzle" action
    allow_reset: bool = True
    allow_hint: bool = True
    allow_undo: bool = True
    timer_enabled: bool = True
    highlight_same_animal: bool = True
    mark_wrong_entry: bool = True  # wrong entries flash and are not kept


PUZZLE_RULES = MappingProxyType(
    {
        "daily": PuzzleRules(),
        "weekly": PuzzleRules(),
        "sequential": PuzzleRules(allow_next=True),
    }
)


class PuzzleSession:
    """A puzzle being played. Owns private copies of the puzzle and solution."""

    def __init__(self, puzzle: AnyGrid, solution: AnyGrid, constraints: Constraints, mode: str = "sequential"):
        check_shape(puzzle, constraints)
        check_shape(solution, constraints)
        check_symbols(puzzle, constraints)
        check_symbols(solution, constraints)
        if mode not in PUZZLE_RULES:
            raise ZooTilesError(f"unknown mode {mode!r}; expected one of {list(PUZZLE_RULES)}")
        self.constraints = constraints
        self.mode = mode
        self.rules = PUZZLE_RULES[mode]
        self.puzzle: Grid = clone_grid(puzzle) if is_cell_grid(puzzle) else from_values(puzzle)
        self.solution = to_values(solution)
        self.grid: Grid = clone_grid(self.puzzle)
        self.history: list[Grid] = []
        self.log: list[Move] = []
        self.moves = 0

    @classmethod
    def from_payload(cls, payload: dict, constraints: Constraints, mode: str = "sequential") -> "PuzzleSession":
        return cls(payload["puzzle"], payload["solution"], constraints, mode)

    def _record(self, kind: str, row: int, col: int, value: Optional[Symbol], previous, kept: bool) -> Move:
        self.moves += 1
        move: Move = {
            "index": self.moves,
            "type": kind,
            "cell": rc_to_key(row, col),
            "value": value,
            "previous": previous,
            "correct": value == self.solution[row][col],
            "kept": kept,
        }
        self.log.append(move)
        return move

    def place(self, row: int, col: int, value: Symbol) -> Move:
        cell = self.grid[row][col]
        if cell.fixed:
            raise CellLockedError(f"{rc_to_key(row, col)} is a given")
        if value not in self.constraints.alphabet:
            raise ZooTilesError(f"{value!r} is not in the puzzle alphabet")
        previous = cell.value
        correct = value == self.solution[row][col]
        kept = correct or not self.rules.mark_wrong_entry
        self.history.append(clone_grid(self.grid))
        if kept:
            cell.value = value
        return self._record("placement", row, col, value, previous, kept)

    def clear(self, row: int, col: int) -> Move:
        cell = self.grid[row][col]
        if cell.fixed:
            raise CellLockedError(f"{rc_to_key(row, col)} is a given")
        self.history.append(clone_grid(self.grid))
        previous, cell.value = cell.value, None
        move = self._record("clear", row, col, None, previous, True)
        move["correct"] = False
        return move

    def hint(self) -> Optional[Move]:
        """Fill the first cell (row-major) that differs from the solution; None when solved."""
        if not self.rules.allow_hint:
            raise RuleDisabledError(f"hints are disabled in {self.mode} mode")
        n = self.constraints.grid_size
        for r in range(n):
            for c in range(n):
                if self.grid[r][c].value != self.solution[r][c]:
                    self.history.append(clone_grid(self.grid))
                    previous = self.grid[r][c].value
                    self.grid[r][c].value = self.solution[r][c]
                    return self._record("hint", r, c, self.solution[r][c], previous, True)
        return None

    def undo(self) -> bool:
        if not self.rules.allow_undo:
            raise RuleDisabledError(f"undo is disabled in {self.mode} mode")
        if not self.history:
            return False
        self.grid = self.history.pop()
        if self.log:
            self.log.pop()
        self.moves = max(0, self.moves - 1)
        return True

    def reset(self) -> None:
        if not self.rules.allow_reset:
            raise RuleDisabledError(f"reset is disabled in {self.mode} mode")
        self.grid = clone_grid(self.puzzle)
        self.history.clear()
        self.log.clear()
        self.moves = 0

    def completed_symbols(self) -> set[Symbol]:
        """Symbols whose every solution position already holds that symbol."""
        done = set(self.constraints.alphabet)
        for r, row in enumerate(self.solution):
            for c, want in enumerate(row):
                if self.grid[r][c].value != want:
                    done.discard(want)
        return done

    def conflicts(self) -> list[Conflict]:
        return validate(self.grid, self.constraints)["conflicts"]

    def is_complete(self) -> bool:
        return is_complete(self.grid, self.constraints)

    def values(self):
        return to_values(self.grid)
