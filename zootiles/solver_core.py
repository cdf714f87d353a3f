"""Core Zoo-Tiles grid model: cells, constraint descriptors, grid configs, index math, house iterators and the incremental placement check."""

# solver_core.py
# Grid model for the animal Latin-square variant:
# - Cell / Constraints / grid configs (6, 8, 10, 12 with non-square subgrids)
# - row/col/box unit iterators and r{row}c{col} cell keys
# - is_valid_placement, the O(N) check the solver runs per candidate
# A grid is NxN, either Cell objects or plain values. None = empty.

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Optional, Sequence, Union

Symbol = str
Coord = tuple[int, int]  # (row, col) 0-based


class ZooTilesError(ValueError):
    """Base class for precondition breaches (never raised for normal outcomes)."""


class InvalidConstraintsError(ZooTilesError):
    pass


class UnsupportedGridSizeError(ZooTilesError):
    pass


class GridShapeError(ZooTilesError):
    pass


class ForeignSymbolError(ZooTilesError):
    pass


@dataclass
class Cell:
    value: Optional[Symbol] = None  # None = empty
    fixed: bool = False  # given by the puzzle, not editable by the player


Grid = list[list[Cell]]
ValueGrid = list[list[Optional[Symbol]]]
AnyGrid = Union[Grid, ValueGrid]


# size -> (subgrid_rows, subgrid_cols)
GRID_CONFIGS = MappingProxyType({6: (2, 3), 8: (2, 4), 10: (2, 5), 12: (4, 3)})

ANIMALS: tuple[Symbol, ...] = (
    "🦁",  # lion
    "🐯",  # tiger
    "🐘",  # elephant
    "🦓",  # zebra
    "🦒",  # giraffe
    "🐵",  # monkey
    "🐍",  # snake
    "🐢",  # turtle
    "🦅",  # eagle
    "🐬",  # dolphin
    "🐧",  # penguin
    "🦘",  # kangaroo
)


@dataclass(frozen=True)
class Constraints:
    """Shape of a puzzle: grid size, subgrid height/width and the symbol alphabet.

    Checked on construction: subgrid_rows * subgrid_cols == grid_size and the
    alphabet holds exactly grid_size distinct symbols.
    """

    grid_size: int
    subgrid_rows: int
    subgrid_cols: int
    alphabet: tuple[Symbol, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "alphabet", tuple(self.alphabet))
        n, r, c = self.grid_size, self.subgrid_rows, self.subgrid_cols
        if n <= 0 or r <= 0 or c <= 0:
            raise InvalidConstraintsError(f"grid and subgrid dimensions must be positive, got {n} ({r}x{c})")
        if r * c != n:
            raise InvalidConstraintsError(f"subgrid {r}x{c} does not tile a {n}x{n} grid (needs {r}*{c} == {n})")
        if len(self.alphabet) != n:
            raise InvalidConstraintsError(f"alphabet has {len(self.alphabet)} symbols, grid size is {n}")
        if len(set(self.alphabet)) != n:
            raise InvalidConstraintsError("alphabet symbols must be distinct")
        if any(s is None for s in self.alphabet):
            raise InvalidConstraintsError("None is reserved for empty cells")

    @property
    def boxes_down(self) -> int:
        return self.grid_size // self.subgrid_rows

    @property
    def boxes_across(self) -> int:
        return self.grid_size // self.subgrid_cols

    def as_dict(self) -> dict:
        return {
            "grid_size": self.grid_size,
            "subgrid_rows": self.subgrid_rows,
            "subgrid_cols": self.subgrid_cols,
            "alphabet": list(self.alphabet),
        }


def animal_alphabet(n: int) -> tuple[Symbol, ...]:
    if not 1 <= n <= len(ANIMALS):
        raise UnsupportedGridSizeError(f"only {len(ANIMALS)} animals available, asked for {n}")
    return ANIMALS[:n]


def constraints_for(size: int, alphabet: Optional[Sequence[Symbol]] = None) -> Constraints:
    """Constraints for one of the supported sizes (6, 8, 10, 12); animals by default."""
    if size not in GRID_CONFIGS:
        raise UnsupportedGridSizeError(f"unsupported grid size {size}; expected one of {sorted(GRID_CONFIGS)}")
    rows, cols = GRID_CONFIGS[size]
    if alphabet is None:
        alphabet = animal_alphabet(size)
    return Constraints(size, rows, cols, tuple(alphabet))


# ----------------------------- cell keys ------------------------------


def rc_to_key(r: int, c: int) -> str:
    """0-based (row, col) -> 1-based 'r{row}c{col}' key."""
    return f"r{r + 1}c{c + 1}"


def key_to_rc(key: str) -> Coord:
    r = int(key.split("c")[0][1:])
    c = int(key.split("c")[1])
    return (r - 1, c - 1)


# ----------------------------- grids ------------------------------


def empty_grid(constraints: Constraints) -> Grid:
    n = constraints.grid_size
    return [[Cell() for _ in range(n)] for _ in range(n)]


def is_cell_grid(grid: AnyGrid) -> bool:
    for row in grid:
        for v in row:
            return isinstance(v, Cell)
    return False


def value_at(grid: AnyGrid, r: int, c: int) -> Optional[Symbol]:
    v = grid[r][c]
    return v.value if isinstance(v, Cell) else v


def to_values(grid: AnyGrid) -> ValueGrid:
    return [[v.value if isinstance(v, Cell) else v for v in row] for row in grid]


def from_values(values: ValueGrid, fixed: Optional[bool] = None) -> Grid:
    """Wrap a value grid in Cells. By default every filled cell becomes a given."""
    return [[Cell(v, (v is not None) if fixed is None else fixed) for v in row] for row in values]


def clone_grid(grid: AnyGrid) -> AnyGrid:
    return [[Cell(v.value, v.fixed) if isinstance(v, Cell) else v for v in row] for row in grid]


def check_shape(grid: AnyGrid, constraints: Constraints) -> None:
    n = constraints.grid_size
    if len(grid) != n or any(len(row) != n for row in grid):
        raise GridShapeError(f"grid is not {n}x{n}")


def check_symbols(grid: AnyGrid, constraints: Constraints) -> None:
    """Every filled cell must hold an alphabet symbol."""
    allowed = set(constraints.alphabet)
    for r, row in enumerate(grid):
        for c, v in enumerate(row):
            v = v.value if isinstance(v, Cell) else v
            if v is not None and v not in allowed:
                raise ForeignSymbolError(f"{rc_to_key(r, c)} holds {v!r}, which is not in the alphabet")


def find_empty_cell(grid: AnyGrid) -> Optional[Coord]:
    """First empty cell in row-major order, or None when the grid is full."""
    for r, row in enumerate(grid):
        for c, v in enumerate(row):
            if (v.value if isinstance(v, Cell) else v) is None:
                return (r, c)
    return None


def count_empty(grid: AnyGrid) -> int:
    return sum(1 for row in grid for v in row if (v.value if isinstance(v, Cell) else v) is None)


# ----------------------------- units ------------------------------


def subgrid_origin(r: int, c: int, constraints: Constraints) -> Coord:
    return (
        (r // constraints.subgrid_rows) * constraints.subgrid_rows,
        (c // constraints.subgrid_cols) * constraints.subgrid_cols,
    )


def subgrid_index(r: int, c: int, constraints: Constraints) -> int:
    """0-based box number, counted row-major across the grid of subgrids."""
    return (r // constraints.subgrid_rows) * constraints.boxes_across + (c // constraints.subgrid_cols)


def unit_cells_row(r: int, constraints: Constraints) -> list[Coord]:
    return [(r, c) for c in range(constraints.grid_size)]


def unit_cells_col(c: int, constraints: Constraints) -> list[Coord]:
    return [(r, c) for r in range(constraints.grid_size)]


def unit_cells_box(b: int, constraints: Constraints) -> list[Coord]:
    br, bc = divmod(b, constraints.boxes_across)
    r0 = br * constraints.subgrid_rows
    c0 = bc * constraints.subgrid_cols
    return [(r0 + i, c0 + j) for i in range(constraints.subgrid_rows) for j in range(constraints.subgrid_cols)]


def iter_units(constraints: Constraints) -> Iterator[tuple[str, str, list[Coord]]]:
    """Yield (key, label, cells) for every row, then every column, then every subgrid."""
    n = constraints.grid_size
    for r in range(n):
        yield f"r{r + 1}", f"row {r + 1}", unit_cells_row(r, constraints)
    for c in range(n):
        yield f"c{c + 1}", f"column {c + 1}", unit_cells_col(c, constraints)
    for b in range(constraints.boxes_down * constraints.boxes_across):
        br, bc = divmod(b, constraints.boxes_across)
        yield f"b{b + 1}", f"subgrid ({br + 1}, {bc + 1})", unit_cells_box(b, constraints)


def is_valid_placement(
    grid: AnyGrid, constraints: Constraints, row: int, col: int, value: Optional[Symbol]
) -> bool:
    """True if writing `value` at (row, col) creates no duplicate in its row, column or subgrid.

    The cell being overwritten is ignored; clearing a cell (value None) is always valid.
    """
    if value is None:
        return True
    n = constraints.grid_size
    for j in range(n):
        if j != col and value_at(grid, row, j) == value:
            return False
    for i in range(n):
        if i != row and value_at(grid, i, col) == value:
            return False
    r0, c0 = subgrid_origin(row, col, constraints)
    for i in range(r0, r0 + constraints.subgrid_rows):
        for j in range(c0, c0 + constraints.subgrid_cols):
            if (i, j) != (row, col) and value_at(grid, i, j) == value:
                return False
    return True


def candidates(grid: AnyGrid, constraints: Constraints, row: int, col: int) -> list[Symbol]:
    """Alphabet symbols that could go at an empty (row, col); [] for filled cells."""
    if value_at(grid, row, col) is not None:
        return []
    return [s for s in constraints.alphabet if is_valid_placement(grid, constraints, row, col, s)]
