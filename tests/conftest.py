# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "zootiles", "apps" and types_zootiles import in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from zootiles.solver_core import Constraints, constraints_for  # noqa: E402

LETTERS = tuple("ABCDEFGHIJKL")


def latin_values(constraints: Constraints):
    """A complete valid grid for any RxC subgrid shape (shifted-row pattern)."""
    n, rows, cols = constraints.grid_size, constraints.subgrid_rows, constraints.subgrid_cols
    a = constraints.alphabet
    return [[a[(cols * (r % rows) + r // rows + c) % n] for c in range(n)] for r in range(n)]


@pytest.fixture
def letters6():
    return Constraints(6, 2, 3, LETTERS[:6])


@pytest.fixture
def letters_for():
    def make(size):
        return constraints_for(size, LETTERS[:size])

    return make


@pytest.fixture
def latin():
    return latin_values
