# tests/test_session.py
import pytest

from zootiles.generator import generate
from zootiles.session import PUZZLE_RULES, CellLockedError, PuzzleRules, PuzzleSession, RuleDisabledError
from zootiles.solver_core import ZooTilesError, key_to_rc


@pytest.fixture
def session(letters6):
    payload = generate(letters6, 0.5, seed=3)
    return PuzzleSession.from_payload(payload, letters6)


def _first_blank(session):
    for r, row in enumerate(session.grid):
        for c, cell in enumerate(row):
            if cell.value is None:
                return r, c
    raise AssertionError("no blank")


def _wrong_value(session, r, c):
    return next(s for s in session.constraints.alphabet if s != session.solution[r][c])


def test_rules_per_mode():
    assert PUZZLE_RULES["sequential"].allow_next
    assert not PUZZLE_RULES["daily"].allow_next
    assert PUZZLE_RULES["weekly"] == PuzzleRules()


def test_correct_placement_is_kept(session):
    r, c = _first_blank(session)
    move = session.place(r, c, session.solution[r][c])
    assert move["correct"] and move["kept"]
    assert move["index"] == 1 and key_to_rc(move["cell"]) == (r, c)
    assert session.grid[r][c].value == session.solution[r][c]


def test_wrong_entry_is_rejected_when_marked(session):
    r, c = _first_blank(session)
    move = session.place(r, c, _wrong_value(session, r, c))
    assert not move["correct"] and not move["kept"]
    assert session.grid[r][c].value is None
    assert session.moves == 1


def test_wrong_entry_kept_without_marking(letters6):
    payload = generate(letters6, 0.5, seed=3)
    s = PuzzleSession.from_payload(payload, letters6)
    s.rules = PuzzleRules(mark_wrong_entry=False)
    r, c = _first_blank(s)
    s.place(r, c, _wrong_value(s, r, c))
    assert s.grid[r][c].value is not None


def test_givens_are_locked(session):
    for r, row in enumerate(session.grid):
        for c, cell in enumerate(row):
            if cell.fixed:
                with pytest.raises(CellLockedError):
                    session.place(r, c, cell.value)
                with pytest.raises(CellLockedError):
                    session.clear(r, c)
                return


def test_unknown_symbol_is_refused(session):
    r, c = _first_blank(session)
    with pytest.raises(ZooTilesError):
        session.place(r, c, "Z")


def test_hints_finish_the_puzzle(session):
    assert not session.is_complete()
    blanks = sum(1 for row in session.grid for cell in row if cell.value is None)
    for _ in range(blanks):
        assert session.hint()["type"] == "hint"
    assert session.hint() is None
    assert session.is_complete()
    assert session.completed_symbols() == set(session.constraints.alphabet)
    assert session.conflicts() == []


def test_undo_and_reset(session):
    start = session.values()
    r, c = _first_blank(session)
    session.place(r, c, session.solution[r][c])
    session.clear(r, c)
    assert session.undo()
    assert session.grid[r][c].value == session.solution[r][c]
    assert session.undo()
    assert session.values() == start
    assert not session.undo()
    session.hint()
    session.reset()
    assert session.values() == start and session.moves == 0


def test_disabled_rules_raise(session):
    session.rules = PuzzleRules(allow_hint=False, allow_undo=False, allow_reset=False)
    with pytest.raises(RuleDisabledError):
        session.hint()
    with pytest.raises(RuleDisabledError):
        session.undo()
    with pytest.raises(RuleDisabledError):
        session.reset()


def test_unknown_mode(letters6):
    payload = generate(letters6, 0.5, seed=3)
    with pytest.raises(ZooTilesError):
        PuzzleSession.from_payload(payload, letters6, mode="monthly")


def test_undo_drops_the_move_from_the_log(session):
    r, c = _first_blank(session)
    session.place(r, c, session.solution[r][c])
    assert session.undo()
    assert session.log == [] and session.moves == 0
    first = session.hint()
    second = session.hint()
    assert [m["index"] for m in session.log] == [1, 2]
    assert (first["index"], second["index"]) == (1, 2)
    session.undo()
    assert session.place(r, c, session.solution[r][c])["index"] == 2
    assert [m["index"] for m in session.log] == [1, 2]


def test_session_refuses_foreign_symbols_in_payload(letters6):
    payload = generate(letters6, 0.0, seed=3)
    payload["solution"][0][0] = "Z"
    with pytest.raises(ZooTilesError):
        PuzzleSession.from_payload(payload, letters6)
