import json

import pytest

from kenken.core.game_state import GameState, GridCell
from kenken.puzzle.common import Difficulty, InvalidPuzzleSizeError
from kenken.puzzle.generator import PuzzleGenerator


@pytest.fixture
def state(tmp_path):
    game = GameState(generator=PuzzleGenerator(seed=3), save_path=str(tmp_path / "save.json"))
    game.start_new_puzzle(3, Difficulty.EASY)
    return game


def _fill_solution(game):
    for i, row in enumerate(game.puzzle.solution):
        for j, value in enumerate(row):
            game.selected_cell = (i, j)
            game.make_move(value)


def test_new_puzzle_starts_blank(state):
    assert state.size == 3
    assert all(cell == GridCell() for row in state.grid for cell in row)
    assert state.selected_cell is None
    assert not state.can_undo
    assert state.difficulty == Difficulty.EASY


def test_start_new_puzzle_rejects_bad_size(state):
    with pytest.raises(InvalidPuzzleSizeError):
        state.start_new_puzzle(9, Difficulty.HARD)


def test_select_cell_toggles(state):
    assert state.select_cell(1, 2) == (1, 2)
    assert state.select_cell(0, 0) == (0, 0)
    assert state.select_cell(0, 0) is None


def test_select_cell_out_of_bounds(state):
    with pytest.raises(IndexError):
        state.select_cell(3, 0)


def test_move_without_selection_is_ignored(state):
    assert not state.make_move(1)
    assert not state.can_undo


def test_move_rejects_out_of_range_value(state):
    state.select_cell(0, 0)
    with pytest.raises(ValueError):
        state.make_move(4)
    with pytest.raises(ValueError):
        state.make_move(0)


def test_entering_value_clears_scribbles(state):
    state.select_cell(0, 0)
    state.toggle_scribble_mode()
    state.make_move(1)
    state.make_move(3)
    assert state.grid[0][0].scribbles == {1, 3}
    assert state.grid[0][0].value == 0

    state.toggle_scribble_mode()
    state.make_move(2)
    assert state.grid[0][0] == GridCell(2)


def test_scribble_toggles_off(state):
    state.select_cell(1, 1)
    state.toggle_scribble_mode()
    state.make_move(2)
    state.make_move(2)
    assert state.grid[1][1].scribbles == set()


def test_undo_restores_previous_cell(state):
    state.select_cell(0, 0)
    state.toggle_scribble_mode()
    state.make_move(2)
    state.toggle_scribble_mode()
    state.make_move(3)
    assert state.grid[0][0] == GridCell(3)

    assert state.undo()
    assert state.grid[0][0] == GridCell(0, {2})
    assert state.undo()
    assert state.grid[0][0] == GridCell()
    assert not state.undo()


def test_undo_snapshot_is_independent(state):
    state.select_cell(0, 0)
    state.toggle_scribble_mode()
    state.make_move(1)
    state.make_move(2)
    state.undo()
    state.grid[0][0].scribbles.add(3)
    state.undo()
    assert state.grid[0][0] == GridCell()


def test_clear_cell_is_undoable(state):
    state.select_cell(2, 2)
    state.make_move(1)
    assert state.clear_cell()
    assert state.grid[2][2] == GridCell()
    assert not state.clear_cell()
    state.undo()
    assert state.grid[2][2] == GridCell(1)


def test_validate_solution_counts_errors(state):
    assert state.validate_solution() == 9
    _fill_solution(state)
    assert state.validate_solution() == 0
    assert state.is_solved()

    state.selected_cell = (0, 0)
    wrong = 2 if state.puzzle.solution[0][0] != 2 else 3
    state.make_move(wrong)
    assert state.validate_solution() == 1


def test_reset_clears_entries(state):
    _fill_solution(state)
    state.reset()
    assert state.validate_solution() == 9
    assert not state.can_undo


def test_save_and_load_round_trip(state, tmp_path):
    state.select_cell(0, 1)
    state.make_move(2)
    state.select_cell(1, 0)
    state.toggle_scribble_mode()
    state.make_move(1)
    state.make_move(3)
    state.save_game()

    restored = GameState(generator=PuzzleGenerator(seed=0), save_path=state.save_path)
    assert restored.load_game()
    assert restored.puzzle.to_dict() == state.puzzle.to_dict()
    assert restored.difficulty == Difficulty.EASY
    assert restored.is_scribble_mode
    assert restored.grid[0][1] == GridCell(2)
    assert restored.grid[1][0] == GridCell(0, {1, 3})
    assert not restored.can_undo


def test_load_missing_save_returns_false(tmp_path):
    game = GameState(save_path=str(tmp_path / "missing.json"))
    assert not game.load_game()
    assert game.puzzle is None


def test_load_corrupt_save_leaves_blank_session(tmp_path):
    path = tmp_path / "save.json"
    path.write_text("{not json", encoding="utf-8")
    game = GameState(save_path=str(path))
    assert not game.load_game()
    assert game.puzzle is None


def test_load_skips_malformed_cells(state):
    state.save_game()
    with open(state.save_path, encoding="utf-8") as f:
        saved = json.load(f)
    saved["cells"][0][0] = {"value": 99, "scribbles": [1, "x", 7]}
    with open(state.save_path, "w", encoding="utf-8") as f:
        json.dump(saved, f)

    restored = GameState(save_path=state.save_path)
    assert restored.load_game()
    assert restored.grid[0][0] == GridCell(0, {1})


def test_load_newer_save_version_raises(state):
    state.save_version = GameState.SAVE_VERSION + 1
    state.save_game()
    with pytest.raises(RuntimeError):
        GameState(save_path=state.save_path).load_game()


@pytest.mark.parametrize("version", ["1", None, 1.0, True, [1]])
def test_load_rejects_non_integer_save_version(state, version):
    state.save_game()
    with open(state.save_path, encoding="utf-8") as f:
        saved = json.load(f)
    saved["save_version"] = version
    with open(state.save_path, "w", encoding="utf-8") as f:
        json.dump(saved, f)

    restored = GameState(save_path=state.save_path)
    assert not restored.load_game()
    assert restored.puzzle is None


def test_load_save_with_malformed_cage_leaves_blank_session(state):
    state.save_game()
    with open(state.save_path, encoding="utf-8") as f:
        saved = json.load(f)
    saved["puzzle"]["cages"][0]["cells"] = [[None, 0]]
    with open(state.save_path, "w", encoding="utf-8") as f:
        json.dump(saved, f)

    restored = GameState(save_path=state.save_path)
    assert not restored.load_game()
    assert restored.puzzle is None


def test_start_new_puzzle_accepts_difficulty_literal(state):
    state.start_new_puzzle(4, "hard")
    assert state.difficulty is Difficulty.HARD
    assert state.size == 4


def test_start_new_puzzle_rejects_unknown_difficulty(state):
    with pytest.raises(ValueError):
        state.start_new_puzzle(4, "expert")
    assert state.size == 3
