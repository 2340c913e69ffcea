import random

import pytest

from kenken.puzzle.common import (Difficulty, DIFFICULTY_SETTINGS, InvalidPuzzleSizeError,
                                  Operation, MIN_SIZE, MAX_SIZE)
from kenken.puzzle.generator import PuzzleGenerator, generate_puzzle
from kenken.puzzle.generators import build_solution_grid, generate_cages
from kenken.puzzle.generators.cage_gen import _choose_pair_operation
from kenken.puzzle.verifier import PuzzleVerifier

ALL_SIZES = range(MIN_SIZE, MAX_SIZE + 1)
DIFFICULTIES = ["easy", "medium", "hard"]


def _sample_puzzles(seeds=range(15)):
    for seed in seeds:
        rng = random.Random(seed)
        for size in ALL_SIZES:
            for difficulty in DIFFICULTIES:
                yield size, difficulty, generate_puzzle(size, difficulty, rng=rng)


# --- Solution grid ---

def test_size_three_solution_is_fixed_cyclic_grid():
    assert build_solution_grid(3) == [[1, 2, 3], [2, 3, 1], [3, 1, 2]]


@pytest.mark.parametrize("size", ALL_SIZES)
def test_solution_is_latin_square(size):
    grid = build_solution_grid(size)
    expected = list(range(1, size + 1))
    for row in grid:
        assert sorted(row) == expected
    for j in range(size):
        assert sorted(grid[i][j] for i in range(size)) == expected


def test_solution_grid_formula():
    grid = build_solution_grid(6)
    assert all(grid[i][j] == ((i + j) % 6) + 1 for i in range(6) for j in range(6))


# --- Cage partitioning ---

def test_cages_partition_every_cell_exactly_once():
    for size, _difficulty, puzzle in _sample_puzzles():
        cells = [cell for cage in puzzle.cages for cell in cage.cells]
        assert len(cells) == len(set(cells)) == size * size
        assert set(cells) == {(r, c) for r in range(size) for c in range(size)}


def test_cage_targets_match_solution():
    for _size, _difficulty, puzzle in _sample_puzzles():
        for cage in puzzle.cages:
            values = [puzzle.solution[r][c] for r, c in cage.cells]
            if cage.operation == Operation.IDENTITY:
                assert len(values) == 1 and cage.target == values[0]
            elif cage.operation == Operation.ADD:
                assert cage.target == sum(values)
            elif cage.operation == Operation.SUBTRACT:
                assert len(values) == 2 and cage.target == abs(values[0] - values[1])
            elif cage.operation == Operation.MULTIPLY:
                assert len(values) == 2 and cage.target == values[0] * values[1]
            elif cage.operation == Operation.DIVIDE:
                high, low = max(values), min(values)
                assert len(values) == 2 and high % low == 0 and cage.target == high // low


def test_pair_validity_constraints_hold():
    for size, _difficulty, puzzle in _sample_puzzles():
        for cage in puzzle.cages:
            if len(cage.cells) != 2:
                continue
            a, b = (puzzle.solution[r][c] for r, c in cage.cells)
            if cage.operation == Operation.DIVIDE:
                assert max(a, b) % min(a, b) == 0
            if cage.operation == Operation.MULTIPLY:
                assert a * b <= size * size


def test_cages_are_connected_walks():
    for _size, _difficulty, puzzle in _sample_puzzles(range(5)):
        for cage in puzzle.cages:
            # Each cell after the seed is adjacent to the one added before it
            for prev, cell in zip(cage.cells, cage.cells[1:]):
                assert abs(prev[0] - cell[0]) + abs(prev[1] - cell[1]) == 1


@pytest.mark.parametrize("difficulty", DIFFICULTIES)
def test_cage_size_and_operations_follow_difficulty(difficulty):
    settings = DIFFICULTY_SETTINGS[Difficulty(difficulty)]
    rng = random.Random(99)
    for _ in range(20):
        puzzle = generate_puzzle(6, difficulty, rng=rng)
        for cage in puzzle.cages:
            assert 1 <= len(cage.cells) <= settings.max_cage_size
            assert cage.operation in settings.preferred_operations


def test_larger_cages_always_add():
    rng = random.Random(5)
    seen_large = False
    for _ in range(20):
        for cage in generate_puzzle(7, "hard", rng=rng).cages:
            if len(cage.cells) >= 3:
                seen_large = True
                assert cage.operation == Operation.ADD
    assert seen_large


def test_single_cell_cages_are_identity():
    solution = build_solution_grid(4)
    cages = generate_cages(solution, 1, [Operation.ADD, Operation.MULTIPLY], rng=random.Random(0))
    assert len(cages) == 16
    for cage in cages:
        r, c = cage.cells[0]
        assert cage.operation == Operation.IDENTITY
        assert cage.target == solution[r][c]


def test_same_seed_reproduces_cages():
    first = generate_puzzle(5, "hard", rng=random.Random(2024))
    second = generate_puzzle(5, "hard", rng=random.Random(2024))
    assert first.to_dict() == second.to_dict()


def test_generate_cages_rejects_bad_parameters():
    solution = build_solution_grid(3)
    with pytest.raises(ValueError):
        generate_cages(solution, 0, [Operation.ADD])
    with pytest.raises(ValueError):
        generate_cages(solution, 2, [])


def test_pair_operation_never_picks_invalid_divide_or_multiply():
    rng = random.Random(3)
    for _ in range(50):
        op, target = _choose_pair_operation(3, 2, 3, [Operation.DIVIDE, Operation.MULTIPLY], rng)
        # 3/2 is inexact; 3*2 = 6 <= 9
        assert (op, target) == (Operation.MULTIPLY, 6)


def test_pair_operation_falls_back_to_add():
    op, target = _choose_pair_operation(3, 2, 3, [Operation.IDENTITY], random.Random(0))
    assert (op, target) == (Operation.ADD, 5)


# --- Assembler ---

@pytest.mark.parametrize("size", [2, 8, 0, -1])
def test_invalid_sizes_raise(size):
    with pytest.raises(InvalidPuzzleSizeError):
        generate_puzzle(size, "easy")


def test_invalid_size_error_is_value_error():
    with pytest.raises(ValueError):
        generate_puzzle(8, "medium")


@pytest.mark.parametrize("size", [3, 7])
def test_boundary_sizes_succeed(size):
    puzzle = generate_puzzle(size, "medium")
    assert puzzle.size == size


def test_unknown_difficulty_raises():
    with pytest.raises(ValueError):
        generate_puzzle(4, "impossible")


def test_easy_three_by_three_end_to_end():
    puzzle = generate_puzzle(3, "easy", rng=random.Random(11))
    data = puzzle.to_dict()
    assert data["grid"] == [[0, 0, 0], [0, 0, 0], [0, 0, 0]]
    assert data["solution"] == [[1, 2, 3], [2, 3, 1], [3, 1, 2]]
    assert data["moves"] == []
    assert data["size"] == 3
    cells = [tuple(cell) for cage in data["cages"] for cell in cage["cells"]]
    assert sorted(cells) == [(r, c) for r in range(3) for c in range(3)]
    for cage in data["cages"]:
        assert cage["operation"] in {"+", "*", "="}
        assert len(cage["cells"]) <= 2


def test_play_grid_is_always_blank():
    for size, _difficulty, puzzle in _sample_puzzles(range(3)):
        assert puzzle.grid == [[0] * size for _ in range(size)]
        assert puzzle.moves == []


def test_generated_puzzles_pass_verifier():
    for _size, _difficulty, puzzle in _sample_puzzles(range(5)):
        is_valid, problems = PuzzleVerifier(puzzle).verify()
        assert is_valid, problems


def test_puzzle_generator_marks_puzzles_verified(seeded_generator):
    puzzle = seeded_generator.generate_puzzle(5, Difficulty.HARD)
    assert puzzle.is_verified


def test_puzzle_generator_seed_is_reproducible():
    a = PuzzleGenerator(seed=8).generate_puzzle(6, "medium")
    b = PuzzleGenerator(seed=8).generate_puzzle(6, "medium")
    assert a.to_dict() == b.to_dict()


def test_puzzle_generator_rejects_non_int_seed():
    with pytest.raises(ValueError):
        PuzzleGenerator(seed="abc")
