from kenken.puzzle.common import Operation
from kenken.puzzle.generators import build_solution_grid
from kenken.puzzle.puzzle_types import Cage, KenKenPuzzle
from kenken.puzzle.verifier import PuzzleVerifier


def _puzzle(cages, size=3, solution=None, grid=None):
    return KenKenPuzzle(
        size=size,
        grid=grid if grid is not None else [[0] * size for _ in range(size)],
        solution=solution if solution is not None else build_solution_grid(size),
        cages=cages,
    )


def _identity_cages(size=3):
    solution = build_solution_grid(size)
    return [Cage([(r, c)], Operation.IDENTITY, solution[r][c]) for r in range(size) for c in range(size)]


def test_all_identity_puzzle_is_valid():
    assert PuzzleVerifier(_puzzle(_identity_cages())).verify() == (True, [])


def test_detects_missing_cells():
    cages = _identity_cages()[:-1]
    ok, problems = PuzzleVerifier(_puzzle(cages)).verify()
    assert not ok
    assert any("not covered" in p for p in problems)


def test_detects_overlapping_cages():
    cages = _identity_cages() + [Cage([(0, 0)], Operation.IDENTITY, 1)]
    ok, problems = PuzzleVerifier(_puzzle(cages)).verify()
    assert not ok
    assert any("more than one cage" in p for p in problems)


def test_detects_wrong_target():
    cages = _identity_cages()
    cages[0] = Cage([(0, 0)], Operation.IDENTITY, 3)
    ok, problems = PuzzleVerifier(_puzzle(cages)).verify()
    assert not ok
    assert any("does not match" in p for p in problems)


def test_detects_disconnected_cage():
    # (0,0)=1 and (2,2)=2 are not adjacent
    cages = [c for c in _identity_cages() if c.cells[0] not in {(0, 0), (2, 2)}]
    cages.append(Cage([(0, 0), (2, 2)], Operation.ADD, 3))
    ok, problems = PuzzleVerifier(_puzzle(cages)).verify()
    assert not ok
    assert any("not contiguous" in p for p in problems)


def test_detects_oversized_product():
    big = _puzzle([Cage([(0, 0), (0, 1)], Operation.MULTIPLY, 20)], size=2, solution=[[4, 5], [5, 4]])
    ok, problems = PuzzleVerifier(big).verify()
    assert not ok
    assert any("exceeds" in p for p in problems)


def test_detects_inexact_division():
    puzzle = _puzzle([Cage([(0, 0), (0, 1)], Operation.DIVIDE, 1)], size=2, solution=[[2, 3], [3, 2]])
    ok, problems = PuzzleVerifier(puzzle).verify()
    assert not ok
    assert any("without an exact quotient" in p for p in problems)


def test_detects_non_latin_solution_and_filled_grid():
    solution = [[1, 2, 3], [1, 2, 3], [3, 1, 2]]
    grid = [[0, 0, 0], [0, 5, 0], [0, 0, 0]]
    cages = [Cage([(r, c)], Operation.IDENTITY, solution[r][c]) for r in range(3) for c in range(3)]
    ok, problems = PuzzleVerifier(_puzzle(cages, solution=solution, grid=grid)).verify()
    assert not ok
    assert any(p.startswith("Column") for p in problems)
    assert "Play grid contains non-zero values" in problems
