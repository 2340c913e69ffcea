from typing import List, Set, Tuple
import logging

from .common import Operation
from .puzzle_types import Cell, KenKenPuzzle

logger = logging.getLogger(__name__)


class PuzzleVerifier:
    """Checks a generated KenKen puzzle against the guarantees the generator makes.

    This is not a solver: it only confirms that the planted solution is a Latin
    square, that the cages partition the grid into connected groups, and that
    every cage target is reachable from the planted solution.
    """

    def __init__(self, puzzle: KenKenPuzzle):
        self.puzzle = puzzle
        self.size = puzzle.size
        self.problems: List[str] = []

    def verify(self) -> Tuple[bool, List[str]]:
        """
        Runs every check.

        Returns:
            (True, []) when the puzzle is consistent, otherwise (False, problems)
            with one human-readable message per violation.
        """
        self.problems = []
        self._check_solution_is_latin_square()
        self._check_play_grid_is_blank()
        self._check_cages_partition_grid()
        self._check_cages()
        if self.problems:
            logger.warning(f"Puzzle verification failed with {len(self.problems)} problem(s): {self.problems[:3]}")
        else:
            logger.debug(f"Puzzle verification passed ({self.size}x{self.size}, {len(self.puzzle.cages)} cages)")
        return (not self.problems, list(self.problems))

    def _check_solution_is_latin_square(self):
        expected = set(range(1, self.size + 1))
        solution = self.puzzle.solution
        for i, row in enumerate(solution):
            if set(row) != expected or len(row) != self.size:
                self.problems.append(f"Row {i} is not a permutation of 1..{self.size}: {row}")
        for j in range(self.size):
            column = [solution[i][j] for i in range(self.size)]
            if set(column) != expected:
                self.problems.append(f"Column {j} is not a permutation of 1..{self.size}: {column}")

    def _check_play_grid_is_blank(self):
        if any(value != 0 for row in self.puzzle.grid for value in row):
            self.problems.append("Play grid contains non-zero values")

    def _check_cages_partition_grid(self):
        seen: Set[Cell] = set()
        for index, cage in enumerate(self.puzzle.cages):
            for cell in cage.cells:
                r, c = cell
                if not (0 <= r < self.size and 0 <= c < self.size):
                    self.problems.append(f"Cage {index} has out-of-bounds cell {cell}")
                elif cell in seen:
                    self.problems.append(f"Cell {cell} belongs to more than one cage")
                seen.add(cell)
        missing = [(r, c) for r in range(self.size) for c in range(self.size) if (r, c) not in seen]
        if missing:
            self.problems.append(f"Cells not covered by any cage: {missing}")

    def _check_cages(self):
        size_squared = self.size * self.size
        for index, cage in enumerate(self.puzzle.cages):
            if not self._is_connected(cage.cells):
                self.problems.append(f"Cage {index} is not contiguous: {cage.cells}")
            try:
                values = [self.puzzle.solution[r][c] for r, c in cage.cells]
            except IndexError:
                continue  # Already reported as out of bounds
            if not cage.is_satisfied_by(self.puzzle.solution):
                self.problems.append(f"Cage {index} target {cage.target} does not match solution values {values} under {cage.operation.name}")
            if cage.operation == Operation.IDENTITY and len(cage.cells) != 1:
                self.problems.append(f"Cage {index} uses IDENTITY on {len(cage.cells)} cells")
            if len(values) == 2:
                a, b = values
                if cage.operation == Operation.DIVIDE and (min(a, b) == 0 or max(a, b) % min(a, b) != 0):
                    self.problems.append(f"Cage {index} divides {a} and {b} without an exact quotient")
                if cage.operation == Operation.MULTIPLY and a * b > size_squared:
                    self.problems.append(f"Cage {index} product {a * b} exceeds {size_squared}")

    @staticmethod
    def _is_connected(cells: List[Cell]) -> bool:
        """4-directional connectivity of a cell set (flood fill from the first cell)."""
        remaining = set(cells)
        stack = [cells[0]]
        remaining.discard(cells[0])
        while stack:
            r, c = stack.pop()
            for neighbour in ((r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1)):
                if neighbour in remaining:
                    remaining.discard(neighbour)
                    stack.append(neighbour)
        return not remaining
