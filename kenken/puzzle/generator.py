from typing import Optional, Union
import random
import logging

from .common import (Difficulty, DIFFICULTY_SETTINGS, InvalidPuzzleSizeError,
                     MIN_SIZE, MAX_SIZE)
from .puzzle_types import KenKenPuzzle
from .verifier import PuzzleVerifier
from .generators import build_solution_grid, generate_cages

logger = logging.getLogger(__name__)


def _coerce_difficulty(difficulty: Union[str, Difficulty]) -> Difficulty:
    if isinstance(difficulty, Difficulty):
        return difficulty
    try:
        return Difficulty(difficulty)
    except ValueError:
        raise ValueError(f"Unknown difficulty {difficulty!r}. Expected one of: {[d.value for d in Difficulty]}") from None


def generate_puzzle(size: int, difficulty: Union[str, Difficulty],
                    rng: Optional[random.Random] = None) -> KenKenPuzzle:
    """Generates a KenKen puzzle of the given size and difficulty.

    Raises InvalidPuzzleSizeError when size is outside MIN_SIZE..MAX_SIZE. The
    returned puzzle has an all-zero play grid and an empty move list.
    """
    if not isinstance(size, int) or isinstance(size, bool) or size < MIN_SIZE or size > MAX_SIZE:
        raise InvalidPuzzleSizeError(size)
    difficulty = _coerce_difficulty(difficulty)
    settings = DIFFICULTY_SETTINGS[difficulty]

    solution = build_solution_grid(size)
    grid = [[0] * size for _ in range(size)]
    cages = generate_cages(solution, settings.max_cage_size, settings.preferred_operations, rng=rng)

    return KenKenPuzzle(size=size, grid=grid, solution=solution, cages=cages, moves=[])


class PuzzleGenerator:
    """Generates verified KenKen puzzles from a single owned random source."""

    def __init__(self, seed: Optional[int] = None):
        if seed is not None and not isinstance(seed, int):
            raise ValueError("seed must be an integer or None")
        self.seed = seed
        self.rng = random.Random(seed)

    def generate_puzzle(self, size: int, difficulty: Union[str, Difficulty]) -> KenKenPuzzle:
        """Generates a puzzle and runs the verifier on it."""
        logger.info(f"Generating {size}x{size} puzzle. Difficulty: {difficulty}")
        puzzle = generate_puzzle(size, difficulty, rng=self.rng)

        is_valid, problems = PuzzleVerifier(puzzle).verify()
        puzzle.is_verified = is_valid
        if not is_valid:
            logger.error(f"Generated puzzle failed verification: {problems}")

        logger.info(f"Generated {size}x{size} puzzle with {len(puzzle.cages)} cages.")
        return puzzle
