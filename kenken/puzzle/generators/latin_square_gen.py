from typing import List
import logging

logger = logging.getLogger(__name__)


def build_solution_grid(size: int) -> List[List[int]]:
    """Builds the cyclic Latin square grid[i][j] = ((i + j) % size) + 1.

    Every row and every column is a permutation of 1..size. Deterministic, so the
    same size always yields the same grid; `size` is validated by the caller.
    """
    grid = [[((i + j) % size) + 1 for j in range(size)] for i in range(size)]
    logger.debug(f"Built {size}x{size} cyclic solution grid")
    return grid
