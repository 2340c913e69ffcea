from typing import Iterable, List, Optional, Tuple
import random
import logging

from ..common import Operation
from ..puzzle_types import Cage, Cell, Grid

logger = logging.getLogger(__name__)

NEIGHBOUR_OFFSETS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def _free_neighbours(cell: Cell, used: List[List[bool]], size: int) -> List[Cell]:
    """In-bounds, unassigned 4-neighbours of `cell`."""
    row, col = cell
    neighbours = []
    for dr, dc in NEIGHBOUR_OFFSETS:
        r, c = row + dr, col + dc
        if 0 <= r < size and 0 <= c < size and not used[r][c]:
            neighbours.append((r, c))
    return neighbours


def _choose_pair_operation(a: int, b: int, size: int, preferred: List[Operation],
                           rng: random.Random) -> Tuple[Operation, int]:
    """Picks an operation valid for the pair (a, b) and computes its target."""
    high, low = max(a, b), min(a, b)
    valid_operations = []
    for op in preferred:
        if op == Operation.DIVIDE and high % low == 0:
            valid_operations.append(op)
        elif op == Operation.MULTIPLY and a * b <= size * size:
            valid_operations.append(op)
        elif op in (Operation.SUBTRACT, Operation.ADD):
            valid_operations.append(op)

    operation = rng.choice(valid_operations) if valid_operations else None
    if operation == Operation.DIVIDE:
        return operation, high // low
    if operation == Operation.MULTIPLY:
        return operation, a * b
    if operation == Operation.SUBTRACT:
        return operation, high - low
    # Anything else degrades to a plain sum
    return Operation.ADD, a + b


def generate_cages(solution: Grid, max_cage_size: int, preferred_operations: Iterable[Operation],
                   rng: Optional[random.Random] = None) -> List[Cage]:
    """Greedily partitions every cell of `solution` into contiguous cages.

    Cells are scanned row-major. Each unassigned cell seeds a cage with a random
    target size in 1..max_cage_size that grows as a random walk from the most
    recently added cell, stopping early when boxed in. Cages are never revisited.
    """
    if max_cage_size < 1:
        raise ValueError(f"max_cage_size must be at least 1, got {max_cage_size}")
    rng = rng if rng is not None else random.Random()
    # Fixed order so a seeded rng reproduces the same operations
    preferred = sorted(set(preferred_operations), key=lambda op: list(Operation).index(op))
    if not preferred:
        raise ValueError("preferred_operations must not be empty")

    size = len(solution)
    used = [[False] * size for _ in range(size)]
    cages: List[Cage] = []

    for i in range(size):
        for j in range(size):
            if used[i][j]:
                continue

            cage_size = min(max_cage_size, int(rng.random() * max_cage_size) + 1)
            cells: List[Cell] = [(i, j)]
            used[i][j] = True

            for _ in range(cage_size - 1):
                candidates = _free_neighbours(cells[-1], used, size)
                if not candidates:
                    break
                next_cell = rng.choice(candidates)
                cells.append(next_cell)
                used[next_cell[0]][next_cell[1]] = True

            values = [solution[r][c] for r, c in cells]
            if len(cells) == 1:
                operation, target = Operation.IDENTITY, values[0]
            elif len(cells) == 2:
                operation, target = _choose_pair_operation(values[0], values[1], size, preferred, rng)
            else:
                operation, target = Operation.ADD, sum(values)

            cage = Cage(cells=cells, operation=operation, target=target)
            logger.debug(f"Cage {len(cages)}: {cage}")
            cages.append(cage)

    return cages
