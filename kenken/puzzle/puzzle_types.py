from typing import Dict, List, Tuple, Optional, Any
import copy
import logging

from .common import Operation

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]
Grid = List[List[int]]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_cell(raw: Any) -> bool:
    return isinstance(raw, (list, tuple)) and len(raw) == 2 and all(_is_int(v) for v in raw)


class Cage:
    """A group of contiguous cells whose solution values combine to `target` under `operation`."""
    def __init__(self, cells: List[Cell], operation: Operation, target: int):
        if not cells:
            raise ValueError("A cage needs at least one cell.")
        self.cells = [(int(r), int(c)) for r, c in cells]
        self.operation = operation
        self.target = target

    @property
    def label(self) -> str:
        """Text drawn in the cage's first cell, e.g. '12×' or '3'."""
        return f"{self.target}{self.operation.glyph}"

    def evaluate(self, values: List[int]) -> Optional[int]:
        """Applies the cage operation to `values`. Returns None when the operation is undefined for them."""
        if len(values) != len(self.cells):
            return None
        op = self.operation
        if op == Operation.IDENTITY:
            return values[0] if len(values) == 1 else None
        if op == Operation.ADD:
            return sum(values)
        if op == Operation.MULTIPLY:
            product = 1
            for v in values:
                product *= v
            return product
        # Subtract and divide are only defined on pairs
        if len(values) != 2:
            return None
        high, low = max(values), min(values)
        if op == Operation.SUBTRACT:
            return high - low
        if op == Operation.DIVIDE:
            if low == 0 or high % low != 0:
                return None
            return high // low
        return None

    def is_satisfied_by(self, grid: Grid) -> bool:
        """Checks the cage against a filled grid (a solution or a player's entries)."""
        values = [grid[r][c] for r, c in self.cells]
        return self.evaluate(values) == self.target

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cells": [[r, c] for r, c in self.cells],
            "target": self.target,
            "operation": self.operation.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Cage":
        if not isinstance(data, dict):
            raise ValueError(f"Cage data must be a dict, got {type(data).__name__}")
        try:
            raw_cells = data["cells"]
            target = data["target"]
            operation = Operation(data["operation"])
        except KeyError as e:
            raise ValueError(f"Cage data missing field {e}") from e
        if not isinstance(raw_cells, list) or not all(_is_cell(c) for c in raw_cells):
            raise ValueError(f"Malformed cage cells: {raw_cells!r}")
        if not _is_int(target):
            raise ValueError(f"Cage target must be an integer, got {target!r}")
        return cls(cells=[(r, c) for r, c in raw_cells], operation=operation, target=target)

    def __eq__(self, other):
        if not isinstance(other, Cage):
            return NotImplemented
        return (self.cells, self.operation, self.target) == (other.cells, other.operation, other.target)

    def __repr__(self):
        return f"Cage(cells={self.cells}, operation={self.operation.name}, target={self.target})"


class KenKenPuzzle:
    """A generated KenKen puzzle: blank play grid, planted solution and the cage list."""
    def __init__(self, size: int, grid: Grid, solution: Grid, cages: List[Cage],
                 moves: Optional[List[Any]] = None, game_id: Optional[int] = None,
                 is_verified: bool = False):
        self.size = size
        self.grid = grid
        self.solution = solution
        self.cages = cages
        self.moves = moves if moves is not None else []
        self.id = game_id
        self.is_verified = is_verified

        if len(solution) != size or any(len(row) != size for row in solution):
            logger.error(f"KenKenPuzzle created with a solution that is not {size}x{size}")

    def cage_for(self, row: int, col: int) -> Optional[Cage]:
        """Returns the cage containing (row, col), or None."""
        for cage in self.cages:
            if (row, col) in cage.cells:
                return cage
        return None

    def check_solution(self, values: Grid) -> bool:
        """True when `values` matches the planted solution cell for cell."""
        return values == self.solution

    def to_dict(self) -> Dict[str, Any]:
        """Wire/storage form: {grid, solution, cages, size, moves} plus id once one is assigned."""
        data = {
            "grid": copy.deepcopy(self.grid),
            "solution": copy.deepcopy(self.solution),
            "cages": [cage.to_dict() for cage in self.cages],
            "size": self.size,
            "moves": copy.deepcopy(self.moves),
        }
        if self.id is not None:
            data["id"] = self.id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KenKenPuzzle":
        """Rebuilds a puzzle from `to_dict` output. Raises ValueError on malformed data."""
        if not isinstance(data, dict):
            raise ValueError(f"Puzzle data must be a dict, got {type(data).__name__}")
        required_fields = ["grid", "solution", "cages", "size"]
        missing = [field for field in required_fields if field not in data]
        if missing:
            raise ValueError(f"Missing required fields in puzzle data: {missing}")

        size = data["size"]
        if not _is_int(size) or size < 1:
            raise ValueError(f"Invalid puzzle size: {size!r}")
        for name in ("grid", "solution"):
            matrix = data[name]
            if (not isinstance(matrix, list) or len(matrix) != size
                    or any(not isinstance(row, list) or len(row) != size for row in matrix)):
                raise ValueError(f"'{name}' must be a {size}x{size} matrix")
            if not all(_is_int(value) for row in matrix for value in row):
                raise ValueError(f"'{name}' must contain only integers")
        if not isinstance(data["cages"], list):
            raise ValueError("'cages' must be a list")

        game_id = data.get("id")
        if game_id is not None and not _is_int(game_id):
            raise ValueError(f"Invalid puzzle id: {game_id!r}")
        moves = data.get("moves", [])
        if not isinstance(moves, list):
            raise ValueError("'moves' must be a list")

        return cls(
            size=size,
            grid=copy.deepcopy(data["grid"]),
            solution=copy.deepcopy(data["solution"]),
            cages=[Cage.from_dict(c) for c in data["cages"]],
            moves=copy.deepcopy(moves),
            game_id=game_id,
        )

    def __repr__(self):
        return f"KenKenPuzzle(id={self.id}, size={self.size}, cages={len(self.cages)})"
