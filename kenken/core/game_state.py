import json
import os
import logging
from typing import Dict, List, Optional, Set, Any, Tuple, NamedTuple

from ..config import base_path, DEFAULT_SAVE_FILE_NAME
from ..puzzle.common import Difficulty
from ..puzzle.puzzle_types import KenKenPuzzle
from ..puzzle.generator import PuzzleGenerator

logger = logging.getLogger(__name__)

SAVE_FILE_PATH = os.path.join(base_path, DEFAULT_SAVE_FILE_NAME)


class GridCell:
    """One play-grid cell: an entered value (0 = blank) and scribbled candidates."""
    def __init__(self, value: int = 0, scribbles: Optional[Set[int]] = None):
        self.value = value
        self.scribbles: Set[int] = set(scribbles) if scribbles else set()

    def copy(self) -> "GridCell":
        return GridCell(self.value, set(self.scribbles))

    def __eq__(self, other):
        if not isinstance(other, GridCell):
            return NotImplemented
        return self.value == other.value and self.scribbles == other.scribbles

    def __repr__(self):
        return f"GridCell(value={self.value}, scribbles={sorted(self.scribbles)})"


class Move(NamedTuple):
    """Undo history entry: the cell touched and its state before the move."""
    row: int
    col: int
    previous: GridCell


class GameState:
    SAVE_VERSION = 1

    def __init__(self, generator: Optional[PuzzleGenerator] = None, save_path: str = SAVE_FILE_PATH):
        self.puzzle: Optional[KenKenPuzzle] = None
        self.difficulty: Optional[Difficulty] = None
        self.grid: List[List[GridCell]] = []
        self.selected_cell: Optional[Tuple[int, int]] = None
        self.is_scribble_mode = False
        self.history: List[Move] = []
        self.puzzle_generator = generator if generator is not None else PuzzleGenerator()
        self.save_path = save_path
        self.save_version = self.SAVE_VERSION

    # --- Puzzle lifecycle ---

    @property
    def size(self) -> int:
        return self.puzzle.size if self.puzzle else 0

    def start_new_puzzle(self, size: int, difficulty: Difficulty) -> KenKenPuzzle:
        """Generates a puzzle and makes it the active one. InvalidPuzzleSizeError propagates to the caller."""
        difficulty = Difficulty(difficulty)
        logger.info(f"Starting new puzzle: {size}x{size}, {difficulty.value}")
        puzzle = self.puzzle_generator.generate_puzzle(size, difficulty)
        self.load_puzzle(puzzle, difficulty=difficulty)
        return puzzle

    def load_puzzle(self, puzzle: KenKenPuzzle, difficulty: Optional[Difficulty] = None) -> None:
        """Resets the play grid from the puzzle's grid and clears selection and history."""
        self.puzzle = puzzle
        self.difficulty = difficulty
        self.grid = [[GridCell(puzzle.grid[i][j]) for j in range(puzzle.size)] for i in range(puzzle.size)]
        self.selected_cell = None
        self.history = []
        logger.debug(f"Loaded puzzle {puzzle!r} into game state")

    def reset(self) -> None:
        """Clears every entry and the undo history, keeping the same puzzle."""
        if not self.puzzle:
            return
        self.load_puzzle(self.puzzle, difficulty=self.difficulty)

    # --- Player moves ---

    def select_cell(self, row: int, col: int) -> Optional[Tuple[int, int]]:
        """Selects (row, col), or clears the selection when it is already selected."""
        self._check_bounds(row, col)
        if self.selected_cell == (row, col):
            self.selected_cell = None
        else:
            self.selected_cell = (row, col)
        return self.selected_cell

    def toggle_scribble_mode(self) -> bool:
        self.is_scribble_mode = not self.is_scribble_mode
        logger.debug(f"Scribble mode {'on' if self.is_scribble_mode else 'off'}")
        return self.is_scribble_mode

    def make_move(self, value: int) -> bool:
        """
        Applies `value` to the selected cell.

        In scribble mode the value is toggled in the cell's notes; otherwise it
        becomes the cell value and the notes are cleared.

        Returns:
            False when no cell is selected, True once the move is recorded.
        """
        if not self.selected_cell:
            return False
        if not isinstance(value, int) or isinstance(value, bool) or not 1 <= value <= self.size:
            raise ValueError(f"Value must be between 1 and {self.size}, got {value!r}")

        row, col = self.selected_cell
        cell = self.grid[row][col]
        self.history.append(Move(row, col, cell.copy()))

        if self.is_scribble_mode:
            if value in cell.scribbles:
                cell.scribbles.discard(value)
            else:
                cell.scribbles.add(value)
        else:
            cell.value = value
            cell.scribbles.clear()
        return True

    def clear_cell(self) -> bool:
        """Blanks the selected cell (value and notes). Recorded in the undo history."""
        if not self.selected_cell:
            return False
        row, col = self.selected_cell
        cell = self.grid[row][col]
        if cell.value == 0 and not cell.scribbles:
            return False
        self.history.append(Move(row, col, cell.copy()))
        cell.value = 0
        cell.scribbles.clear()
        return True

    @property
    def can_undo(self) -> bool:
        return bool(self.history)

    def undo(self) -> bool:
        if not self.history:
            return False
        move = self.history.pop()
        self.grid[move.row][move.col] = move.previous.copy()
        return True

    # --- Checking ---

    def values(self) -> List[List[int]]:
        return [[cell.value for cell in row] for row in self.grid]

    def validate_solution(self) -> int:
        """Number of cells whose value differs from the solution (blanks count)."""
        if not self.puzzle:
            return 0
        errors = 0
        for i, row in enumerate(self.grid):
            for j, cell in enumerate(row):
                if cell.value != self.puzzle.solution[i][j]:
                    errors += 1
        return errors

    def is_solved(self) -> bool:
        return self.puzzle is not None and self.validate_solution() == 0

    # --- Persistence ---

    def to_dict(self) -> Dict[str, Any]:
        return {
            "save_version": self.save_version,
            "difficulty": self.difficulty.value if self.difficulty else None,
            "is_scribble_mode": self.is_scribble_mode,
            "puzzle": self.puzzle.to_dict() if self.puzzle else None,
            "cells": [[{"value": cell.value, "scribbles": sorted(cell.scribbles)} for cell in row]
                      for row in self.grid],
        }

    def save_game(self) -> None:
        """Writes the session to `save_path` as JSON."""
        state = self.to_dict()
        try:
            with open(self.save_path, 'w', encoding='utf-8') as f:
                json.dump(state, f, indent=4)
            logger.info(f"Game state saved successfully to {self.save_path}")
        except IOError as e:
            logger.error(f"Could not save game state to {self.save_path}: {e}")
            raise IOError(f"Could not save game state: {e}")

    def load_game(self) -> bool:
        """
        Restores a session written by save_game.

        Returns:
            True when a puzzle was restored. Missing, unreadable or invalid save
            files leave a blank session and return False.
        """
        if not os.path.exists(self.save_path):
            logger.info(f"Save file '{self.save_path}' not found. Starting new game state.")
            return False

        try:
            with open(self.save_path, 'r', encoding='utf-8') as f:
                state = json.load(f)
        except (IOError, json.JSONDecodeError) as e:
            logger.error(f"Error reading or parsing save file '{self.save_path}': {e}")
            self._clear()
            return False

        if not isinstance(state, dict):
            logger.error(f"Save file '{self.save_path}' does not contain a JSON object.")
            self._clear()
            return False

        loaded_version = state.get("save_version", 0)
        if not isinstance(loaded_version, int) or isinstance(loaded_version, bool):
            logger.error(f"Save file has an invalid save_version {loaded_version!r}. Starting new game state.")
            self._clear()
            return False
        if loaded_version > self.SAVE_VERSION:
            logger.error(f"Save file version ({loaded_version}) is newer than game version ({self.SAVE_VERSION}). Cannot load safely.")
            raise RuntimeError("Save file is from a newer version of the game.")

        puzzle_data = state.get("puzzle")
        if not puzzle_data:
            logger.warning("Save file has no puzzle. No puzzle loaded.")
            self._clear()
            return False

        try:
            puzzle = KenKenPuzzle.from_dict(puzzle_data)
        except ValueError as e:
            logger.error(f"Failed to reconstruct puzzle from save data: {e}")
            self._clear()
            return False

        difficulty = None
        try:
            if state.get("difficulty"):
                difficulty = Difficulty(state["difficulty"])
        except ValueError:
            logger.warning(f"Unknown difficulty '{state.get('difficulty')}' in save file. Ignoring.")

        self.load_puzzle(puzzle, difficulty=difficulty)
        self.is_scribble_mode = bool(state.get("is_scribble_mode", False))
        self._restore_cells(state.get("cells"))
        logger.info(f"Loaded game state from {self.save_path}")
        return True

    def _restore_cells(self, raw_cells: Any) -> None:
        """Copies saved values/notes onto the fresh grid, skipping anything malformed."""
        if not isinstance(raw_cells, list) or len(raw_cells) != self.size:
            logger.warning("Saved cells missing or wrong shape; keeping a blank grid.")
            return
        for i, raw_row in enumerate(raw_cells):
            if not isinstance(raw_row, list) or len(raw_row) != self.size:
                logger.warning(f"Saved row {i} malformed; skipping.")
                continue
            for j, raw_cell in enumerate(raw_row):
                if not isinstance(raw_cell, dict):
                    continue
                value = raw_cell.get("value", 0)
                scribbles = raw_cell.get("scribbles", [])
                if isinstance(value, int) and 0 <= value <= self.size:
                    self.grid[i][j].value = value
                if isinstance(scribbles, list):
                    self.grid[i][j].scribbles = {v for v in scribbles if isinstance(v, int) and 1 <= v <= self.size}

    def _check_bounds(self, row: int, col: int) -> None:
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(f"Cell ({row}, {col}) is outside the {self.size}x{self.size} grid")

    def _clear(self) -> None:
        self.puzzle = None
        self.difficulty = None
        self.grid = []
        self.selected_cell = None
        self.history = []
        self.is_scribble_mode = False
