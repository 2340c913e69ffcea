from enum import Enum
from typing import Dict, FrozenSet, NamedTuple


class Operation(Enum):
    """Cage operations. The value is the tag used on the wire and in save files."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    IDENTITY = "="

    @property
    def glyph(self) -> str:
        """Symbol drawn after the cage target (identity cages show the bare number)."""
        return OPERATION_GLYPHS[self]


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class DifficultySettings(NamedTuple):
    max_cage_size: int
    preferred_operations: FrozenSet[Operation]


# --- Constants ---
MIN_SIZE = 3
MAX_SIZE = 7

OPERATION_GLYPHS: Dict[Operation, str] = {
    Operation.ADD: "+",
    Operation.SUBTRACT: "−",
    Operation.MULTIPLY: "×",
    Operation.DIVIDE: "÷",
    Operation.IDENTITY: "",
}

ALL_OPERATIONS = frozenset(Operation)

DIFFICULTY_SETTINGS: Dict[Difficulty, DifficultySettings] = {
    Difficulty.EASY: DifficultySettings(
        max_cage_size=2,
        preferred_operations=frozenset({Operation.ADD, Operation.MULTIPLY, Operation.IDENTITY}),
    ),
    Difficulty.MEDIUM: DifficultySettings(max_cage_size=3, preferred_operations=ALL_OPERATIONS),
    Difficulty.HARD: DifficultySettings(max_cage_size=4, preferred_operations=ALL_OPERATIONS),
}


class InvalidPuzzleSizeError(ValueError):
    """Raised when a puzzle is requested outside MIN_SIZE..MAX_SIZE."""
    def __init__(self, size):
        super().__init__(f"Invalid grid size {size!r}. Must be between {MIN_SIZE} and {MAX_SIZE}.")
        self.size = size
