# Make 'puzzle' a package
from .common import Operation, Difficulty, InvalidPuzzleSizeError, MIN_SIZE, MAX_SIZE
from .puzzle_types import Cage, KenKenPuzzle
from .generator import PuzzleGenerator, generate_puzzle
from .verifier import PuzzleVerifier
