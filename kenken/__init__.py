"""KenKen puzzle generator, game session, HTTP API and desktop client."""
from .puzzle import generate_puzzle, PuzzleGenerator, KenKenPuzzle, Cage, Operation, Difficulty

__version__ = "1.0.0"
