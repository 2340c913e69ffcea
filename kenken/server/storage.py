from abc import ABC, abstractmethod
from typing import Dict, Optional
import json
import os
import logging
import threading

from ..puzzle.puzzle_types import KenKenPuzzle
from ..puzzle.verifier import PuzzleVerifier

logger = logging.getLogger(__name__)


class AbstractGameStorage(ABC):
    """Stores generated puzzles verbatim under server-assigned integer ids."""

    @abstractmethod
    def create_game(self, puzzle: KenKenPuzzle) -> KenKenPuzzle:
        """Assigns the next id, stores a copy of `puzzle` and returns the stored copy."""
        pass

    @abstractmethod
    def get_game(self, game_id: int) -> Optional[KenKenPuzzle]:
        """Returns the stored puzzle, or None when the id is unknown."""
        pass


class MemoryGameStorage(AbstractGameStorage):
    """Process-local storage. Ids start at 1 and are never reused."""

    def __init__(self):
        self._games: Dict[int, Dict] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create_game(self, puzzle: KenKenPuzzle) -> KenKenPuzzle:
        with self._lock:
            game_id = self._next_id
            self._next_id += 1
            data = puzzle.to_dict()
            data["id"] = game_id
            self._games[game_id] = data
        logger.info(f"Stored game {game_id} ({puzzle.size}x{puzzle.size}, {len(puzzle.cages)} cages)")
        return KenKenPuzzle.from_dict(data)

    def get_game(self, game_id: int) -> Optional[KenKenPuzzle]:
        with self._lock:
            data = self._games.get(game_id)
        if data is None:
            return None
        return KenKenPuzzle.from_dict(data)


class JsonFileGameStorage(MemoryGameStorage):
    """Same contract as MemoryGameStorage, mirrored to a JSON file rewritten on every create."""

    def __init__(self, path: str):
        super().__init__()
        self.path = path
        self._load()

    def _load(self) -> None:
        if not os.path.exists(self.path):
            logger.info(f"Storage file '{self.path}' not found. Starting empty.")
            return
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                table = json.load(f)
        except (IOError, json.JSONDecodeError) as e:
            logger.error(f"Error reading storage file '{self.path}': {e}")
            raise RuntimeError(f"Could not read game storage file: {self.path}") from e

        raw_games = table.get("games", []) if isinstance(table, dict) else []
        for raw in raw_games:
            try:
                puzzle = KenKenPuzzle.from_dict(raw)
            except ValueError as e:
                logger.warning(f"Skipping malformed stored game: {e}")
                continue
            if puzzle.id is None:
                logger.warning("Skipping stored game without an id.")
                continue
            is_valid, problems = PuzzleVerifier(puzzle).verify()
            if not is_valid:
                logger.warning(f"Stored game {puzzle.id} failed verification: {problems[:3]}")
            self._games[puzzle.id] = puzzle.to_dict()

        stored_next = table.get("next_id") if isinstance(table, dict) else None
        highest = max(self._games, default=0)
        self._next_id = max(highest + 1, stored_next if isinstance(stored_next, int) else 1)
        logger.info(f"Loaded {len(self._games)} game(s) from {self.path}")

    def _write(self) -> None:
        table = {"next_id": self._next_id, "games": [self._games[k] for k in sorted(self._games)]}
        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(table, f)
            os.replace(tmp_path, self.path)
        except IOError as e:
            logger.error(f"Could not write storage file {self.path}: {e}")
            raise IOError(f"Could not persist games: {e}")

    def create_game(self, puzzle: KenKenPuzzle) -> KenKenPuzzle:
        with self._lock:
            game_id = self._next_id
            self._next_id += 1
            data = puzzle.to_dict()
            data["id"] = game_id
            self._games[game_id] = data
            try:
                self._write()
            except IOError:
                del self._games[game_id]
                self._next_id = game_id
                raise
        logger.info(f"Stored game {game_id} in {self.path}")
        return KenKenPuzzle.from_dict(data)


def create_storage(config: Dict) -> AbstractGameStorage:
    """Builds the storage backend named by config['STORAGE']."""
    backend = config.get("STORAGE", "memory")
    if backend == "json":
        return JsonFileGameStorage(config["STORAGE_PATH"])
    if backend == "memory":
        return MemoryGameStorage()
    raise ValueError(f"Unknown storage backend: {backend!r}")
