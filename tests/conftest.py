# tests/conftest.py
import random
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "kenken" can be imported without installing
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from kenken.puzzle.generator import PuzzleGenerator  # noqa: E402
from kenken.server.app import create_app  # noqa: E402
from kenken.server.storage import MemoryGameStorage  # noqa: E402


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def seeded_generator():
    return PuzzleGenerator(seed=42)


@pytest.fixture
def app():
    return create_app({"TESTING": True, "SEED": 7}, storage=MemoryGameStorage())


@pytest.fixture
def client(app):
    return app.test_client()
