from .app import create_app
from .storage import AbstractGameStorage, MemoryGameStorage, JsonFileGameStorage
