import logging
from typing import Any, Optional, Tuple

from flask import Blueprint, current_app, jsonify, request

from ..puzzle.common import Difficulty, InvalidPuzzleSizeError, MIN_SIZE, MAX_SIZE

logger = logging.getLogger(__name__)

bp = Blueprint("games", __name__, url_prefix="/api/games")


def _parse_create_request(data: Any) -> Optional[Tuple[int, Difficulty]]:
    """Validates a create body {size, difficulty}. Returns None when it is invalid."""
    if not isinstance(data, dict):
        return None
    size = data.get("size")
    difficulty = data.get("difficulty")
    if not isinstance(size, int) or isinstance(size, bool) or not MIN_SIZE <= size <= MAX_SIZE:
        return None
    try:
        return size, Difficulty(difficulty)
    except ValueError:
        return None


@bp.route("", methods=["POST"])
def create_game():
    try:
        parsed = _parse_create_request(request.get_json(silent=True))
        if parsed is None:
            return jsonify({"message": "Invalid request"}), 400

        size, difficulty = parsed
        puzzle = current_app.extensions["kenken_generator"].generate_puzzle(size, difficulty)
        game = current_app.extensions["kenken_storage"].create_game(puzzle)
        logger.info(f"Created game {game.id} ({size}x{size}, {difficulty.value})")
        return jsonify(game.to_dict())
    except InvalidPuzzleSizeError:
        return jsonify({"message": "Invalid request"}), 400
    except Exception:
        logger.exception("Error creating game")
        return jsonify({"message": "Failed to create game"}), 500


@bp.route("/<game_id>", methods=["GET"])
def get_game(game_id: str):
    try:
        try:
            parsed_id = int(game_id)
        except ValueError:
            return jsonify({"message": "Invalid game ID"}), 400

        game = current_app.extensions["kenken_storage"].get_game(parsed_id)
        if game is None:
            return jsonify({"message": "Game not found"}), 404
        return jsonify(game.to_dict())
    except Exception:
        logger.exception(f"Error fetching game {game_id}")
        return jsonify({"message": "Failed to fetch game"}), 500
