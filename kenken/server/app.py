import logging
from typing import Any, Dict, Optional

from flask import Flask, jsonify

from ..config import load_config, setup_logging
from ..puzzle.generator import PuzzleGenerator
from .routes import bp as games_bp
from .storage import AbstractGameStorage, create_storage

logger = logging.getLogger(__name__)


def create_app(config: Optional[Dict[str, Any]] = None,
               storage: Optional[AbstractGameStorage] = None) -> Flask:
    """Application factory. `config` overrides values read from the environment."""
    app = Flask(__name__)
    app.config.update(load_config())
    if config:
        app.config.update(config)

    app.extensions["kenken_storage"] = storage if storage is not None else create_storage(app.config)
    app.extensions["kenken_generator"] = PuzzleGenerator(seed=app.config.get("SEED"))
    app.register_blueprint(games_bp)

    @app.errorhandler(404)
    def not_found(_error):
        return jsonify({"message": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(_error):
        return jsonify({"message": "Method not allowed"}), 405

    logger.info(f"KenKen API ready (storage: {app.config.get('STORAGE')})")
    return app


def main():
    """Runs the development server (`kenken-server`)."""
    config = load_config()
    setup_logging(config["LOG_LEVEL"])
    app = create_app(config)
    logger.info(f"Serving on http://{config['HOST']}:{config['PORT']}")
    app.run(host=config["HOST"], port=config["PORT"])


if __name__ == '__main__':
    main()
