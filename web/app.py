from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify, request

# Ensure project root is importable when running this file directly
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from dodgem import GameEngine, GameNotStartedError, Player
from dodgem.config import SETTINGS, Settings, configure_logging


def create_app(settings: Optional[Settings] = None) -> Flask:
    settings = settings or SETTINGS
    configure_logging(settings.log_level)
    app = Flask(__name__)

    # single game per app instance
    holder = {"engine": None}

    def engine() -> GameEngine:
        if holder["engine"] is None:
            raise GameNotStartedError("No game in progress, POST /api/new first")
        return holder["engine"]

    @app.errorhandler(GameNotStartedError)
    def not_started(exc):
        return jsonify({"error": str(exc)}), 409

    @app.post("/api/new")
    def api_new():
        data = request.get_json(silent=True) or {}
        try:
            size = int(data.get("size", settings.game_size))
            depth = int(data.get("depth", settings.search_depth))
            new_engine = GameEngine(size=size, depth=depth, time_limit_s=settings.time_limit_s)
        except (TypeError, ValueError) as exc:
            return jsonify({"error": str(exc)}), 400

        names = data.get("names", ["player", "computer"])
        if not (
            isinstance(names, list)
            and len(names) == 2
            and all(isinstance(n, str) and n for n in names)
        ):
            return jsonify({"error": "names must be a list of two non-empty strings"}), 400
        against_ai = data.get("ai", True)
        if not isinstance(against_ai, bool):
            return jsonify({"error": "ai must be true or false"}), 400
        new_engine.start(Player(names[0]), Player(names[1], is_ai=against_ai))
        holder["engine"] = new_engine

        snap = new_engine.status()
        snap["ai_move"] = None
        return jsonify(snap)

    @app.get("/api/state")
    def api_state():
        return jsonify(engine().status())

    @app.post("/api/move")
    def api_move():
        payload = request.get_json(silent=True) or {}
        game = engine()
        piece_id = payload.get("piece")
        target = payload.get("to")
        if not piece_id or not isinstance(target, (list, tuple)) or len(target) != 2:
            return jsonify({"error": "Expected {'piece': id, 'to': [x, y]}"}), 400
        if not game.play_turn(piece_id, tuple(target)):
            return jsonify({"error": game.last_error.value}), 400

        ai_move = None
        if game.solver is not None and not game.state.is_over and game.current_player.is_ai:
            ai_move = game.apply_ai_move()

        snap = game.status()
        snap["ai_move"] = (
            {"piece": ai_move.piece_id, "to": list(ai_move.target)} if ai_move else None
        )
        return jsonify(snap)

    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
