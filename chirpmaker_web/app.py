"""
Application factory for the chirpmaker web API.

Wires together the player, blueprints, error mapping and request timing.
"""
from __future__ import annotations

from time import perf_counter
from typing import Optional

from flask import Flask, g, jsonify, request

from chirpmaker import config
from chirpmaker.birds.dispatcher import Chirpmaker
from chirpmaker.errors import PreconditionError, UnknownBirdError
from chirpmaker.util.logging import get_logger
from chirpmaker_web.player import Player, PlayerBusyError

logger = get_logger(__name__)


def _error(kind: str, exc: Exception, status: int):
    return jsonify({"error": kind, "detail": str(exc)}), status


def create_app(maker: Chirpmaker, *, token: Optional[str] = None) -> Flask:
    """Create the Flask app driving ``maker``'s output line.

    ``token`` overrides CHIRPMAKER_TOKEN; an empty token leaves the API open.
    """
    app = Flask(__name__)
    app.config["API_TOKEN"] = config.API_TOKEN if token is None else token
    app._player = Player(maker)

    # ------------------------------------------------------------------
    # Request timing
    # ------------------------------------------------------------------

    @app.before_request
    def start_timer():
        g.started = perf_counter()

    @app.after_request
    def log_request(response):
        started = g.get("started")
        if started is not None:
            duration_ms = (perf_counter() - started) * 1000
            level = logger.info if request.method == "POST" and response.status_code < 400 else logger.debug
            level(
                "%s %s -> %d",
                request.method,
                request.path,
                response.status_code,
                extra={"duration_ms": round(duration_ms, 1)},
            )
        return response

    # ------------------------------------------------------------------
    # Error mapping; UnknownBirdError wins over its PreconditionError base
    # ------------------------------------------------------------------

    @app.errorhandler(UnknownBirdError)
    def unknown_bird(exc):
        return _error("unknown_bird", exc, 404)

    @app.errorhandler(PreconditionError)
    def bad_parameters(exc):
        return _error("invalid_parameters", exc, 400)

    @app.errorhandler(PlayerBusyError)
    def busy(exc):
        return _error("busy", exc, 409)

    from chirpmaker_web.blueprints.api_birds import bp as api_birds_bp
    from chirpmaker_web.blueprints.api_status import bp as api_status_bp
    from chirpmaker_web.blueprints.api_tones import bp as api_tones_bp

    for bp in (api_status_bp, api_birds_bp, api_tones_bp):
        app.register_blueprint(bp)

    return app
