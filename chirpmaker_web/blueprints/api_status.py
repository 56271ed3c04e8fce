"""
Health and player status endpoints.
"""
from __future__ import annotations

from flask import Blueprint, jsonify

from chirpmaker import __version__
from chirpmaker_web.auth import require_auth
from chirpmaker_web.player import get_player

bp = Blueprint("api_status", __name__)


@bp.get("/api/health")
def health():
    return jsonify({"ok": True, "version": __version__})


@bp.get("/api/status")
def status():
    require_auth()
    player = get_player()
    payload = player.status()
    payload["birds"] = len(player.maker.registry)
    return jsonify(payload)
