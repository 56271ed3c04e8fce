"""
Bird API blueprint.

Lists the registry and starts bird voices and concerts on the player.
"""
from __future__ import annotations

from flask import Blueprint, jsonify

from chirpmaker.birds.profiles import serialize_registry
from chirpmaker.errors import PreconditionError
from chirpmaker.sweep.types import UINT32_MAX
from chirpmaker_web.auth import require_auth
from chirpmaker_web.params import field, json_body, pause_field
from chirpmaker_web.player import get_player

bp = Blueprint("api_birds", __name__)


@bp.get("/api/birds")
def list_birds():
    require_auth()
    player = get_player()
    return jsonify(serialize_registry(player.maker.registry))


@bp.post("/api/birds/<bird>/sing")
def sing(bird: str):
    """Queue one bird voice; 404 for an unknown bird, 409 while busy."""
    require_auth()
    player = get_player()
    maker = player.maker
    profile = maker.registry.resolve(bird)
    pause_ms = pause_field(json_body(), default=20)
    if pause_ms > UINT32_MAX:
        raise PreconditionError(f"pause_ms must be <= {UINT32_MAX}")
    player.submit(f"bird:{profile.name}", lambda: maker.bird_voice(profile.id, pause_ms))
    return jsonify({"accepted": True, "bird": {"id": profile.id, "name": profile.name}, "pause_ms": pause_ms}), 202


@bp.post("/api/concert")
def concert():
    require_auth()
    player = get_player()
    maker = player.maker
    body = json_body()
    pause_ms = pause_field(body, default=0)
    count = field(body, "count", int, default=None)
    if count is not None and count < 0:
        raise PreconditionError("count must be >= 0")
    if pause_ms > UINT32_MAX:
        raise PreconditionError(f"pause_ms must be <= {UINT32_MAX}")
    player.submit("concert", lambda: maker.bird_concert(pause_ms, count=count))
    n_birds = len(maker.registry) if count is None else count
    return jsonify({"accepted": True, "count": n_birds, "pause_ms": pause_ms}), 202
