"""
Tone API blueprint: raw chirps, phaser sweeps and scale previews.

Specs are planned (and therefore fully validated) in the request thread;
only valid jobs are handed to the player.
"""
from __future__ import annotations

from flask import Blueprint, jsonify

from chirpmaker.dsp.scales import Scale, scale_curve
from chirpmaker.errors import PreconditionError
from chirpmaker.sweep.engine import plan_chirp, plan_phaser
from chirpmaker.sweep.types import ChirpSpec, PhaserSpec
from chirpmaker_web.auth import require_auth
from chirpmaker_web.params import field, json_body, pause_field, query_arg
from chirpmaker_web.player import get_player

bp = Blueprint("api_tones", __name__)

MAX_STEPS = 10_000


def _timing_payload(plan):
    return [
        {"step": t.step, "freq_hz": t.freq_hz, "period_us": t.period_us, "t_on_us": t.t_on_us, "t_off_us": t.t_off_us}
        for t in plan
    ]


@bp.post("/api/chirp")
def chirp():
    require_auth()
    body = json_body()
    spec = ChirpSpec(
        f_start=field(body, "f_start", float),
        f_stop=field(body, "f_stop", float),
        n_steps=field(body, "n_steps", int),
        n_periods=field(body, "n_periods", int, default=1),
        n_chirps=field(body, "n_chirps", int, default=1),
        scale=Scale.parse(field(body, "scale", str, default=Scale.LINEAR.value)),
        duty=field(body, "duty", int, default=50),
        pause_ms=pause_field(body),
        window_width=field(body, "window_width", int, default=None),
    )
    if spec.n_steps > MAX_STEPS:
        raise PreconditionError(f"n_steps must be <= {MAX_STEPS}")
    plan = plan_chirp(spec)
    player = get_player()
    engine = player.maker.runner.chirper
    player.submit(f"chirp:{spec.scale.value}", lambda: engine.play(spec))
    return jsonify({"accepted": True, "steps": _timing_payload(plan)}), 202


@bp.post("/api/phaser")
def phaser():
    require_auth()
    body = json_body()
    spec = PhaserSpec(
        freq_hz=field(body, "freq_hz", int),
        n_periods=field(body, "n_periods", int, default=5),
        duty_start=field(body, "duty_start", int),
        duty_end=field(body, "duty_end", int),
        n_chirps=field(body, "n_chirps", int, default=1),
        pause_ms=pause_field(body),
    )
    plan = plan_phaser(spec)
    player = get_player()
    engine = player.maker.runner.phaser
    player.submit("phaser", lambda: engine.play(spec))
    return jsonify({"accepted": True, "duty_settings": len(plan), "period_us": plan[0].period_us}), 202


@bp.get("/api/scales")
def list_scales():
    require_auth()
    return jsonify({"scales": [{"name": s.value, "windowed": s.windowed} for s in Scale]})


@bp.get("/api/scales/<name>/curve")
def curve(name: str):
    require_auth()
    scale = Scale.parse(name)
    f_start = query_arg("start", float, 1000.0)
    f_stop = query_arg("stop", float, 4000.0)
    n_steps = query_arg("steps", int, 10)
    window = query_arg("window", int, None)
    if n_steps is not None and n_steps > MAX_STEPS:
        raise PreconditionError(f"steps must be <= {MAX_STEPS}")
    freqs = scale_curve(scale, f_start, f_stop, n_steps, window)
    return jsonify({"scale": scale.value, "freq_hz": freqs.tolist()})
