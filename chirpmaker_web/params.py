"""
Request parameter helpers for the chirpmaker web API.

Everything raises PreconditionError on bad input so the app-level error
handler can answer 400 before any job reaches the player.
"""
from __future__ import annotations

import argparse
from typing import Any, Callable, Dict, Optional, TypeVar

from flask import request

from chirpmaker.errors import PreconditionError
from chirpmaker.util.duration import parse_duration_to_ms

T = TypeVar("T")

_MISSING = object()


def json_body() -> Dict[str, Any]:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise PreconditionError("request body must be a JSON object")
    return body


def field(body: Dict[str, Any], key: str, cast: Callable[[Any], T], default: Any = _MISSING) -> T:
    """Fetch ``key`` from ``body`` and coerce it with ``cast``."""
    raw = body.get(key, _MISSING)
    if raw is _MISSING or raw is None:
        if default is _MISSING:
            raise PreconditionError(f"missing field '{key}'")
        return default
    if isinstance(raw, bool):
        raise PreconditionError(f"field '{key}' must be a number")
    try:
        return cast(raw)
    except (TypeError, ValueError, OverflowError) as exc:
        raise PreconditionError(f"field '{key}' is invalid: {raw!r}") from exc


def pause_field(body: Dict[str, Any], key: str = "pause_ms", default: int = 0) -> int:
    """Pause in ms; accepts numbers or strings such as '2s'."""
    raw = body.get(key)
    if raw is None:
        return default
    try:
        value = parse_duration_to_ms(raw)
    except (argparse.ArgumentTypeError, ValueError) as exc:
        raise PreconditionError(f"field '{key}' is invalid: {raw!r}") from exc
    return default if value is None else value


def query_arg(key: str, cast: Callable[[Any], T], default: Optional[T] = None) -> Optional[T]:
    raw = request.args.get(key)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except (TypeError, ValueError) as exc:
        raise PreconditionError(f"query parameter '{key}' is invalid: {raw!r}") from exc
