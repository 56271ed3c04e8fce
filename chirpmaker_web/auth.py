"""
Authentication helpers for the chirpmaker web API.

Bearer token check for /api/* endpoints.
"""
from __future__ import annotations

from flask import abort, current_app, request


def require_auth() -> None:
    """
    Check bearer token authentication for the current request.

    If no token is configured, authentication is disabled (open access).
    Otherwise, the request must include a matching Authorization header.

    Raises:
        werkzeug.exceptions.Unauthorized: If token is invalid or missing.
    """
    token = current_app.config.get("API_TOKEN", "")
    if not token:
        return

    hdr = request.headers.get("Authorization", "")
    if hdr != f"Bearer {token}":
        abort(401)
