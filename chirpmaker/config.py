"""
Configuration constants parsed from the environment.

All CHIRPMAKER_* variables are read here and exported as module-level
constants. The CLI and the web app import from this module rather than
reading os.environ directly; command-line flags override these values.
The tone engines themselves take every parameter explicitly.
"""
from __future__ import annotations

import os
from typing import Optional


def _int_env(name: str, default: int) -> int:
    """Parse an integer from environment, returning default on missing/invalid."""
    val = os.getenv(name)
    if not val:
        return default
    try:
        return int(float(val))
    except ValueError:
        return default


def _optional_int_env(name: str) -> Optional[int]:
    val = os.getenv(name)
    if not val:
        return None
    try:
        return int(val)
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------
OUTPUT_PIN: int = _int_env("CHIRPMAKER_PIN", 4)
"""BCM pin number of the buzzer line (GPIO driver)."""

DRIVER: str = os.getenv("CHIRPMAKER_DRIVER", "dry-run").strip().lower() or "dry-run"
"""Output backend: gpio, wav or dry-run."""

SAMPLE_RATE: int = max(8000, _int_env("CHIRPMAKER_SAMPLE_RATE", 44_100))
"""Sample rate used by the wav driver."""

WAV_PATH: str = os.getenv("CHIRPMAKER_WAV", "chirps.wav")
"""Default output path for the wav driver."""

# ---------------------------------------------------------------------------
# Randomness
# ---------------------------------------------------------------------------
SEED: Optional[int] = _optional_int_env("CHIRPMAKER_SEED")
"""Fixed seed for reproducible concerts; unset draws from OS entropy."""

# ---------------------------------------------------------------------------
# Web control surface
# ---------------------------------------------------------------------------
API_TOKEN: str = os.getenv("CHIRPMAKER_TOKEN", "")
"""Optional bearer token protecting /api/* endpoints."""

WEB_HOST: str = os.getenv("CHIRPMAKER_WEB_HOST", "127.0.0.1")
WEB_PORT: int = _int_env("CHIRPMAKER_WEB_PORT", 8090)
