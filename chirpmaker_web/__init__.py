"""
chirpmaker web: HTTP control surface for a chirpmaker output line.

Usage:
    from chirpmaker import Chirpmaker, SeededRandom
    from chirpmaker.drivers.gpio import GPIODriver
    from chirpmaker_web import create_app

    app = create_app(Chirpmaker(GPIODriver(4), SeededRandom()))
    app.run(host="0.0.0.0", port=8090, threaded=True)
"""
from __future__ import annotations

from chirpmaker_web.app import create_app

__all__ = ["create_app"]
