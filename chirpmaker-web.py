#!/usr/bin/env python3
"""
chirpmaker web entry point.

Thin CLI shim that opens the output driver and runs the Flask application.

Run:
    python chirpmaker-web.py --driver gpio --pin 4 --port 8090

Environment:
    CHIRPMAKER_TOKEN      Protect /api/* endpoints with a bearer token (optional)
    CHIRPMAKER_DRIVER     Default output driver (gpio, wav, dry-run)
    CHIRPMAKER_PIN        Default BCM pin
"""
from __future__ import annotations

import argparse

from chirpmaker import config
from chirpmaker.drivers import DRIVER_KINDS


def parse_args():
    ap = argparse.ArgumentParser(description="chirpmaker web: HTTP control for a bird call buzzer")
    ap.add_argument("--driver", choices=DRIVER_KINDS, default=config.DRIVER, help="Output backend")
    ap.add_argument("--pin", type=int, default=config.OUTPUT_PIN, help="BCM pin of the buzzer")
    ap.add_argument("--wav", default=config.WAV_PATH, help="Output file for --driver wav (written on shutdown)")
    ap.add_argument("--seed", type=int, default=config.SEED, help="Seed for reproducible random parameters")
    ap.add_argument("--host", default=config.WEB_HOST, help=f"Host to bind (default: {config.WEB_HOST})")
    ap.add_argument("--port", type=int, default=config.WEB_PORT, help=f"Port to listen on (default: {config.WEB_PORT})")
    ap.add_argument("--log-level", dest="log_level", default=None)
    return ap.parse_args()


def main():
    args = parse_args()

    from chirpmaker import Chirpmaker, SeededRandom
    from chirpmaker.drivers import open_driver
    from chirpmaker.util.logging import configure_logging
    from chirpmaker_web import create_app

    configure_logging(level=args.log_level)
    driver = open_driver(args.driver, pin=args.pin, wav_path=args.wav, sample_rate=config.SAMPLE_RATE)
    app = create_app(Chirpmaker(driver, SeededRandom(args.seed)))
    try:
        app.run(host=args.host, port=args.port, threaded=True)
    finally:
        close = getattr(driver, "close", None)
        if close is not None:
            close()


if __name__ == "__main__":
    main()
