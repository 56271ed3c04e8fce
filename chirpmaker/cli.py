#!/usr/bin/env python3
"""chirpmaker command line: play sweeps and bird calls on a buzzer or into a WAV file."""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

import numpy as np

from chirpmaker import config
from chirpmaker.birds.dispatcher import Chirpmaker
from chirpmaker.birds.profiles import serialize_registry
from chirpmaker.drivers import DRIVER_KINDS, open_driver
from chirpmaker.dsp.scales import Scale, scale_curve
from chirpmaker.errors import DriverUnavailableError, PreconditionError, UnknownBirdError
from chirpmaker.util.duration import parse_duration_to_ms
from chirpmaker.util.exit_codes import ExitCode
from chirpmaker.util.logging import configure_logging, get_logger, log_exception
from chirpmaker.util.rng import SeededRandom

logger = get_logger(__name__)

# Pause range of the endless concert loop when no --pause is given.
LOOP_PAUSE_MS = (1000, 5000)

SCALE_CHOICES = [s.value for s in Scale]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(
        prog="chirpmaker",
        description="Square-wave bird call synthesiser for a piezo buzzer",
    )
    p.add_argument("--driver", choices=DRIVER_KINDS, default=config.DRIVER, help=f"Output backend (default {config.DRIVER})")
    p.add_argument("--pin", type=int, default=config.OUTPUT_PIN, help=f"BCM pin of the buzzer for --driver gpio (default {config.OUTPUT_PIN})")
    p.add_argument("--wav", default=config.WAV_PATH, help=f"Output file for --driver wav (default {config.WAV_PATH})")
    p.add_argument("--sample-rate", dest="sample_rate", type=int, default=config.SAMPLE_RATE, help="WAV sample rate in Hz")
    p.add_argument("--seed", type=int, default=config.SEED, help="Seed for reproducible random parameters")
    p.add_argument("--log-level", dest="log_level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    p.add_argument("--log-json", dest="log_json", default=None, help="Also write JSON-lines logs to this path")

    sub = p.add_subparsers(dest="command", required=True)

    c = sub.add_parser("chirp", help="Play one frequency sweep")
    c.add_argument("--start", dest="f_start", type=float, required=True, help="Start frequency [Hz]")
    c.add_argument("--stop", dest="f_stop", type=float, required=True, help="Stop frequency [Hz]")
    c.add_argument("--steps", dest="n_steps", type=int, default=10, help="Frequency steps (default 10)")
    c.add_argument("--periods", dest="n_periods", type=int, default=1, help="Periods per step (default 1)")
    c.add_argument("--chirps", dest="n_chirps", type=int, default=1, help="Repetitions (default 1)")
    c.add_argument("--scale", choices=SCALE_CHOICES, default=Scale.CHROMATIC.value, help="Frequency scale (default chromatic)")
    c.add_argument("--duty", type=int, default=50, help="Duty cycle 1..99 %% (default 50)")
    c.add_argument("--pause", type=parse_duration_to_ms, default=0, help="Pause after each repetition (e.g. 50ms, 1s)")
    c.add_argument("--window", dest="window_width", type=int, default=None, help="Sinc window width for sinc_* scales")

    ph = sub.add_parser("phaser", help="Sweep the duty cycle at a fixed frequency")
    ph.add_argument("--freq", dest="freq_hz", type=int, required=True, help="Frequency [Hz]")
    ph.add_argument("--periods", dest="n_periods", type=int, default=5, help="Periods per duty value (default 5)")
    ph.add_argument("--duty-start", dest="duty_start", type=int, default=5, help="First duty cycle %% (default 5)")
    ph.add_argument("--duty-end", dest="duty_end", type=int, default=50, help="Last duty cycle %% (default 50)")
    ph.add_argument("--chirps", dest="n_chirps", type=int, default=1, help="Repetitions (default 1)")
    ph.add_argument("--pause", type=parse_duration_to_ms, default=0, help="Pause after each repetition")

    v = sub.add_parser("voice", help="Let one bird sing")
    v.add_argument("bird", help="Bird id (0..14) or name, e.g. blackbird")
    v.add_argument("--pause", type=parse_duration_to_ms, default=20, help="Pause after the call (default 20ms)")

    k = sub.add_parser("concert", help="Random birds in random order")
    k.add_argument("--pause", type=parse_duration_to_ms, default=None, help="Pause after each concert (default: random 1-5s)")
    k.add_argument("--count", type=int, default=None, help="Birds per concert (default: registry size)")
    k.add_argument("--repeat", type=int, default=1, help="Number of concerts; 0 = forever (default 1)")

    sub.add_parser("signet", help="Play the station jingle")

    pc = sub.add_parser("phone-call", help="Ring like an old telephone")
    pc.add_argument("--times", dest="n_times", type=int, default=3, help="Ring bursts (default 3)")

    sub.add_parser("list-birds", help="Print the bird registry as JSON and exit")

    cv = sub.add_parser("curve", help="Print the frequency/period table of a scale")
    cv.add_argument("--scale", choices=SCALE_CHOICES, required=True)
    cv.add_argument("--start", dest="f_start", type=float, required=True)
    cv.add_argument("--stop", dest="f_stop", type=float, required=True)
    cv.add_argument("--steps", dest="n_steps", type=int, default=10)
    cv.add_argument("--window", dest="window_width", type=int, default=None)
    cv.add_argument("--json", action="store_true", help="Emit JSON instead of a text table")

    args = p.parse_args(argv)
    if args.command == "concert" and args.repeat < 0:
        p.error("--repeat must be >= 0")
    if args.command == "concert" and args.repeat == 0 and args.driver == "wav":
        p.error("--repeat 0 never ends, so the wav driver would never write its file")
    return args


def _print_curve(args: argparse.Namespace) -> None:
    freqs = scale_curve(args.scale, args.f_start, args.f_stop, args.n_steps, args.window_width)
    with np.errstate(divide="ignore", invalid="ignore"):
        periods = np.where(freqs > 0, np.rint(1_000_000.0 / freqs), 0).astype(np.int64)
    if args.json:
        payload = {
            "scale": args.scale,
            "steps": [
                {"step": i, "freq_hz": float(f), "period_us": int(pd)}
                for i, (f, pd) in enumerate(zip(freqs, periods))
            ],
        }
        print(json.dumps(payload, indent=2))
        return
    print(f"{'step':>4}  {'freq_hz':>12}  {'period_us':>9}")
    for i, (f, pd) in enumerate(zip(freqs, periods)):
        print(f"{i:>4}  {f:>12.3f}  {pd:>9d}")


def _concert(maker: Chirpmaker, args: argparse.Namespace) -> None:
    done = 0
    while args.repeat == 0 or done < args.repeat:
        pause_ms = args.pause
        if pause_ms is None:
            pause_ms = maker.rng.uniform_int(*LOOP_PAUSE_MS)
        played = maker.bird_concert(pause_ms, count=args.count)
        logger.info("Concert %d done: %s", done + 1, " ".join(str(b) for b in played))
        done += 1


def run(args: argparse.Namespace) -> int:
    """Dispatch one sub-command; returns an ExitCode value."""
    if args.command == "list-birds":
        print(json.dumps(serialize_registry(), indent=2))
        return ExitCode.SUCCESS
    if args.command == "curve":
        _print_curve(args)
        return ExitCode.SUCCESS

    driver = open_driver(args.driver, pin=args.pin, wav_path=args.wav, sample_rate=args.sample_rate)
    logger.debug("Using %s driver", args.driver, extra={"driver": args.driver})
    maker = Chirpmaker(driver, SeededRandom(args.seed))
    try:
        if args.command == "chirp":
            maker.chirp(
                args.f_start,
                args.f_stop,
                args.n_steps,
                args.n_periods,
                args.n_chirps,
                args.scale,
                args.duty,
                args.pause,
                window_width=args.window_width,
            )
        elif args.command == "phaser":
            maker.phaser(args.freq_hz, args.n_periods, args.duty_start, args.duty_end, args.n_chirps, args.pause)
        elif args.command == "voice":
            maker.bird_voice(args.bird, args.pause)
        elif args.command == "concert":
            _concert(maker, args)
        elif args.command == "signet":
            maker.signet()
        elif args.command == "phone-call":
            maker.phone_call(args.n_times)
    finally:
        close = getattr(driver, "close", None)
        if close is not None:
            close()
    if args.driver == "wav":
        print(f"[wav] wrote {args.wav}", flush=True)
    return ExitCode.SUCCESS


def _guarded_run(args: argparse.Namespace) -> int:
    try:
        return run(args)
    except UnknownBirdError as exc:
        logger.error("%s", exc, extra={"error_type": "unknown_bird"})
        return ExitCode.UNKNOWN_BIRD
    except (PreconditionError, ValueError) as exc:
        logger.error("Invalid parameters: %s", exc, extra={"error_type": "precondition"})
        return ExitCode.INVALID_ARGS
    except DriverUnavailableError as exc:
        logger.error("%s", exc, extra={"error_type": "driver"})
        return ExitCode.DEVICE_UNAVAILABLE
    except OSError as exc:
        logger.error("Output failed: %s", exc, extra={"error_type": "output"})
        return ExitCode.OUTPUT_ERROR
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return ExitCode.INTERRUPTED
    except Exception:
        log_exception(logger, "Unexpected failure", error_type="internal")
        return ExitCode.GENERAL_ERROR


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(level=args.log_level, json_file=args.log_json)
    code = _guarded_run(args)
    if code != ExitCode.SUCCESS:
        logger.debug("Exit %d (%s)", code, ExitCode.message(code))
    return code


if __name__ == "__main__":
    sys.exit(main())
