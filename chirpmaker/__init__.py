"""
chirpmaker: bird call synthesis on a single square-wave output.

Frequency scales shape each sweep, the chirp and phaser engines turn
sweeps into timed pulses on a ToneDriver, and the bird registry scripts
those sweeps into randomised calls.

Usage:
    from chirpmaker import Chirpmaker, RecordingDriver, SeededRandom
    maker = Chirpmaker(RecordingDriver(), SeededRandom(7))
    maker.bird_concert(pause_ms=2000)
"""
from __future__ import annotations

__version__ = "0.1.0"

from chirpmaker.birds.dispatcher import Chirpmaker
from chirpmaker.drivers.recording import RecordingDriver
from chirpmaker.dsp.scales import Scale, scale_curve, scale_frequency
from chirpmaker.errors import ChirpmakerError, PreconditionError, UnknownBirdError
from chirpmaker.util.rng import SeededRandom

__all__ = [
    "Chirpmaker",
    "ChirpmakerError",
    "PreconditionError",
    "RecordingDriver",
    "Scale",
    "SeededRandom",
    "UnknownBirdError",
    "__version__",
    "scale_curve",
    "scale_frequency",
]
