"""Execute a bird profile script against the tone engines."""

from __future__ import annotations

from typing import Iterable, Union

from chirpmaker.birds.profiles import BirdProfile, ChirpCall, Param, Pause, PhaserCall, Range, Repeat, Step
from chirpmaker.drivers.base import ToneDriver
from chirpmaker.sweep.engine import ChirpEngine, PhaserEngine
from chirpmaker.sweep.types import ChirpSpec, PhaserSpec
from chirpmaker.util.rng import RandomSource


def resolve_param(value: Param, rng: RandomSource) -> Union[int, float]:
    """Draw a fresh value for a range; literals pass through unchanged."""
    if isinstance(value, Range):
        return rng.uniform_int(value.lo, value.hi)
    return value


def resolve_chirp(call: ChirpCall, rng: RandomSource) -> ChirpSpec:
    return ChirpSpec(
        f_start=float(resolve_param(call.f_start, rng)),
        f_stop=float(resolve_param(call.f_stop, rng)),
        n_steps=int(resolve_param(call.n_steps, rng)),
        n_periods=int(resolve_param(call.n_periods, rng)),
        n_chirps=int(resolve_param(call.n_chirps, rng)),
        scale=call.scale,
        duty=int(resolve_param(call.duty, rng)),
        pause_ms=int(resolve_param(call.pause_ms, rng)),
        window_width=call.window_width,
    )


def resolve_phaser(call: PhaserCall, rng: RandomSource) -> PhaserSpec:
    return PhaserSpec(
        freq_hz=int(resolve_param(call.freq_hz, rng)),
        n_periods=int(resolve_param(call.n_periods, rng)),
        duty_start=int(resolve_param(call.duty_start, rng)),
        duty_end=int(resolve_param(call.duty_end, rng)),
        n_chirps=int(resolve_param(call.n_chirps, rng)),
        pause_ms=int(resolve_param(call.pause_ms, rng)),
    )


class ProfileRunner:
    """Walks a profile's steps, resolving random ranges right before each call."""

    def __init__(self, driver: ToneDriver, rng: RandomSource) -> None:
        self.driver = driver
        self.rng = rng
        self.chirper = ChirpEngine(driver)
        self.phaser = PhaserEngine(driver)

    def run(self, profile: BirdProfile) -> None:
        self.run_steps(profile.steps)

    def run_steps(self, steps: Iterable[Step]) -> None:
        for step in steps:
            if isinstance(step, ChirpCall):
                self.chirper.play(resolve_chirp(step, self.rng))
            elif isinstance(step, PhaserCall):
                self.phaser.play(resolve_phaser(step, self.rng))
            elif isinstance(step, Pause):
                self.driver.sleep_ms(int(resolve_param(step.ms, self.rng)))
            elif isinstance(step, Repeat):
                for _ in range(step.times):
                    self.run_steps(step.steps)
            else:
                raise TypeError(f"unknown profile step {step!r}")
