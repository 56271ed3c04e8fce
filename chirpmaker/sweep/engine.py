"""Chirp and phaser engines: turn a sweep description into square-wave pulses."""

from __future__ import annotations

import math
from typing import List, Optional, Tuple

from chirpmaker.drivers.base import ToneDriver
from chirpmaker.dsp.scales import Scale, scale_frequency
from chirpmaker.errors import PreconditionError
from chirpmaker.sweep.types import ChirpSpec, PhaserSpec, StepTiming
from chirpmaker.util.logging import get_logger

logger = get_logger(__name__)

US_PER_SECOND = 1_000_000


def split_period(period_us: int, duty: int) -> Tuple[int, int]:
    """Split an integer period into (t_on, t_off) with t_on + t_off == period_us."""
    t_on = period_us * duty // 100
    return t_on, period_us - t_on


def emit_pulses(driver: ToneDriver, t_on_us: int, t_off_us: int, n_periods: int) -> None:
    for _ in range(n_periods):
        driver.set_output(True)
        driver.sleep_us(t_on_us)
        driver.set_output(False)
        driver.sleep_us(t_off_us)


def plan_chirp(spec: ChirpSpec) -> List[StepTiming]:
    """Evaluate and validate every step of a chirp without touching any output."""
    spec.validate()
    plan: List[StepTiming] = []
    for s in range(spec.n_steps + 1):
        f = scale_frequency(spec.scale, s, spec.f_start, spec.f_stop, spec.n_steps, spec.window_width)
        if not math.isfinite(f) or f <= 0:
            raise PreconditionError(
                f"{spec.scale.value} scale yields frequency {f!r} at step {s}/{spec.n_steps}"
            )
        period_us = int(round(US_PER_SECOND / f))
        if period_us < 1:
            raise PreconditionError(f"frequency {f:.1f} Hz at step {s} is too high for microsecond timing")
        t_on, t_off = split_period(period_us, spec.duty)
        plan.append(StepTiming(s, f, period_us, t_on, t_off, spec.duty))
    return plan


def plan_phaser(spec: PhaserSpec) -> List[StepTiming]:
    """Duty cycle sweep at a fixed period, one entry per duty percent."""
    spec.validate()
    period_us = US_PER_SECOND // spec.freq_hz
    plan: List[StepTiming] = []
    for i, d in enumerate(range(spec.duty_start, spec.duty_end + 1)):
        t_on, t_off = split_period(period_us, d)
        plan.append(StepTiming(i, float(spec.freq_hz), period_us, t_on, t_off, d))
    return plan


class ChirpEngine:
    """Play frequency sweeps whose pitch follows a frequency scale."""

    def __init__(self, driver: ToneDriver) -> None:
        self.driver = driver

    def chirp(
        self,
        f_start: float,
        f_stop: float,
        n_steps: int,
        n_periods: int,
        n_chirps: int,
        scale: Scale | str,
        duty: int = 50,
        pause_ms: int = 0,
        *,
        window_width: Optional[int] = None,
    ) -> List[StepTiming]:
        spec = ChirpSpec(
            f_start=float(f_start),
            f_stop=float(f_stop),
            n_steps=int(n_steps),
            n_periods=int(n_periods),
            n_chirps=int(n_chirps),
            scale=Scale.parse(scale),
            duty=int(duty),
            pause_ms=int(pause_ms),
            window_width=None if window_width is None else int(window_width),
        )
        return self.play(spec)

    def play(self, spec: ChirpSpec) -> List[StepTiming]:
        plan = plan_chirp(spec)
        logger.debug(
            "chirp %.1f -> %.1f Hz, %d steps x %d periods, %d chirps (%s, duty %d%%)",
            spec.f_start,
            spec.f_stop,
            spec.n_steps,
            spec.n_periods,
            spec.n_chirps,
            spec.scale.value,
            spec.duty,
            extra={"scale": spec.scale.value},
        )
        for _ in range(spec.n_chirps):
            for timing in plan:
                logger.debug(
                    "%2d: f = %.2f, ton = %d, toff = %d",
                    timing.step,
                    timing.freq_hz,
                    timing.t_on_us,
                    timing.t_off_us,
                )
                emit_pulses(self.driver, timing.t_on_us, timing.t_off_us, spec.n_periods)
            self.driver.sleep_ms(spec.pause_ms)
        return plan


class PhaserEngine:
    """Hold one frequency and sweep the duty cycle instead."""

    def __init__(self, driver: ToneDriver) -> None:
        self.driver = driver

    def phaser(
        self,
        freq_hz: int,
        n_periods: int,
        duty_start: int,
        duty_end: int,
        n_chirps: int,
        pause_ms: int = 0,
    ) -> List[StepTiming]:
        spec = PhaserSpec(
            freq_hz=int(freq_hz),
            n_periods=int(n_periods),
            duty_start=int(duty_start),
            duty_end=int(duty_end),
            n_chirps=int(n_chirps),
            pause_ms=int(pause_ms),
        )
        return self.play(spec)

    def play(self, spec: PhaserSpec) -> List[StepTiming]:
        plan = plan_phaser(spec)
        logger.debug(
            "phaser %d Hz, duty %d..%d %%, %d periods, %d chirps",
            spec.freq_hz,
            spec.duty_start,
            spec.duty_end,
            spec.n_periods,
            spec.n_chirps,
        )
        for _ in range(spec.n_chirps):
            for timing in plan:
                emit_pulses(self.driver, timing.t_on_us, timing.t_off_us, spec.n_periods)
            self.driver.sleep_ms(spec.pause_ms)
        return plan
