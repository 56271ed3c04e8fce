"""Value types consumed and produced by the chirp and phaser engines."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from chirpmaker.dsp.scales import Scale
from chirpmaker.errors import PreconditionError

UINT32_MAX = 2**32 - 1


def _require_u32(name: str, value: int) -> None:
    if not 0 <= value <= UINT32_MAX:
        raise PreconditionError(f"{name} must be within 0..{UINT32_MAX}, got {value}")


def _require_count(name: str, value: int) -> None:
    if value < 0:
        raise PreconditionError(f"{name} must be >= 0, got {value}")


@dataclass(frozen=True)
class ChirpSpec:
    f_start: float
    f_stop: float
    n_steps: int
    n_periods: int
    n_chirps: int
    scale: Scale
    duty: int = 50
    pause_ms: int = 0
    window_width: Optional[int] = None

    def validate(self) -> "ChirpSpec":
        for name in ("f_start", "f_stop"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise PreconditionError(f"{name} must be a positive frequency, got {value}")
        _require_count("n_steps", self.n_steps)
        _require_count("n_periods", self.n_periods)
        _require_count("n_chirps", self.n_chirps)
        if not 1 <= self.duty <= 99:
            raise PreconditionError(f"duty must be within 1..99 %, got {self.duty}")
        _require_u32("pause_ms", self.pause_ms)
        if self.scale.windowed and (self.window_width is None or self.window_width < 1):
            raise PreconditionError(f"{self.scale.value} needs window_width >= 1")
        if not self.scale.windowed and self.window_width is not None:
            raise PreconditionError(f"{self.scale.value} does not take a window_width")
        return self


@dataclass(frozen=True)
class PhaserSpec:
    freq_hz: int
    n_periods: int
    duty_start: int
    duty_end: int
    n_chirps: int
    pause_ms: int = 0

    def validate(self) -> "PhaserSpec":
        if self.freq_hz <= 0:
            raise PreconditionError(f"freq_hz must be positive, got {self.freq_hz}")
        if self.freq_hz > 1_000_000:
            raise PreconditionError(f"freq_hz {self.freq_hz} leaves no whole microsecond per period")
        if not 0 <= self.duty_start <= 100 or not 0 <= self.duty_end <= 100:
            raise PreconditionError(f"duty range {self.duty_start}..{self.duty_end} outside 0..100")
        if self.duty_start > self.duty_end:
            raise PreconditionError(f"duty_start {self.duty_start} exceeds duty_end {self.duty_end}")
        _require_count("n_periods", self.n_periods)
        _require_count("n_chirps", self.n_chirps)
        _require_u32("pause_ms", self.pause_ms)
        return self


@dataclass(frozen=True)
class StepTiming:
    """One frequency step of a sweep, already converted to pulse timing."""

    step: int
    freq_hz: float
    period_us: int
    t_on_us: int
    t_off_us: int
    duty: int
