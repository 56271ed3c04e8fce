"""Render the output line to a WAV file instead of real hardware.

Sleeps are virtual: each call only advances the timeline, so a full bird
concert renders in a fraction of its playing time.  Sample boundaries are
computed from the cumulative timeline position, never from individual
durations, which keeps long renders free of rounding drift.
"""

from __future__ import annotations

import wave
from pathlib import Path
from typing import List, Tuple

import numpy as np

DEFAULT_SAMPLE_RATE = 44_100
DEFAULT_AMPLITUDE = 0.6


class WavDriver:
    def __init__(
        self,
        path: str | Path,
        sample_rate: int = DEFAULT_SAMPLE_RATE,
        amplitude: float = DEFAULT_AMPLITUDE,
    ) -> None:
        if sample_rate <= 0:
            raise ValueError("sample_rate must be positive")
        if not 0.0 < amplitude <= 1.0:
            raise ValueError("amplitude must be within (0, 1]")
        self.path = Path(path)
        self.sample_rate = int(sample_rate)
        self.amplitude = float(amplitude)
        self.level = False
        self.clock_us = 0
        self._segments: List[Tuple[int, int, bool]] = []  # (start_us, end_us, level)

    def set_output(self, high: bool) -> None:
        self.level = bool(high)

    def sleep_us(self, us: int) -> None:
        self._advance(int(us))

    def sleep_ms(self, ms: int) -> None:
        self._advance(int(ms) * 1000)

    def _advance(self, us: int) -> None:
        if us <= 0:
            return
        start = self.clock_us
        self.clock_us += us
        if self._segments and self._segments[-1][2] == self.level and self._segments[-1][1] == start:
            self._segments[-1] = (self._segments[-1][0], self.clock_us, self.level)
        else:
            self._segments.append((start, self.clock_us, self.level))

    def render(self) -> np.ndarray:
        """Return the timeline as float32 samples in [0, amplitude]."""
        total = self._sample_index(self.clock_us)
        out = np.zeros(total, dtype=np.float32)
        for start_us, end_us, level in self._segments:
            if not level:
                continue
            out[self._sample_index(start_us) : self._sample_index(end_us)] = self.amplitude
        return out

    def _sample_index(self, at_us: int) -> int:
        return int(round(at_us * self.sample_rate / 1_000_000))

    def write(self) -> Path:
        samples = self.render()
        pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with wave.open(str(self.path), "wb") as fh:
            fh.setnchannels(1)
            fh.setsampwidth(2)
            fh.setframerate(self.sample_rate)
            fh.writeframes(pcm.tobytes())
        return self.path

    def close(self) -> None:
        if self.clock_us > 0:
            self.write()

    @property
    def duration_s(self) -> float:
        return self.clock_us / 1_000_000
