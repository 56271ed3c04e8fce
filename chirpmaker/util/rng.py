"""Random sources used to vary bird calls and pick concert performers."""

from __future__ import annotations

from typing import Optional, Protocol

import numpy as np

from chirpmaker.errors import PreconditionError


class RandomSource(Protocol):
    def uniform_int(self, lo: int, hi: int) -> int:
        """Return an integer drawn uniformly from the inclusive range [lo, hi]."""
        ...


class SeededRandom:
    """numpy-backed RandomSource; a fixed seed replays the same draws."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def uniform_int(self, lo: int, hi: int) -> int:
        lo, hi = int(lo), int(hi)
        if lo > hi:
            raise PreconditionError(f"empty random range [{lo}, {hi}]")
        return int(self._rng.integers(lo, hi, endpoint=True))
