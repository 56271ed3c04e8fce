"""Frequency scales: step index -> frequency along a chosen curve.

All scales share the signature ``(step, f_start, f_stop, n_steps)``; the
windowed sinc variants take an extra ``window_width`` (number of half
periods of the sinc on each side of its peak).
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional

import numpy as np

from chirpmaker.errors import PreconditionError

SINC_EPSILON = 1e-3


class Scale(str, Enum):
    LINEAR = "linear"
    CHROMATIC = "chromatic"
    SINE_PI = "sine_pi"
    SINE_2PI = "sine_2pi"
    COSINE_PI = "cosine_pi"
    COSINE_2PI = "cosine_2pi"
    ATAN_PI = "atan_pi"
    ATAN_2PI = "atan_2pi"
    SINC_CENTERED = "sinc_centered"
    SINC_LEADING = "sinc_leading"
    SINC_TRAILING = "sinc_trailing"

    @property
    def windowed(self) -> bool:
        return self in (Scale.SINC_CENTERED, Scale.SINC_LEADING, Scale.SINC_TRAILING)

    @classmethod
    def parse(cls, value: "Scale | str") -> "Scale":
        """Accept an enum member, its value, or a name like ``sine2Pi``."""
        if isinstance(value, Scale):
            return value
        text = str(value).strip().lower().replace("-", "_")
        for member in cls:
            if text in (member.value, member.value.replace("_", "")):
                return member
        raise PreconditionError(f"unknown scale '{value}'")


def sinc(x: float) -> float:
    """Unnormalised sinc, pinned to 1 near the origin."""
    return 1.0 if abs(x) < SINC_EPSILON else math.sin(x) / x


def linear_scale(step: int, f_start: float, f_stop: float, n_steps: int) -> float:
    df = (f_stop - f_start) / n_steps
    return f_start + step * df


def chromatic_scale(step: int, f_start: float, f_stop: float, n_steps: int) -> float:
    """Equal frequency ratio per step: f_stop = f_start * exp(k * n_steps)."""
    if f_start <= 0 or f_stop <= 0:
        raise PreconditionError("chromatic scale needs positive start and stop frequencies")
    k = math.log(f_stop / f_start) / n_steps
    return f_start * math.exp(k * step)


def sine_pi_scale(step: int, f_start: float, f_stop: float, n_steps: int) -> float:
    fa = f_stop - f_start
    return f_start + fa * math.sin(math.pi / n_steps * step)


def sine_2pi_scale(step: int, f_start: float, f_stop: float, n_steps: int) -> float:
    fm = (f_start + f_stop) / 2.0
    fa = (f_stop - f_start) / 2.0
    return fm + fa * math.sin(2.0 * math.pi / n_steps * step)


def cosine_pi_scale(step: int, f_start: float, f_stop: float, n_steps: int) -> float:
    fm = (f_start + f_stop) / 2.0
    fa = (f_stop - f_start) / 2.0
    return fm - fa * math.cos(math.pi / n_steps * step)


def cosine_2pi_scale(step: int, f_start: float, f_stop: float, n_steps: int) -> float:
    fm = (f_start + f_stop) / 2.0
    fa = (f_stop - f_start) / 2.0
    return fm - fa * math.cos(2.0 * math.pi / n_steps * step)


def atan_pi_scale(step: int, f_start: float, f_stop: float, n_steps: int) -> float:
    # Ease-out glide: steepest on the first steps, flattening toward f_stop.
    k = (f_stop - f_start) / math.atan(math.pi)
    return f_start + k * math.atan(math.pi / n_steps * step)


def atan_2pi_scale(step: int, f_start: float, f_stop: float, n_steps: int) -> float:
    k = (f_stop - f_start) / math.atan(2.0 * math.pi)
    return f_start + k * math.atan(2.0 * math.pi / n_steps * step)


def sinc_centered_scale(step: int, f_start: float, f_stop: float, n_steps: int, window_width: int) -> float:
    """Sinc peak (f_stop) in the middle of the sweep, f_start at both edges."""
    half_range = window_width * math.pi
    k = 2.0 * half_range / n_steps
    return f_start + (f_stop - f_start) * sinc(k * step - half_range)


def sinc_trailing_scale(step: int, f_start: float, f_stop: float, n_steps: int, window_width: int) -> float:
    """Rings up from f_start and peaks at f_stop on the last step.

    The sinc window spans [-N*pi, 0] over the sweep, so the main lobe is at
    the end; "trailing" names where the peak sits.
    """
    full_range = window_width * math.pi
    k = full_range / n_steps
    return f_start + (f_stop - f_start) * sinc(k * step - full_range)


def sinc_leading_scale(step: int, f_start: float, f_stop: float, n_steps: int, window_width: int) -> float:
    """Peaks at f_start on step 0 and rings out toward f_stop.

    The sinc window spans [0, N*pi] with the endpoints swapped, so the main
    lobe leads the sweep; the mirror image of sinc_trailing_scale.
    """
    f_start, f_stop = f_stop, f_start
    k = window_width * math.pi / n_steps
    return f_start + (f_stop - f_start) * sinc(k * step)


def scale_frequency(
    scale: Scale | str,
    step: int,
    f_start: float,
    f_stop: float,
    n_steps: int,
    window_width: Optional[int] = None,
) -> float:
    """Evaluate ``scale`` at ``step`` of a sweep from f_start to f_stop."""
    scale = Scale.parse(scale)
    if n_steps < 0:
        raise PreconditionError(f"n_steps must be >= 0, got {n_steps}")
    if not 0 <= step <= n_steps:
        raise PreconditionError(f"step {step} outside 0..{n_steps}")
    if scale.windowed:
        if window_width is None or int(window_width) < 1:
            raise PreconditionError(f"{scale.value} needs window_width >= 1")
    elif window_width is not None:
        raise PreconditionError(f"{scale.value} does not take a window_width")

    if n_steps == 0:
        return float(f_stop)

    if scale is Scale.LINEAR:
        return linear_scale(step, f_start, f_stop, n_steps)
    elif scale is Scale.CHROMATIC:
        return chromatic_scale(step, f_start, f_stop, n_steps)
    elif scale is Scale.SINE_PI:
        return sine_pi_scale(step, f_start, f_stop, n_steps)
    elif scale is Scale.SINE_2PI:
        return sine_2pi_scale(step, f_start, f_stop, n_steps)
    elif scale is Scale.COSINE_PI:
        return cosine_pi_scale(step, f_start, f_stop, n_steps)
    elif scale is Scale.COSINE_2PI:
        return cosine_2pi_scale(step, f_start, f_stop, n_steps)
    elif scale is Scale.ATAN_PI:
        return atan_pi_scale(step, f_start, f_stop, n_steps)
    elif scale is Scale.ATAN_2PI:
        return atan_2pi_scale(step, f_start, f_stop, n_steps)
    elif scale is Scale.SINC_CENTERED:
        return sinc_centered_scale(step, f_start, f_stop, n_steps, int(window_width))
    elif scale is Scale.SINC_LEADING:
        return sinc_leading_scale(step, f_start, f_stop, n_steps, int(window_width))
    elif scale is Scale.SINC_TRAILING:
        return sinc_trailing_scale(step, f_start, f_stop, n_steps, int(window_width))
    raise PreconditionError(f"unhandled scale {scale!r}")


def scale_curve(
    scale: Scale | str,
    f_start: float,
    f_stop: float,
    n_steps: int,
    window_width: Optional[int] = None,
) -> np.ndarray:
    """Return all ``n_steps + 1`` frequencies of a sweep as a float64 array."""
    if n_steps < 0:
        raise PreconditionError(f"n_steps must be >= 0, got {n_steps}")
    return np.fromiter(
        (scale_frequency(scale, s, f_start, f_stop, n_steps, window_width) for s in range(n_steps + 1)),
        dtype=np.float64,
        count=n_steps + 1,
    )
