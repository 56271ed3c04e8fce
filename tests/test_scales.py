import math

import numpy as np
import pytest

from chirpmaker.dsp.scales import Scale, scale_curve, scale_frequency, sinc
from chirpmaker.errors import PreconditionError

PLAIN_SCALES = [s for s in Scale if not s.windowed]
# sine_2pi starts on the centre frequency instead of f_start.
EDGE_SCALES = [s for s in PLAIN_SCALES if s is not Scale.SINE_2PI]
SINC_SCALES = [s for s in Scale if s.windowed]


@pytest.mark.parametrize("scale", EDGE_SCALES)
def test_plain_scales_start_at_f_start(scale: Scale) -> None:
    value = scale_frequency(scale, 0, 1200.0, 4400.0, 16)
    assert value == pytest.approx(1200.0, rel=1e-9)


@pytest.mark.parametrize("scale", SINC_SCALES)
def test_sinc_scales_start_at_window_edge(scale: Scale) -> None:
    # sin(k*pi)/(k*pi) is zero only up to float noise, so the edge is approximate.
    value = scale_frequency(scale, 0, 1000.0, 3000.0, 20, window_width=2)
    assert value == pytest.approx(1000.0, abs=1e-9)


def test_linear_and_chromatic_hit_f_stop_on_last_step() -> None:
    assert scale_frequency(Scale.LINEAR, 10, 1000.0, 4000.0, 10) == pytest.approx(4000.0, rel=1e-9)
    assert scale_frequency(Scale.CHROMATIC, 10, 1000.0, 4000.0, 10) == pytest.approx(4000.0, rel=1e-9)


def test_linear_midpoint_is_arithmetic_mean() -> None:
    assert scale_frequency("linear", 5, 1000.0, 2000.0, 10) == pytest.approx(1500.0)


def test_chromatic_ratio_is_constant() -> None:
    freqs = scale_curve(Scale.CHROMATIC, 1000.0, 4000.0, 10)
    ratios = freqs[1:] / freqs[:-1]
    assert np.allclose(ratios, ratios[0], rtol=1e-12)
    assert ratios[0] == pytest.approx(4.0 ** 0.1)


def test_chromatic_rejects_non_positive_endpoints() -> None:
    with pytest.raises(PreconditionError):
        scale_frequency(Scale.CHROMATIC, 1, 0.0, 4000.0, 10)
    with pytest.raises(PreconditionError):
        scale_frequency(Scale.CHROMATIC, 1, 1000.0, -5.0, 10)


def test_sine_pi_peaks_at_f_stop_and_returns() -> None:
    assert scale_frequency(Scale.SINE_PI, 5, 1000.0, 3000.0, 10) == pytest.approx(3000.0)
    assert scale_frequency(Scale.SINE_PI, 10, 1000.0, 3000.0, 10) == pytest.approx(1000.0, abs=1e-9)


def test_sine_2pi_is_centred_on_mean() -> None:
    fm = (1000.0 + 3000.0) / 2.0
    assert scale_frequency(Scale.SINE_2PI, 0, 1000.0, 3000.0, 12) == pytest.approx(fm)
    assert scale_frequency(Scale.SINE_2PI, 3, 1000.0, 3000.0, 12) == pytest.approx(3000.0)
    assert scale_frequency(Scale.SINE_2PI, 9, 1000.0, 3000.0, 12) == pytest.approx(1000.0)
    assert scale_frequency(Scale.SINE_2PI, 12, 1000.0, 3000.0, 12) == pytest.approx(fm)


def test_cosine_variants_swing_to_f_stop_and_back() -> None:
    assert scale_frequency(Scale.COSINE_PI, 10, 1000.0, 3000.0, 10) == pytest.approx(3000.0)
    assert scale_frequency(Scale.COSINE_2PI, 5, 1000.0, 3000.0, 10) == pytest.approx(3000.0)
    assert scale_frequency(Scale.COSINE_2PI, 10, 1000.0, 3000.0, 10) == pytest.approx(1000.0)


def test_atan_scales_rise_monotonically_to_f_stop() -> None:
    assert scale_frequency(Scale.ATAN_PI, 10, 1000.0, 3000.0, 10) == pytest.approx(3000.0)
    freqs = scale_curve(Scale.ATAN_2PI, 1000.0, 3000.0, 10)
    assert np.all(np.diff(freqs) > 0)
    assert np.all(freqs <= 3000.0 + 1e-9)
    # Steepest at the start: the first step covers more than any later one.
    assert np.argmax(np.diff(freqs)) == 0


def test_sinc_centered_peaks_mid_sweep() -> None:
    freqs = scale_curve(Scale.SINC_CENTERED, 1000.0, 3000.0, 20, window_width=2)
    assert freqs[10] == pytest.approx(3000.0)
    assert freqs[-1] == pytest.approx(1000.0, abs=1e-9)
    assert int(np.argmax(freqs)) == 10


def test_sinc_trailing_peaks_on_last_step() -> None:
    freqs = scale_curve(Scale.SINC_TRAILING, 1000.0, 3000.0, 20, window_width=2)
    assert freqs[-1] == pytest.approx(3000.0)
    assert int(np.argmax(freqs)) == 20


def test_sinc_leading_starts_on_f_start_and_settles_on_f_stop() -> None:
    freqs = scale_curve(Scale.SINC_LEADING, 1000.0, 3000.0, 20, window_width=2)
    assert freqs[0] == pytest.approx(1000.0)
    assert freqs[-1] == pytest.approx(3000.0, abs=1e-9)


def test_sinc_leading_mirrors_trailing() -> None:
    leading = scale_curve(Scale.SINC_LEADING, 1000.0, 3000.0, 20, window_width=3)
    trailing = scale_curve(Scale.SINC_TRAILING, 3000.0, 1000.0, 20, window_width=3)
    assert int(np.argmin(leading)) == 0
    assert leading == pytest.approx(trailing[::-1], abs=1e-6)


def test_sinc_is_pinned_near_zero() -> None:
    assert sinc(0.0) == 1.0
    assert sinc(5e-4) == 1.0
    assert sinc(math.pi) == pytest.approx(0.0, abs=1e-15)


def test_zero_steps_collapses_to_f_stop() -> None:
    for scale in PLAIN_SCALES:
        assert scale_frequency(scale, 0, 1000.0, 1500.0, 0) == 1500.0


def test_step_outside_range_is_rejected() -> None:
    with pytest.raises(PreconditionError):
        scale_frequency(Scale.LINEAR, 11, 1000.0, 2000.0, 10)
    with pytest.raises(PreconditionError):
        scale_frequency(Scale.LINEAR, -1, 1000.0, 2000.0, 10)


def test_window_width_rules() -> None:
    with pytest.raises(PreconditionError):
        scale_frequency(Scale.SINC_CENTERED, 0, 1000.0, 2000.0, 10)
    with pytest.raises(PreconditionError):
        scale_frequency(Scale.LINEAR, 0, 1000.0, 2000.0, 10, window_width=2)


def test_scale_parse_accepts_camel_names() -> None:
    assert Scale.parse("sine2Pi") is Scale.SINE_2PI
    assert Scale.parse("ATAN_PI") is Scale.ATAN_PI
    with pytest.raises(PreconditionError):
        Scale.parse("sawtooth")
