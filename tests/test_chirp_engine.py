import pytest

from chirpmaker.drivers.recording import RecordingDriver
from chirpmaker.dsp.scales import Scale
from chirpmaker.errors import PreconditionError
from chirpmaker.sweep.engine import ChirpEngine, plan_chirp, split_period
from chirpmaker.sweep.types import ChirpSpec

CHROMATIC_PERIODS = [1000, 871, 758, 660, 574, 500, 435, 379, 330, 287, 250]


def _engine():
    driver = RecordingDriver()
    return ChirpEngine(driver), driver


def _spec(**overrides) -> ChirpSpec:
    params = dict(
        f_start=1000.0,
        f_stop=2000.0,
        n_steps=4,
        n_periods=2,
        n_chirps=1,
        scale=Scale.LINEAR,
        duty=50,
        pause_ms=0,
    )
    params.update(overrides)
    return ChirpSpec(**params)


def test_chromatic_chirp_steps_down_the_period() -> None:
    engine, driver = _engine()
    engine.chirp(1000.0, 4000.0, 10, 1, 1, Scale.CHROMATIC, 50, 0)

    pulses = driver.pulses()
    assert len(pulses) == 11
    assert len(set(pulses)) == 11
    periods = [on + off for on, off in pulses]
    assert periods == CHROMATIC_PERIODS
    assert all(b < a for a, b in zip(periods, periods[1:]))
    for on, off in pulses:
        # Odd periods put the spare microsecond on the low half.
        assert off - on in (0, 1)
    assert driver.pauses() == [0]


def test_strict_high_low_pattern() -> None:
    engine, driver = _engine()
    engine.chirp(1000.0, 1000.0, 0, 3, 1, "linear", 25, 7)

    kinds = [(e.kind, e.value) for e in driver.events]
    pulse = [("out", 1), ("us", 250), ("out", 0), ("us", 750)]
    assert kinds == pulse * 3 + [("ms", 7)]


def test_period_is_split_without_losing_microseconds() -> None:
    for period in (1, 2, 3, 871, 1000, 4567):
        for duty in (1, 33, 50, 99):
            t_on, t_off = split_period(period, duty)
            assert t_on + t_off == period
            assert t_on >= 0 and t_off >= 0


def test_plan_matches_emitted_pulses() -> None:
    engine, driver = _engine()
    spec = _spec(scale=Scale.SINE_PI, n_steps=8, n_periods=1, duty=30)
    plan = engine.play(spec)

    assert [(t.t_on_us, t.t_off_us) for t in plan] == driver.pulses()
    for timing in plan:
        assert timing.period_us == round(1_000_000 / timing.freq_hz)
        assert timing.t_on_us == timing.period_us * 30 // 100


def test_pause_once_per_repetition() -> None:
    engine, driver = _engine()
    engine.chirp(1000.0, 2000.0, 4, 2, 3, Scale.LINEAR, 50, 40)

    assert driver.pauses() == [40, 40, 40]
    assert len(driver.pulses()) == 3 * 5 * 2
    # Every pause follows a complete repetition.
    ms_positions = [i for i, e in enumerate(driver.events) if e.kind == "ms"]
    assert ms_positions[-1] == len(driver.events) - 1


def test_zero_steps_plays_f_stop_only() -> None:
    engine, driver = _engine()
    plan = engine.chirp(1000.0, 2000.0, 0, 4, 1, Scale.CHROMATIC)

    assert len(plan) == 1
    assert plan[0].freq_hz == 2000.0
    assert driver.pulses() == [(250, 250)] * 4


def test_zero_periods_and_chirps_emit_no_pulses() -> None:
    engine, driver = _engine()
    engine.chirp(1000.0, 2000.0, 4, 0, 2, Scale.LINEAR, 50, 5)
    assert driver.pulses() == []
    assert driver.pauses() == [5, 5]

    driver.reset()
    engine.chirp(1000.0, 2000.0, 4, 3, 0, Scale.LINEAR, 50, 5)
    assert driver.events == []


def test_sinc_chirp_honours_window_and_repetitions() -> None:
    engine, driver = _engine()
    plan = engine.chirp(1000.0, 3000.0, 20, 1, 2, Scale.SINC_CENTERED, 50, 10, window_width=2)

    assert len(plan) == 21
    assert max(plan, key=lambda t: t.freq_hz).step == 10
    assert len(driver.pulses()) == 42
    assert driver.pauses() == [10, 10]


@pytest.mark.parametrize(
    "overrides",
    [
        {"f_start": 0.0},
        {"f_stop": -100.0},
        {"f_start": float("nan")},
        {"duty": 0},
        {"duty": 100},
        {"n_steps": -1},
        {"n_periods": -1},
        {"n_chirps": -2},
        {"pause_ms": -1},
        {"pause_ms": 2**32},
        {"scale": Scale.SINC_LEADING},
        {"window_width": 3},
    ],
)
def test_invalid_chirp_emits_nothing(overrides) -> None:
    engine, driver = _engine()
    with pytest.raises(PreconditionError):
        engine.play(_spec(**overrides))
    assert driver.events == []


def test_scale_yielding_non_positive_frequency_is_rejected_up_front() -> None:
    # The sinc side lobes undershoot f_start by about a fifth of the span.
    spec = _spec(f_start=100.0, f_stop=1000.0, n_steps=20, scale=Scale.SINC_CENTERED, window_width=2)
    with pytest.raises(PreconditionError):
        plan_chirp(spec)

    engine, driver = _engine()
    with pytest.raises(PreconditionError):
        engine.play(spec)
    assert driver.events == []


def test_unknown_scale_name_is_rejected() -> None:
    engine, driver = _engine()
    with pytest.raises(PreconditionError):
        engine.chirp(1000.0, 2000.0, 4, 1, 1, "square")
    assert driver.events == []
