"""Bird call profiles: fixed scripts of chirp/phaser calls with randomised parameters."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Sequence, Tuple, Union

from chirpmaker.dsp.scales import Scale
from chirpmaker.errors import PreconditionError, UnknownBirdError
from chirpmaker.sweep.types import UINT32_MAX


@dataclass(frozen=True)
class Range:
    """Inclusive integer range drawn from the random source at call time."""

    lo: int
    hi: int

    def __post_init__(self) -> None:
        if self.lo > self.hi:
            raise PreconditionError(f"empty range [{self.lo}, {self.hi}]")


Param = Union[int, float, Range]


@dataclass(frozen=True)
class ChirpCall:
    f_start: Param
    f_stop: Param
    n_steps: Param
    n_periods: Param
    n_chirps: Param
    scale: Scale
    duty: Param = 50
    pause_ms: Param = 0
    window_width: Optional[int] = None


@dataclass(frozen=True)
class PhaserCall:
    freq_hz: Param
    n_periods: Param
    duty_start: Param
    duty_end: Param
    n_chirps: Param
    pause_ms: Param = 0


@dataclass(frozen=True)
class Pause:
    ms: Param


@dataclass(frozen=True)
class Repeat:
    times: int
    steps: Tuple["Step", ...]


Step = Union[ChirpCall, PhaserCall, Pause, Repeat]


@dataclass(frozen=True)
class BirdProfile:
    id: int
    name: str
    steps: Tuple[Step, ...]
    description: str = ""


def _endpoints(value: Param) -> Tuple[float, float]:
    if isinstance(value, Range):
        return value.lo, value.hi
    return value, value


def _check(where: str, name: str, value: Param, lo: float, hi: Optional[float] = None) -> None:
    for end in _endpoints(value):
        if isinstance(end, bool) or not math.isfinite(end) or end < lo or (hi is not None and end > hi):
            bound = f"{lo}..{hi}" if hi is not None else f">= {lo}"
            raise PreconditionError(f"{where}: {name} {_describe_param(value)} outside {bound}")


def _check_frequency(where: str, name: str, value: Param) -> None:
    for end in _endpoints(value):
        if not math.isfinite(end) or end <= 0:
            raise PreconditionError(f"{where}: {name} {_describe_param(value)} must be a positive frequency")


def check_steps(steps: Sequence[Step], where: str) -> None:
    """Reject any literal or Range bound that could never play.

    Every value a Range can draw is checked, so a profile that passes
    cannot fail halfway through a call on its own parameters.
    """
    for index, step in enumerate(steps):
        at = f"{where} step {index}"
        if isinstance(step, ChirpCall):
            _check_frequency(at, "f_start", step.f_start)
            _check_frequency(at, "f_stop", step.f_stop)
            for name in ("n_steps", "n_periods", "n_chirps"):
                _check(at, name, getattr(step, name), 0)
            _check(at, "duty", step.duty, 1, 99)
            _check(at, "pause_ms", step.pause_ms, 0, UINT32_MAX)
            if step.scale.windowed and (step.window_width is None or step.window_width < 1):
                raise PreconditionError(f"{at}: {step.scale.value} needs window_width >= 1")
            if not step.scale.windowed and step.window_width is not None:
                raise PreconditionError(f"{at}: {step.scale.value} does not take a window_width")
        elif isinstance(step, PhaserCall):
            _check(at, "freq_hz", step.freq_hz, 1, 1_000_000)
            _check(at, "duty_start", step.duty_start, 0, 100)
            _check(at, "duty_end", step.duty_end, 0, 100)
            if _endpoints(step.duty_start)[1] > _endpoints(step.duty_end)[0]:
                raise PreconditionError(f"{at}: duty_start may exceed duty_end")
            _check(at, "n_periods", step.n_periods, 0)
            _check(at, "n_chirps", step.n_chirps, 0)
            _check(at, "pause_ms", step.pause_ms, 0, UINT32_MAX)
        elif isinstance(step, Pause):
            _check(at, "ms", step.ms, 0, UINT32_MAX)
        elif isinstance(step, Repeat):
            if step.times < 0:
                raise PreconditionError(f"{at}: repeat count must be >= 0, got {step.times}")
            check_steps(step.steps, f"{at} (repeat)")
        else:
            raise PreconditionError(f"{at}: unknown profile step {step!r}")


class BirdRegistry:
    """Dense, immutable id -> profile mapping."""

    def __init__(self, profiles: Sequence[BirdProfile]) -> None:
        ordered = tuple(sorted(profiles, key=lambda p: p.id))
        if not ordered:
            raise PreconditionError("a bird registry needs at least one profile")
        for expected, profile in enumerate(ordered):
            if profile.id != expected:
                raise PreconditionError(f"bird ids must be dense 0..N-1; expected {expected}, got {profile.id}")
        names = [p.name.lower() for p in ordered]
        if len(set(names)) != len(names):
            raise PreconditionError("bird names must be unique")
        for profile in ordered:
            check_steps(profile.steps, f"bird {profile.id} ({profile.name})")
        self._profiles = ordered
        self._by_name = {p.name.lower(): p for p in ordered}

    def __len__(self) -> int:
        return len(self._profiles)

    def __iter__(self) -> Iterator[BirdProfile]:
        return iter(self._profiles)

    def get(self, bird_id: int) -> BirdProfile:
        if isinstance(bird_id, bool) or not isinstance(bird_id, int) or not 0 <= bird_id < len(self._profiles):
            raise UnknownBirdError(f"bird id {bird_id!r} outside 0..{len(self._profiles) - 1}")
        return self._profiles[bird_id]

    def by_name(self, name: str) -> BirdProfile:
        try:
            return self._by_name[str(name).strip().lower()]
        except KeyError:
            raise UnknownBirdError(f"no bird named '{name}'") from None

    def resolve(self, bird: Union[int, str]) -> BirdProfile:
        """Look a bird up by id, by numeric string, or by name."""
        if isinstance(bird, str):
            text = bird.strip()
            if text.lstrip("-").isdigit():
                return self.get(int(text))
            return self.by_name(text)
        return self.get(bird)


# Cuckoo interval: minor third 1.18 ... major third 1.25.
CUCKOO_THIRD = 1.222
CUCKOO_CUC_HZ = 667.0  # ~E5
CUCKOO_KOO_HZ = CUCKOO_CUC_HZ / CUCKOO_THIRD


def default_bird_profiles() -> Tuple[BirdProfile, ...]:
    return (
        BirdProfile(
            0,
            "bird0",
            (
                ChirpCall(Range(1200, 1900), Range(4300, 4500), Range(10, 27), Range(1, 5), 5, Scale.CHROMATIC, 50, Range(59, 199)),
                ChirpCall(Range(2000, 2050), Range(3200, 3400), Range(5, 30), Range(2, 15), Range(4, 10), Scale.ATAN_PI, 50, 20),
                ChirpCall(1500, 4500, Range(50, 100), Range(1, 13), Range(1, 5), Scale.SINE_2PI, 50, 100),
            ),
            "rising whistle, saturating trill, long warble",
        ),
        BirdProfile(
            1,
            "bird1",
            (ChirpCall(Range(4200, 4400), Range(2500, 2800), 100, Range(1, 3), Range(3, 9), Scale.CHROMATIC, 50, Range(25, 75)),),
            "falling seeps",
        ),
        BirdProfile(
            2,
            "bird2",
            (
                ChirpCall(Range(3500, 3900), Range(5600, 5900), Range(3, 7), Range(5, 10), 1, Scale.SINE_2PI, 50, Range(50, 100)),
                ChirpCall(Range(5600, 5900), Range(3500, 3900), Range(6, 15), Range(3, 7), 1, Scale.COSINE_2PI, 50, Range(50, 100)),
            ),
            "high wobble up and back",
        ),
        BirdProfile(
            3,
            "bird3",
            (ChirpCall(Range(1280, 1300), Range(1310, 1620), 10, Range(4, 8), Range(2, 9), Scale.LINEAR, 50, Range(100, 200)),),
            "low hoots",
        ),
        BirdProfile(
            4,
            "bird4",
            (
                ChirpCall(4000, 4800, 10, 4, Range(10, 15), Scale.ATAN_2PI, 50, 20),
                ChirpCall(3500, 4300, 15, 10, 1, Scale.ATAN_PI, 50, 20),
                ChirpCall(3500, 3000, 25, 10, 1, Scale.SINE_PI, 50, Range(75, 150)),
            ),
            "fast ticks, swoop, slow arc",
        ),
        BirdProfile(
            5,
            "bird5",
            (ChirpCall(Range(4404, 4484), Range(4380, 4420), 20, Range(1, 4), Range(1, 7), Scale.LINEAR, 50, 250),),
            "flat high peeps",
        ),
        BirdProfile(
            6,
            "bird6",
            (ChirpCall(Range(1000, 1050), Range(900, 1200), 20, Range(1, 5), Range(10, 15), Scale.CHROMATIC, 50, Range(150, 250)),),
            "low chatter",
        ),
        BirdProfile(
            7,
            "bird7",
            (ChirpCall(2600, 4400, 10, 1, Range(5, 9), Scale.CHROMATIC, 50, Range(20, 150)),),
            "quick upward flicks",
        ),
        BirdProfile(
            8,
            "bird8",
            (ChirpCall(1320, 3880, 5, 10, 5, Scale.SINE_2PI, 50, 100),),
            "coarse warble",
        ),
        BirdProfile(
            9,
            "bird9",
            (
                PhaserCall(Range(3500, 3540), Range(6, 12), 5, 50, Range(3, 15), 0),
                PhaserCall(Range(1660, 1800), Range(3, 10), 5, 30, Range(6, 13), Range(100, 300)),
            ),
            "buzzing timbre sweeps",
        ),
        BirdProfile(
            10,
            "bird10",
            (
                ChirpCall(1440, 1880, 20, 10, Range(1, 9), Scale.ATAN_PI, 5, 10),
                ChirpCall(1880, 1440, 20, 10, Range(1, 9), Scale.ATAN_PI, 50, 30),
            ),
            "thin rise, full fall",
        ),
        BirdProfile(
            11,
            "cuckoo",
            (
                Repeat(
                    4,
                    (
                        ChirpCall(CUCKOO_CUC_HZ, CUCKOO_CUC_HZ, 1, 46, 1, Scale.LINEAR, 50, 200),
                        ChirpCall(CUCKOO_KOO_HZ, CUCKOO_KOO_HZ, 1, 52, 1, Scale.LINEAR, 50, 830),
                    ),
                ),
                Pause(300),
            ),
            "four cuck-oo calls a third apart",
        ),
        BirdProfile(
            12,
            "raven",
            (ChirpCall(75, 65, 8, 4, Range(2, 6), Scale.ATAN_PI, 20, 550),),
            "low croaks",
        ),
        BirdProfile(
            13,
            "chaffinch",
            (
                ChirpCall(4000, 5000, 10, Range(15, 30), Range(1, 9), Scale.CHROMATIC, 50, Range(10, 100)),
                ChirpCall(5000, 4000, 10, Range(15, 50), Range(1, 9), Scale.CHROMATIC, 15, Range(10, 30)),
            ),
            "rising trill, reedy descent",
        ),
        BirdProfile(
            14,
            "blackbird",
            (
                ChirpCall(900, 2000, Range(10, 50), 13, Range(1, 4), Scale.ATAN_PI, 50, 80),
                ChirpCall(2400, 1000, Range(15, 65), 8, Range(1, 3), Scale.SINE_2PI, 50, 80),
                ChirpCall(Range(2000, 3000), Range(1200, 1500), Range(75, 120), Range(2, 9), Range(1, 4), Scale.COSINE_2PI, 50, 80),
            ),
            "fluting phrase: glide up, warble, long slow fall",
        ),
    )


def default_registry() -> BirdRegistry:
    return BirdRegistry(default_bird_profiles())


def _describe_param(value: Param) -> Any:
    if isinstance(value, Range):
        return [value.lo, value.hi]
    return value


def _describe_step(step: Step) -> Dict[str, Any]:
    if isinstance(step, ChirpCall):
        payload: Dict[str, Any] = {
            "type": "chirp",
            "f_start": _describe_param(step.f_start),
            "f_stop": _describe_param(step.f_stop),
            "n_steps": _describe_param(step.n_steps),
            "n_periods": _describe_param(step.n_periods),
            "n_chirps": _describe_param(step.n_chirps),
            "scale": step.scale.value,
            "duty": _describe_param(step.duty),
            "pause_ms": _describe_param(step.pause_ms),
        }
        if step.window_width is not None:
            payload["window_width"] = step.window_width
        return payload
    if isinstance(step, PhaserCall):
        return {
            "type": "phaser",
            "freq_hz": _describe_param(step.freq_hz),
            "n_periods": _describe_param(step.n_periods),
            "duty_start": _describe_param(step.duty_start),
            "duty_end": _describe_param(step.duty_end),
            "n_chirps": _describe_param(step.n_chirps),
            "pause_ms": _describe_param(step.pause_ms),
        }
    if isinstance(step, Pause):
        return {"type": "pause", "ms": _describe_param(step.ms)}
    if isinstance(step, Repeat):
        return {"type": "repeat", "times": step.times, "steps": [_describe_step(s) for s in step.steps]}
    raise TypeError(f"unknown profile step {step!r}")


def serialize_registry(registry: Optional[BirdRegistry] = None) -> Dict[str, Any]:
    """Return a JSON-serialisable description of every profile in id order.

    Ranges are rendered as ``[lo, hi]`` lists.
    """
    registry = registry or default_registry()
    return {
        "birds": [
            {
                "id": profile.id,
                "name": profile.name,
                "description": profile.description,
                "steps": [_describe_step(step) for step in profile.steps],
            }
            for profile in registry
        ]
    }
