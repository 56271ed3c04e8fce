"""Bird voice and concert dispatch on top of the profile registry."""

from __future__ import annotations

from typing import List, Optional, Union

from chirpmaker.birds.profiles import BirdProfile, BirdRegistry, ChirpCall, default_registry
from chirpmaker.birds.runner import ProfileRunner
from chirpmaker.drivers.base import ToneDriver
from chirpmaker.dsp.scales import Scale
from chirpmaker.errors import PreconditionError
from chirpmaker.sweep.types import UINT32_MAX, StepTiming
from chirpmaker.util.logging import get_logger
from chirpmaker.util.rng import RandomSource

logger = get_logger(__name__)

SHORTCUT_PAUSE_MS = 20

SIGNET = (
    ChirpCall(440, 1320, 6, 300, 1, Scale.COSINE_2PI, 50, 1000),
    ChirpCall(1320, 440, 6, 300, 1, Scale.COSINE_2PI, 50, 3000),
)


def _check_pause(pause_ms: int) -> int:
    pause_ms = int(pause_ms)
    if not 0 <= pause_ms <= UINT32_MAX:
        raise PreconditionError(f"pause_ms must be within 0..{UINT32_MAX}, got {pause_ms}")
    return pause_ms


class Chirpmaker:
    """Bird call synthesiser bound to one output line.

    The driver carries the output identifier (e.g. the GPIO pin it was
    opened on); the random source supplies every randomised parameter and
    the concert's choice of performers.
    """

    def __init__(self, driver: ToneDriver, rng: RandomSource, registry: Optional[BirdRegistry] = None) -> None:
        self.driver = driver
        self.rng = rng
        self.registry = registry or default_registry()
        self.runner = ProfileRunner(driver, rng)

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
        return self.runner.chirper.chirp(
            f_start, f_stop, n_steps, n_periods, n_chirps, scale, duty, pause_ms, window_width=window_width
        )

    def phaser(
        self,
        freq_hz: int,
        n_periods: int,
        duty_start: int,
        duty_end: int,
        n_chirps: int,
        pause_ms: int = 0,
    ) -> List[StepTiming]:
        return self.runner.phaser.phaser(freq_hz, n_periods, duty_start, duty_end, n_chirps, pause_ms)

    def _sing(self, profile: BirdProfile) -> None:
        logger.info(
            "Bird %d (%s) is singing",
            profile.id,
            profile.name,
            extra={"bird_id": profile.id, "bird": profile.name},
        )
        self.runner.run(profile)

    def bird_voice(self, bird: Union[int, str], pause_ms: int) -> BirdProfile:
        """Play one profile by id or name, then pause."""
        profile = self.registry.resolve(bird)
        pause_ms = _check_pause(pause_ms)
        self._sing(profile)
        self.driver.sleep_ms(pause_ms)
        return profile

    def bird_concert(self, pause_ms: int, count: Optional[int] = None) -> List[int]:
        """Let randomly chosen birds sing back to back, then pause once.

        Repeats of the same bird are allowed. Returns the ids in the order
        they sang.
        """
        pause_ms = _check_pause(pause_ms)
        n_birds = len(self.registry)
        rounds = n_birds if count is None else int(count)
        if rounds < 0:
            raise PreconditionError(f"concert count must be >= 0, got {rounds}")
        played: List[int] = []
        for _ in range(rounds):
            bird_id = self.rng.uniform_int(0, n_birds - 1)
            self._sing(self.registry.get(bird_id))
            played.append(bird_id)
        self.driver.sleep_ms(pause_ms)
        return played

    def cuckoo(self) -> BirdProfile:
        return self.bird_voice("cuckoo", SHORTCUT_PAUSE_MS)

    def raven(self) -> BirdProfile:
        return self.bird_voice("raven", SHORTCUT_PAUSE_MS)

    def chaffinch(self) -> BirdProfile:
        return self.bird_voice("chaffinch", SHORTCUT_PAUSE_MS)

    def blackbird(self) -> BirdProfile:
        return self.bird_voice("blackbird", SHORTCUT_PAUSE_MS)

    def signet(self) -> None:
        """Station jingle: up and down a cosine swell."""
        self.runner.run_steps(SIGNET)

    def phone_call(self, n_times: int) -> None:
        """Old-style telephone ring, ``n_times`` bursts."""
        self.runner.chirper.chirp(667, 557, 2, 20, n_times, Scale.SINE_PI, 50, 20)
