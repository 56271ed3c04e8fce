"""Raspberry Pi GPIO output driver (RPi.GPIO)."""

from __future__ import annotations

import time

from chirpmaker.errors import DriverUnavailableError

try:  # pragma: no cover - optional dependency
    import RPi.GPIO as GPIO  # type: ignore

    HAVE_GPIO = True
except Exception:  # pragma: no cover - optional dependency
    HAVE_GPIO = False
    GPIO = None  # type: ignore

# Below this, time.sleep() overshoots too much to shape audio periods.
BUSY_WAIT_LIMIT_US = 2000


class GPIODriver:
    """Toggle one BCM pin wired to a piezo buzzer."""

    def __init__(self, pin: int) -> None:
        if not HAVE_GPIO:
            raise DriverUnavailableError("RPi.GPIO not available")
        self.pin = int(pin)
        GPIO.setwarnings(False)  # type: ignore[union-attr]
        GPIO.setmode(GPIO.BCM)  # type: ignore[union-attr]
        GPIO.setup(self.pin, GPIO.OUT, initial=GPIO.LOW)  # type: ignore[union-attr]

    def set_output(self, high: bool) -> None:
        GPIO.output(self.pin, GPIO.HIGH if high else GPIO.LOW)  # type: ignore[union-attr]

    def sleep_us(self, us: int) -> None:
        if us <= 0:
            return
        if us >= BUSY_WAIT_LIMIT_US:
            time.sleep(us / 1_000_000)
            return
        deadline = time.perf_counter_ns() + us * 1000
        while time.perf_counter_ns() < deadline:
            pass

    def sleep_ms(self, ms: int) -> None:
        if ms > 0:
            time.sleep(ms / 1000.0)

    def close(self) -> None:
        try:
            GPIO.output(self.pin, GPIO.LOW)  # type: ignore[union-attr]
            GPIO.cleanup(self.pin)  # type: ignore[union-attr]
        except Exception:
            pass
