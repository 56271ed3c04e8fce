"""In-memory driver that records every output call on a virtual clock."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class DriverEvent:
    kind: str  # "out", "us", "ms"
    value: int
    at_us: int


class RecordingDriver:
    """Never sleeps; keeps the call sequence for inspection and dry runs."""

    def __init__(self) -> None:
        self.events: List[DriverEvent] = []
        self.clock_us = 0
        self.level = False

    def set_output(self, high: bool) -> None:
        self.level = bool(high)
        self.events.append(DriverEvent("out", int(self.level), self.clock_us))

    def sleep_us(self, us: int) -> None:
        self.events.append(DriverEvent("us", int(us), self.clock_us))
        self.clock_us += int(us)

    def sleep_ms(self, ms: int) -> None:
        self.events.append(DriverEvent("ms", int(ms), self.clock_us))
        self.clock_us += int(ms) * 1000

    def close(self) -> None:
        self.level = False

    def reset(self) -> None:
        self.events.clear()
        self.clock_us = 0
        self.level = False

    def pulses(self) -> List[Tuple[int, int]]:
        """Return the (t_on, t_off) pairs in emission order."""
        out: List[Tuple[int, int]] = []
        ev = self.events
        i = 0
        while i + 3 < len(ev):
            if (
                ev[i].kind == "out"
                and ev[i].value == 1
                and ev[i + 1].kind == "us"
                and ev[i + 2].kind == "out"
                and ev[i + 2].value == 0
                and ev[i + 3].kind == "us"
            ):
                out.append((ev[i + 1].value, ev[i + 3].value))
                i += 4
            else:
                i += 1
        return out

    def pauses(self) -> List[int]:
        return [e.value for e in self.events if e.kind == "ms"]

    @property
    def elapsed_ms(self) -> float:
        return self.clock_us / 1000.0
