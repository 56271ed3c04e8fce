"""Output driver interface shared by all tone backends."""

from __future__ import annotations

from typing import Protocol


class ToneDriver(Protocol):
    """A single binary output line plus the blocking delays used to shape it.

    The engines only ever call ``set_output(True)``, ``sleep_us(t_on)``,
    ``set_output(False)``, ``sleep_us(t_off)`` per pulse, and ``sleep_ms``
    at documented pause points.
    """

    def set_output(self, high: bool) -> None: ...

    def sleep_us(self, us: int) -> None: ...

    def sleep_ms(self, ms: int) -> None: ...
