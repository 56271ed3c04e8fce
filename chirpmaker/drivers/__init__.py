"""Output backends for the tone engines."""

from __future__ import annotations

from typing import Optional

from chirpmaker.drivers.base import ToneDriver
from chirpmaker.drivers.recording import RecordingDriver

DRIVER_KINDS = ("gpio", "wav", "dry-run")


def open_driver(
    kind: str,
    *,
    pin: int,
    wav_path: Optional[str] = None,
    sample_rate: int = 44_100,
) -> ToneDriver:
    """Build the driver selected on the command line or in the environment."""
    kind = (kind or "").strip().lower()
    if kind == "gpio":
        from chirpmaker.drivers.gpio import GPIODriver

        return GPIODriver(pin)
    if kind == "wav":
        if not wav_path:
            raise ValueError("the wav driver needs an output path")
        from chirpmaker.drivers.wav import WavDriver

        return WavDriver(wav_path, sample_rate=sample_rate)
    if kind in ("dry-run", "dry_run", "dryrun"):
        return RecordingDriver()
    raise ValueError(f"unknown driver '{kind}' (choose from {', '.join(DRIVER_KINDS)})")


__all__ = ["DRIVER_KINDS", "RecordingDriver", "ToneDriver", "open_driver"]
