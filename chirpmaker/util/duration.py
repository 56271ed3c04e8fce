"""Pause duration parsing for CLI arguments and HTTP parameters."""

from __future__ import annotations

import argparse
import math
from typing import Any, Optional

_MULTIPLIERS_MS = {
    "ms": 1.0,
    "s": 1000.0,
    "m": 60_000.0,
}


def parse_duration_to_ms(spec: Optional[Any]) -> Optional[int]:
    """Parse '250', '250ms', '2s' or '1m' into whole milliseconds.

    A bare number is taken as milliseconds, the unit the engines pause in.
    """
    if spec is None:
        return None
    if isinstance(spec, (int, float)):
        value, unit = float(spec), "ms"
    else:
        text = str(spec).strip().lower()
        if not text:
            return None
        if text.endswith("ms"):
            value_part, unit = text[:-2], "ms"
        elif text[-1].isalpha():
            value_part, unit = text[:-1], text[-1]
        else:
            value_part, unit = text, "ms"
        if unit not in _MULTIPLIERS_MS:
            raise argparse.ArgumentTypeError(f"Unsupported duration suffix '{unit}'")
        try:
            value = float(value_part)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"Invalid duration '{spec}'") from exc
    if not math.isfinite(value):
        raise argparse.ArgumentTypeError(f"Duration must be finite: '{spec}'")
    if value < 0:
        raise argparse.ArgumentTypeError(f"Duration must not be negative: '{spec}'")
    return int(round(value * _MULTIPLIERS_MS[unit]))
