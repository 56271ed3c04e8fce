"""Exception types raised by the chirpmaker core.

Every invalid input is rejected before a single pulse reaches the output
line, so callers can rely on the line still being low when one of these
propagates out of an engine or dispatcher call.
"""

from __future__ import annotations


class ChirpmakerError(Exception):
    """Base class for all chirpmaker failures."""


class PreconditionError(ChirpmakerError, ValueError):
    """A parameter (or a frequency derived from it) is outside its valid domain."""


class UnknownBirdError(PreconditionError, LookupError):
    """The requested bird profile id or name is not in the registry."""


class DriverUnavailableError(ChirpmakerError, RuntimeError):
    """A hardware output backend could not be opened."""
