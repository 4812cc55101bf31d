"""Exception types raised by the processing stages.

All failures are local validation errors raised before any output is
produced.  Each class also derives from `ValueError` so callers that
already guard numpy/scipy calls with `except ValueError` keep working.
Out-of-range bin indices use the builtin `IndexError`.
"""

from __future__ import annotations


class RadarDSPError(Exception):
    """Base class for all processing errors."""


class ConfigurationError(RadarDSPError, ValueError):
    """A parameter is non-positive, non-finite or otherwise invalid."""


class InsufficientData(RadarDSPError, ValueError):
    """Too few samples, pulses or chirps for the requested algorithm."""


class DimensionMismatch(RadarDSPError, ValueError):
    """Buffer lengths or shapes are inconsistent with each other."""


__all__ = [
    "RadarDSPError",
    "ConfigurationError",
    "InsufficientData",
    "DimensionMismatch",
]
