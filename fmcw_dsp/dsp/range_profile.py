"""Range processing for a single chirp.

`range_fft` windows one chirp with a Hamming window and transforms it
into range bins.  The helpers convert between bins and metres.
"""

from __future__ import annotations

import math

import numpy as np

from ..errors import ConfigurationError, DimensionMismatch, InsufficientData
from .fft import dft
from .windows import get_window

SPEED_OF_LIGHT = 299792458.0


def range_fft(signal: np.ndarray, apply_window: bool = True, method: str = "fft") -> np.ndarray:
    """Compute the range profile of one chirp.

    Parameters
    ----------
    signal : np.ndarray
        Complex time-domain samples of one chirp, length `N`.
    apply_window : bool, optional
        Multiply by a Hamming window before transforming.  Defaults to
        True.  The caller's array is never modified.
    method : str, optional
        Transform implementation, see `fmcw_dsp.dsp.fft.dft`.

    Returns
    -------
    np.ndarray
        Complex spectrum of length `N`; bin `k` corresponds to
        frequency `k * sample_rate / N`.
    """
    x = np.asarray(signal, dtype=np.complex128)
    if x.ndim != 1:
        raise DimensionMismatch("range_fft expects a one-dimensional signal")
    if x.shape[0] == 0:
        raise InsufficientData("cannot range-process an empty chirp")
    if apply_window:
        # multiplication allocates, the input stays untouched
        x = x * get_window("hamming", x.shape[0])
    return dft(x, method=method)


def range_resolution(bandwidth: float, c: float = SPEED_OF_LIGHT) -> float:
    """Return the range resolution `c / (2 * bandwidth)` in metres."""
    if not math.isfinite(bandwidth) or bandwidth <= 0:
        raise ConfigurationError("bandwidth must be positive and finite")
    return c / (2.0 * bandwidth)


def bin_to_range(bin: int, total_bins: int, max_range: float) -> float:
    """Map a range bin index to metres, `bin * max_range / total_bins`."""
    if total_bins <= 0:
        raise ConfigurationError("total_bins must be positive")
    return (bin * max_range) / total_bins
