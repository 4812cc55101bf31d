"""Doppler processing across chirps.

A stack of range profiles has shape `(chirps, range_bins)`.  For a
fixed range bin the slow-time sequence across chirps is transformed
with the same DFT definition as the range stage, yielding a velocity
spectrum with one bin per chirp.
"""

from __future__ import annotations

import math
import operator
from typing import Sequence, Union

import numpy as np

from ..errors import ConfigurationError, DimensionMismatch, InsufficientData
from .fft import dft

ProfileStack = Union[np.ndarray, Sequence[Sequence[complex]]]


def stack_profiles(range_profiles: ProfileStack) -> np.ndarray:
    """Convert range profiles into a contiguous `(chirps, bins)` array.

    Raises `DimensionMismatch` when the profiles do not all have the
    same length and `InsufficientData` when there are none.
    """
    if isinstance(range_profiles, np.ndarray):
        stacked = np.asarray(range_profiles, dtype=np.complex128)
    else:
        rows = [np.asarray(p, dtype=np.complex128) for p in range_profiles]
        if not rows:
            raise InsufficientData("no range profiles supplied")
        lengths = {r.shape for r in rows}
        if len(lengths) != 1:
            raise DimensionMismatch(f"range profiles have inconsistent shapes: {sorted(lengths)}")
        stacked = np.stack(rows)
    if stacked.ndim != 2:
        raise DimensionMismatch("range profiles must form a two-dimensional stack")
    if stacked.shape[0] == 0:
        raise InsufficientData("no range profiles supplied")
    return stacked


def check_bin(index: int, size: int, name: str = "range_bin") -> int:
    """Validate a bin index without Python's negative wrap-around."""
    index = operator.index(index)
    if index < 0 or index >= size:
        raise IndexError(f"{name} {index} out of range for {size} bins")
    return index


def doppler_fft(range_profiles: ProfileStack, range_bin: int, method: str = "fft") -> np.ndarray:
    """Compute the velocity spectrum of one range bin.

    Parameters
    ----------
    range_profiles : array-like
        Range profiles indexed `[chirp][range_bin]`.
    range_bin : int
        The range bin to analyse.
    method : str, optional
        Transform implementation, see `fmcw_dsp.dsp.fft.dft`.

    Returns
    -------
    np.ndarray
        Complex velocity spectrum with one bin per chirp.  Bins are not
        shifted; zero Doppler is at index 0.
    """
    stacked = stack_profiles(range_profiles)
    range_bin = check_bin(range_bin, stacked.shape[1])
    slow_time = stacked[:, range_bin].copy()
    return dft(slow_time, method=method)


def velocity_resolution(wavelength: float, num_chirps: int, frame_time: float) -> float:
    """Return the velocity resolution in m/s.

    Computed as `wavelength / (2 * num_chirps * (frame_time / num_chirps))`,
    i.e. the per-chirp interval multiplied back up to the frame time.
    """
    if num_chirps <= 0:
        raise ConfigurationError("num_chirps must be positive")
    if not math.isfinite(frame_time) or frame_time <= 0:
        raise ConfigurationError("frame_time must be positive and finite")
    if not math.isfinite(wavelength) or wavelength <= 0:
        raise ConfigurationError("wavelength must be positive and finite")
    return wavelength / (2.0 * num_chirps * (frame_time / num_chirps))


def bin_to_velocity(bin: int, total_bins: int, max_velocity: float) -> float:
    """Map a Doppler bin to m/s; bin `total_bins // 2` maps to zero."""
    if total_bins <= 0:
        raise ConfigurationError("total_bins must be positive")
    return ((bin - total_bins // 2) * 2.0 * max_velocity) / total_bins
