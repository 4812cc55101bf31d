"""Clutter suppression.

Two mechanisms are provided.  `mti_filter` is a two-pulse canceller
applied to one range bin of a pulse sequence.  `adaptive_clutter_suppression`
zeroes weak returns in the zero-Doppler column of a range-Doppler map,
the column where stationary clutter collects.
"""

from __future__ import annotations

import math

import numpy as np

from ..errors import ConfigurationError, InsufficientData
from .doppler import ProfileStack, check_bin, stack_profiles


def mti_filter(pulse_data: ProfileStack, range_bin: int) -> np.ndarray:
    """Two-pulse moving target indication canceller.

    Parameters
    ----------
    pulse_data : array-like
        Range profiles indexed `[pulse][range_bin]`.
    range_bin : int
        Range bin to filter.

    Returns
    -------
    np.ndarray
        Complex array of length `pulses - 1` with
        `out[p-1] = pulse_data[p][range_bin] - pulse_data[p-1][range_bin]`.
    """
    stacked = stack_profiles(pulse_data)
    if stacked.shape[0] < 2:
        raise InsufficientData(f"MTI needs at least 2 pulses, got {stacked.shape[0]}")
    range_bin = check_bin(range_bin, stacked.shape[1])
    return np.diff(stacked[:, range_bin])


def adaptive_clutter_suppression(range_doppler_map: ProfileStack, clutter_threshold: float = 0.1) -> np.ndarray:
    """Zero weak cells in the centre Doppler column.

    A cell is replaced by zero only when its velocity index equals
    `num_velocities // 2` and its magnitude is below `clutter_threshold`.
    Every other cell is copied unchanged.

    Parameters
    ----------
    range_doppler_map : array-like
        Complex map indexed `[range][velocity]`.
    clutter_threshold : float, optional
        Magnitude threshold.  Defaults to 0.1.

    Returns
    -------
    np.ndarray
        Flattened complex array in row-major order (range outer,
        velocity inner) with the same number of elements as the input.
    """
    if not math.isfinite(clutter_threshold) or clutter_threshold < 0:
        raise ConfigurationError("clutter_threshold must be non-negative and finite")
    rd = stack_profiles(range_doppler_map)
    if rd.shape[1] == 0:
        raise InsufficientData("range-Doppler map has no velocity bins")
    suppressed = rd.copy()
    centre = rd.shape[1] // 2
    weak = np.abs(rd[:, centre]) < clutter_threshold
    suppressed[weak, centre] = 0.0
    return suppressed.ravel()
