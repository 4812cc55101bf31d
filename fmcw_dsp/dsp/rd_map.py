"""Range–Doppler map computation.

The main entry point in this module is `compute_range_doppler_map`,
which matched-filters and range-transforms every chirp of a frame and
then applies the Doppler transform to every range bin.  The result is
range-major: rows are range bins and columns are velocity bins.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from ..errors import DimensionMismatch
from .chirp import matched_filter
from .doppler import stack_profiles
from .fft import dft
from .range_profile import range_fft

logger = logging.getLogger(__name__)


def magnitude_db(x: np.ndarray, eps: float = 1e-6) -> np.ndarray:
    """Compute magnitude of a complex array in decibels.

    Adds a small epsilon before taking the log to avoid log of zero.
    """
    return 20.0 * np.log10(np.abs(x) + eps)


def magnitude_linear(x: np.ndarray) -> np.ndarray:
    """Compute linear magnitude of a complex array."""
    return np.abs(x)


def compute_range_profiles(
    chirps: np.ndarray,
    reference: Optional[np.ndarray] = None,
    apply_window: bool = True,
    method: str = "fft",
) -> np.ndarray:
    """Range-process every chirp of a frame.

    Parameters
    ----------
    chirps : np.ndarray
        Raw samples of shape `(chirps, samples)`.
    reference : np.ndarray, optional
        Reference chirp.  When given, each chirp is matched-filtered
        against it before the range transform.
    apply_window : bool, optional
        Apply the Hamming window in the range transform.
    method : str, optional
        Transform implementation shared by all stages.

    Returns
    -------
    np.ndarray
        Complex range profiles of shape `(chirps, samples)`.
    """
    raw = stack_profiles(chirps)
    if reference is not None and np.asarray(reference).shape[-1] != raw.shape[1]:
        raise DimensionMismatch(
            f"reference length {np.asarray(reference).shape[-1]} does not match {raw.shape[1]} samples per chirp"
        )
    profiles = np.empty_like(raw)
    for i, chirp in enumerate(raw):
        if reference is not None:
            chirp = matched_filter(chirp, reference, method=method)
        profiles[i] = range_fft(chirp, apply_window=apply_window, method=method)
    logger.debug("range processed %d chirps of %d samples", raw.shape[0], raw.shape[1])
    return profiles


def compute_range_doppler_map(
    chirps: np.ndarray,
    reference: Optional[np.ndarray] = None,
    apply_window: bool = True,
    shift: bool = True,
    method: str = "fft",
) -> np.ndarray:
    """Compute the complex range–Doppler map of one frame.

    Column `v` of row `r` equals `doppler_fft(profiles, r)[v]`, where
    `profiles` is the output of `compute_range_profiles`.  With
    `shift=True` (default) the Doppler axis is `fftshift`-ed so that the
    centre column `velocity_bins // 2` holds zero velocity, matching
    `bin_to_velocity`.

    Returns
    -------
    np.ndarray
        Complex map of shape `(range_bins, velocity_bins)`.
    """
    profiles = compute_range_profiles(chirps, reference, apply_window=apply_window, method=method)
    # transform along the chirp axis, then transpose to range-major
    spectrum = dft(profiles, axis=0, method=method)
    if shift:
        spectrum = np.fft.fftshift(spectrum, axes=0)
    rd = np.ascontiguousarray(spectrum.T)
    logger.debug("range-Doppler map shape %s (shift=%s, method=%s)", rd.shape, shift, method)
    return rd
