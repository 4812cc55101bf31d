"""Chirp synthesis and matched filtering.

An FMCW radar transmits a linear frequency sweep.  `generate_chirp`
produces the complex baseband reference for one sweep and
`matched_filter` correlates a received chirp against that reference.
The reference is generated once per configuration and reused for every
chirp of a frame.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
from scipy import signal

from ..errors import ConfigurationError, DimensionMismatch, InsufficientData

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChirpParameters:
    """Parameters of a linear chirp.

    Attributes
    ----------
    start_frequency : float
        Frequency at the start of the sweep in Hz.  May be zero.
    bandwidth : float
        Swept bandwidth in Hz.
    chirp_duration : float
        Duration of the sweep in seconds.
    sample_rate : float
        ADC sampling rate in Hz.
    samples_per_chirp : int
        Number of samples generated for one sweep.
    """

    start_frequency: float
    bandwidth: float
    chirp_duration: float
    sample_rate: float
    samples_per_chirp: int

    def __post_init__(self) -> None:
        for name in ("start_frequency", "bandwidth", "chirp_duration", "sample_rate"):
            value = float(getattr(self, name))
            if not math.isfinite(value):
                raise ConfigurationError(f"{name} must be finite, got {value}")
        if self.start_frequency < 0:
            raise ConfigurationError("start_frequency must be non-negative")
        if self.bandwidth <= 0:
            raise ConfigurationError("bandwidth must be positive")
        if self.chirp_duration <= 0:
            raise ConfigurationError("chirp_duration must be positive")
        if self.sample_rate <= 0:
            raise ConfigurationError("sample_rate must be positive")
        count = float(self.samples_per_chirp)
        if not math.isfinite(count) or count != int(count) or count <= 0:
            raise ConfigurationError("samples_per_chirp must be a positive integer")

    @property
    def slope(self) -> float:
        """Chirp rate in Hz per second."""
        return self.bandwidth / self.chirp_duration


def generate_chirp(params: ChirpParameters) -> np.ndarray:
    """Generate the complex reference chirp.

    Sample `i` is taken at `t_i = i / sample_rate` and has phase
    `2*pi*(f0*t_i + 0.5*slope*t_i**2)`, the integral of the linear
    instantaneous frequency `f0 + slope*t`.  Every sample has unit
    magnitude.

    Returns
    -------
    np.ndarray
        Complex128 array of length `samples_per_chirp`.
    """
    t = np.arange(int(params.samples_per_chirp)) / params.sample_rate
    phase = 2.0 * np.pi * (params.start_frequency * t + 0.5 * params.slope * t ** 2)
    return np.exp(1j * phase)


def matched_filter(
    received: np.ndarray,
    reference: np.ndarray,
    method: str = "fft",
    mismatch: str = "raise",
) -> np.ndarray:
    """Correlate a received chirp with the reference waveform.

    The output has the same length `N` as `received`:

        out[n] = sum_k received[n - k] * conj(reference[k])

    summed over the `k` for which `0 <= n - k < N`.  This is the first
    `N` samples of the linear convolution of `received` with the
    conjugated reference.

    Parameters
    ----------
    received : np.ndarray
        Received complex samples for one chirp.
    reference : np.ndarray
        Reference chirp, normally the output of `generate_chirp`.
    method : str, optional
        `'fft'` (default) uses `scipy.signal.fftconvolve`; `'direct'`
        uses `numpy.convolve`.  Both agree to floating point tolerance.
    mismatch : str, optional
        Policy when the lengths differ.  `'raise'` (default) raises
        `DimensionMismatch`.  `'fit'` zero-pads or truncates the
        reference to the received length first.

    Returns
    -------
    np.ndarray
        Complex128 array of the same length as `received`.
    """
    received = np.asarray(received, dtype=np.complex128)
    reference = np.asarray(reference, dtype=np.complex128)
    if received.ndim != 1 or reference.ndim != 1:
        raise DimensionMismatch("matched_filter expects one-dimensional signals")
    n = received.shape[0]
    if n == 0:
        raise InsufficientData("received signal is empty")
    if reference.shape[0] != n:
        if mismatch == "raise":
            raise DimensionMismatch(
                f"received has {n} samples but reference has {reference.shape[0]}"
            )
        if mismatch != "fit":
            raise ConfigurationError(f"Unknown mismatch policy: {mismatch}")
        logger.debug("fitting reference of length %d to %d samples", reference.shape[0], n)
        fitted = np.zeros(n, dtype=np.complex128)
        m = min(n, reference.shape[0])
        fitted[:m] = reference[:m]
        reference = fitted
    kernel = np.conj(reference)
    if method == "fft":
        full = signal.fftconvolve(received, kernel, mode="full")
    elif method == "direct":
        full = np.convolve(received, kernel, mode="full")
    else:
        raise ConfigurationError(f"Unknown matched filter method: {method}")
    return np.array(full[:n], dtype=np.complex128)
