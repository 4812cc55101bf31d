"""Discrete Fourier transform shared by the range and Doppler stages.

Both stages use the same definition

    X[k] = sum_n x[n] * exp(-2j*pi*k*n/N)

with bin `k` corresponding to frequency `k * fs / N` (no shift).  Two
interchangeable implementations are provided: `'fft'` delegates to
`numpy.fft.fft` and `'direct'` evaluates the DFT matrix explicitly.
The direct form is O(N^2) and mainly useful as a reference in tests.
"""

from __future__ import annotations

import numpy as np

from ..errors import ConfigurationError, InsufficientData

METHODS = ("fft", "direct")


def dft_matrix(n: int) -> np.ndarray:
    """Return the `n x n` forward DFT matrix `W[k, m] = exp(-2j*pi*k*m/n)`."""
    idx = np.arange(n)
    return np.exp(-2j * np.pi * np.outer(idx, idx) / n)


def dft(x: np.ndarray, axis: int = -1, method: str = "fft") -> np.ndarray:
    """Transform `x` along `axis`.

    Parameters
    ----------
    x : np.ndarray
        Complex or real input of any rank.
    axis : int, optional
        Axis along which to transform.  Defaults to the last axis.
    method : str, optional
        `'fft'` (default) or `'direct'`.

    Returns
    -------
    np.ndarray
        A newly allocated complex128 array of the same shape as `x`.
    """
    x = np.asarray(x, dtype=np.complex128)
    if x.ndim == 0:
        raise InsufficientData("cannot transform a scalar")
    n = x.shape[axis]
    if n == 0:
        raise InsufficientData("cannot transform an empty signal")
    if method == "fft":
        return np.fft.fft(x, axis=axis)
    if method == "direct":
        moved = np.moveaxis(x, axis, -1)
        out = moved @ dft_matrix(n).T
        return np.moveaxis(out, -1, axis)
    raise ConfigurationError(f"Unknown transform method: {method}")
