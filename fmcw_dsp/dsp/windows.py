"""Window functions used prior to FFT.

The choice of window influences leakage in the spectral domain.  This
module exposes a simple factory that returns numpy arrays for the
commonly used window types.  Windows are symmetric, so the Hamming
window is exactly `0.54 - 0.46*cos(2*pi*n/(N-1))` and a single-sample
window is `[1.0]`.
"""

from __future__ import annotations

import numpy as np
from scipy import signal

from ..errors import ConfigurationError


def get_window(name: str, length: int, normalise: bool = False, **kwargs: float) -> np.ndarray:
    """Return a window of a given type and length.

    Parameters
    ----------
    name : str
        The window type.  Supported values are 'hann', 'hamming',
        'blackman', 'chebwin' and 'rectangular'.
    length : int
        The number of samples in the window.
    normalise : bool, optional
        If True the window is scaled to a mean of one.  Defaults to
        False so that the raw textbook coefficients are returned.
    **kwargs : float
        Additional parameters.  The Chebyshev window accepts an `at`
        parameter defining the sidelobe attenuation in dB.

    Returns
    -------
    np.ndarray
        A one-dimensional float64 window of the requested type.
    """
    name = name.lower()
    if length <= 0:
        raise ConfigurationError("window length must be positive")
    if name in {"hann", "hanning"}:
        win = signal.windows.hann(length, sym=True)
    elif name == "hamming":
        win = signal.windows.hamming(length, sym=True)
    elif name == "blackman":
        win = signal.windows.blackman(length, sym=True)
    elif name == "chebwin":
        at = float(kwargs.get("at", 80.0))
        win = signal.windows.chebwin(length, at)
    elif name in {"rectangular", "rect", "none"}:
        win = np.ones(length)
    else:
        raise ConfigurationError(f"Unknown window type: {name}")
    win = np.asarray(win, dtype=np.float64)
    if normalise:
        mean_val = np.mean(win)
        if mean_val != 0:
            win = win / mean_val
    return win
