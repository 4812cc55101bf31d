"""Constant false alarm rate (CFAR) detection algorithms.

This module implements CFAR mechanisms that produce a binary detection
mask from the power of a range–Doppler map.  Two approaches are
supported:

* **Percentile threshold**: selects all cells above a specified
  percentile of the global power distribution.

* **CA CFAR (cell-averaging)**: estimates the local noise power by
  averaging training cells in a square neighbourhood while excluding
  guard cells around the cell under test.  A cell is a detection when
  its power exceeds `threshold_factor` times that estimate.  Cells
  whose neighbourhood would leave the map are never detections.

Every detector exposes `noise_level(power)` in addition to
`detect(power)` so that callers can derive an SNR per detection.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np
from scipy.ndimage import uniform_filter

from ..errors import ConfigurationError, DimensionMismatch


def _check_map(power: np.ndarray) -> np.ndarray:
    power = np.asarray(power, dtype=np.float64)
    if power.ndim != 2:
        raise DimensionMismatch("CFAR expects a two-dimensional power map")
    return power


@dataclass
class PercentileCFAR:
    """Simple global threshold CFAR.

    Attributes
    ----------
    percentile : float
        Percentile of the power map used as the detection threshold.  A
        percentile of 99 corresponds to selecting the top 1% of cells.
    """

    percentile: float = 99.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.percentile <= 100.0:
            raise ConfigurationError("percentile must lie in [0, 100]")

    def noise_level(self, power: np.ndarray) -> np.ndarray:
        """Return the map median as a constant noise estimate."""
        power = _check_map(power)
        return np.full(power.shape, float(np.median(power)))

    def detect(self, power: np.ndarray) -> np.ndarray:
        """Return a boolean mask where True indicates a detection."""
        power = _check_map(power)
        thresh = np.percentile(power, self.percentile)
        return power > thresh


@dataclass
class CACFAR:
    """Cell averaging CFAR implementation.

    Parameters
    ----------
    guard_cells : int
        Number of guard cells on each side of the cell under test in
        both dimensions.  The guard region is a square of side
        `2*guard_cells+1`.
    training_cells : int
        Number of training cells beyond the guard region on each side.
        The complete window has side `2*(guard_cells+training_cells)+1`.
    threshold_factor : float
        Factor by which the local noise estimate is multiplied to obtain
        the detection threshold.
    """

    guard_cells: int = 2
    training_cells: int = 8
    threshold_factor: float = 2.5

    def __post_init__(self) -> None:
        if self.guard_cells < 0:
            raise ConfigurationError("guard_cells must be non-negative")
        if self.training_cells <= 0:
            raise ConfigurationError("training_cells must be positive")
        if self.threshold_factor <= 0:
            raise ConfigurationError("threshold_factor must be positive")

    @property
    def margin(self) -> int:
        """Cells excluded at every edge of the map."""
        return self.guard_cells + self.training_cells

    def noise_level(self, power: np.ndarray) -> np.ndarray:
        """Return the mean training-cell power around every cell.

        Cells closer than `margin` to an edge have no complete training
        window and are set to NaN.
        """
        power = _check_map(power)
        g = self.guard_cells
        m = self.margin
        win_size = 2 * m + 1
        guard_size = 2 * g + 1
        # window sums via box filters; only interior cells are kept, so
        # the boundary mode never influences the result
        sum_all = uniform_filter(power, size=win_size, mode="constant") * (win_size ** 2)
        sum_guard = uniform_filter(power, size=guard_size, mode="constant") * (guard_size ** 2)
        num_train = win_size ** 2 - guard_size ** 2
        noise = (sum_all - sum_guard) / num_train
        out = np.full(power.shape, np.nan)
        rows, cols = power.shape
        if rows > 2 * m and cols > 2 * m:
            out[m:rows - m, m:cols - m] = noise[m:rows - m, m:cols - m]
        return out

    def detect(self, power: np.ndarray) -> np.ndarray:
        """Return a detection mask using CA CFAR."""
        power = _check_map(power)
        noise = self.noise_level(power)
        mask = np.zeros(power.shape, dtype=bool)
        valid = ~np.isnan(noise)
        mask[valid] = power[valid] > self.threshold_factor * noise[valid]
        return mask


def cfar_from_config(cfg: dict) -> Tuple[object, str]:
    """Instantiate a CFAR detector from a configuration dictionary.

    The configuration may contain a `method` key.  Supported methods
    are `percentile` and `ca` (the default).  Additional keys are
    passed to the corresponding detector class.

    Returns the detector instance and a descriptive name.
    """
    method = str(cfg.get("method", "ca")).lower()
    if method == "percentile":
        percentile = float(cfg.get("percentile", 99.0))
        return PercentileCFAR(percentile), f"Percentile-{percentile:.1f}"
    elif method in {"ca", "cacfar"}:
        guard = int(cfg.get("guard_cells", 2))
        train = int(cfg.get("training_cells", 8))
        factor = float(cfg.get("threshold_factor", 2.5))
        return CACFAR(guard, train, factor), f"CA(g={guard},t={train},k={factor:.1f})"
    else:
        raise ConfigurationError(f"Unknown CFAR method: {method}")
