"""Peak detection from range–Doppler maps.

This module glues CFAR detectors to complex range–Doppler maps.  The
main entry point `detect_peaks` converts the map to power, runs the
configured detector and returns detection coordinates together with
the noise estimate used for each cell.
"""

from __future__ import annotations

import logging
from typing import Dict, Tuple

import numpy as np

from ..dsp.cfar import cfar_from_config
from ..errors import DimensionMismatch

logger = logging.getLogger(__name__)


def detect_peaks(
    rd_map: np.ndarray,
    cfar_cfg: Dict[str, object] | None = None,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Detect peaks in a range–Doppler map and return their coordinates.

    Parameters
    ----------
    rd_map : np.ndarray
        Complex (or real amplitude) RD map of shape
        `(range_bins, velocity_bins)`.
    cfar_cfg : dict, optional
        Configuration for the CFAR detector.  See
        `fmcw_dsp.dsp.cfar.cfar_from_config` for details.  If `None`
        defaults to CA-CFAR with 2 guard and 8 training cells.

    Returns
    -------
    coords : np.ndarray
        Integer array of shape `(n_detections, 2)` with `(range, velocity)`
        indices into `rd_map`.
    mask : np.ndarray
        Boolean mask of shape equal to `rd_map` marking detection cells.
    noise : np.ndarray
        Noise power estimate per cell (NaN where CA-CFAR has no complete
        training window).
    """
    rd_map = np.asarray(rd_map)
    if rd_map.ndim != 2:
        raise DimensionMismatch("rd_map must be a 2D array")
    if cfar_cfg is None:
        cfar_cfg = {"method": "ca"}
    det, name = cfar_from_config(cfar_cfg)
    power = np.abs(rd_map) ** 2
    mask = det.detect(power)
    noise = det.noise_level(power)
    coords = np.column_stack(np.where(mask))
    logger.debug("%s found %d detections", name, coords.shape[0])
    return coords, mask, noise
